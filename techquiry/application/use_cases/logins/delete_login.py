# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from techquiry.domain.logins.repositories import AuthenticationHolder, LoginRepository
from techquiry.shared.errors.base import (
    EntityNotFoundError,
    ForbiddenOperationError,
    InternalError,
    StorageError,
)
from techquiry.shared.logging import logger


class DeleteLoginUseCase:
    """Deletes the login the session is authenticated as."""

    def __init__(self, *, logins: LoginRepository) -> None:
        self._logins = logins

    def execute(self, session: AuthenticationHolder) -> None:
        with session.locked():
            current = session.get_authentication()
            if current is None:
                raise ForbiddenOperationError("The requested user deletion is forbidden!")
            login_id = current.user_id
            try:
                if self._logins.select_by_id(login_id) is None:
                    raise EntityNotFoundError("The requested user does not exist!")
                # Cleared before the delete: a failed delete leaves the session logged out.
                session.set_authentication(None)
                self._logins.delete(login_id)
            except StorageError as exc:
                raise InternalError("An internal error occured while deleting the user!") from exc

        logger.info(f"logins.delete: ok id={login_id}")
