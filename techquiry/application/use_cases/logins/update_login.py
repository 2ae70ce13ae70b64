# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from techquiry.domain.logins.entities import LoginRecord
from techquiry.domain.logins.repositories import AuthenticationHolder, LoginRepository
from techquiry.domain.logins.rules import matches_username_pattern
from techquiry.shared.errors.base import (
    DuplicateUsernameError,
    EntityNotFoundError,
    ForbiddenOperationError,
    InternalError,
    InvalidRequestError,
    StorageError,
)
from techquiry.shared.logging import logger

from .create_login import USERNAME_INVALID, USERNAME_UNAVAILABLE


class UpdateLoginUseCase:
    def __init__(self, *, logins: LoginRepository) -> None:
        self._logins = logins

    def authorize(self, session: AuthenticationHolder, login_id: int | None) -> None:
        current = session.get_authentication()
        if current is None or login_id is None or current.user_id != login_id:
            logger.warning(f"logins.update: rejected for id={login_id}")
            raise ForbiddenOperationError("The requested user update is forbidden!")

    def execute(self, session: AuthenticationHolder, login: LoginRecord) -> None:
        """Replace username and credentials of the session's own login."""

        with session.locked():
            self.authorize(session, login.id)
            if not matches_username_pattern(login.username):
                raise InvalidRequestError(USERNAME_INVALID)
            try:
                if self._logins.select_by_id(login.id) is None:
                    raise EntityNotFoundError("The requested user does not exist!")
                holder = self._logins.select_by_username(login.username)
                if holder is not None and holder.id != login.id:
                    raise InvalidRequestError(USERNAME_UNAVAILABLE)
                self._logins.update(login)
            except DuplicateUsernameError as exc:
                raise InvalidRequestError(USERNAME_UNAVAILABLE) from exc
            except StorageError as exc:
                raise InternalError("An internal error occured while updating the user!") from exc

        logger.info(f"logins.update: ok id={login.id} username={login.username}")
