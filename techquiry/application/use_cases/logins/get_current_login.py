# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from techquiry.domain.logins.entities import LoginRecord
from techquiry.domain.logins.repositories import AuthenticationHolder, LoginRepository
from techquiry.shared.errors.base import (
    EntityNotFoundError,
    ForbiddenOperationError,
    InternalError,
    StorageError,
)


class GetCurrentLoginUseCase:
    def __init__(self, *, logins: LoginRepository) -> None:
        self._logins = logins

    def execute(self, session: AuthenticationHolder) -> LoginRecord:
        current = session.get_authentication()
        if current is None:
            raise ForbiddenOperationError("Reading the current user without a session is forbidden!")
        try:
            login = self._logins.select_by_id(current.user_id)
        except StorageError as exc:
            raise InternalError("An internal error occured while getting the user!") from exc
        if login is None:
            raise EntityNotFoundError("The requested user does not exist!")
        return login
