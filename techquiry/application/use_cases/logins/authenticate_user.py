# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets

from techquiry.domain.logins.entities import Authentication
from techquiry.domain.logins.repositories import (
    AuthenticationHolder,
    LoginRepository,
    PasswordHasher,
)
from techquiry.shared.errors.base import (
    ForbiddenOperationError,
    InternalError,
    InvalidRequestError,
    StorageError,
)
from techquiry.shared.logging import logger

# Shared by unknown usernames and wrong passwords.
INVALID_CREDENTIALS = "The username or password is incorrect!"


class AuthenticateUserUseCase:
    def __init__(self, *, logins: LoginRepository, password_hasher: PasswordHasher) -> None:
        self._logins = logins
        self._password_hasher = password_hasher
        # stands in for the stored digest of unknown usernames
        self._decoy = password_hasher.hash(secrets.token_urlsafe(16))

    def authorize(self, session: AuthenticationHolder) -> None:
        if session.get_authentication() is not None:
            raise ForbiddenOperationError("Logging in with an active session is forbidden!")

    def execute(self, session: AuthenticationHolder, username: str, password: str) -> None:
        with session.locked():
            self.authorize(session)
            try:
                login = self._logins.select_by_username(username)
            except StorageError as exc:
                raise InternalError("An internal error occured while authenticating!") from exc
            stored = (
                (login.password_salt, login.password_hash)
                if login is not None
                else (self._decoy.salt, self._decoy.hash)
            )
            if not self._password_hasher.verify(password, *stored) or login is None:
                logger.warning(f"logins.authenticate: invalid credentials for {username}")
                raise InvalidRequestError(INVALID_CREDENTIALS)
            session.set_authentication(Authentication(user_id=login.id))

        logger.info(f"logins.authenticate: ok id={login.id}")
