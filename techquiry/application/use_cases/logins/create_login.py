# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from techquiry.domain.logins.entities import LoginRecord
from techquiry.domain.logins.repositories import AuthenticationHolder, LoginRepository
from techquiry.domain.logins.rules import matches_username_pattern
from techquiry.shared.errors.base import (
    DuplicateUsernameError,
    ForbiddenOperationError,
    InternalError,
    InvalidRequestError,
    StorageError,
)
from techquiry.shared.logging import logger

USERNAME_INVALID = "The given username does not abide by the requirements!"
USERNAME_UNAVAILABLE = "The given username is not available!"


class CreateLoginUseCase:
    def __init__(self, *, logins: LoginRepository) -> None:
        self._logins = logins

    def authorize(self, session: AuthenticationHolder) -> None:
        """Reject an authenticated session before any validation or lookup."""

        if session.get_authentication() is not None:
            logger.warning("logins.create: rejected, session is authenticated")
            raise ForbiddenOperationError("Creating users while logged-in is forbidden!")

    def execute(self, session: AuthenticationHolder, candidate: LoginRecord) -> int:
        """Store ``candidate`` and return its new id.

        The session is left anonymous; logging in is a separate step.
        """

        with session.locked():
            self.authorize(session)
            if not matches_username_pattern(candidate.username):
                raise InvalidRequestError(USERNAME_INVALID)
            try:
                if self._logins.select_by_username(candidate.username) is not None:
                    raise InvalidRequestError(USERNAME_UNAVAILABLE)
                login_id = self._logins.insert(candidate)
            except DuplicateUsernameError as exc:
                logger.warning(f"logins.create: lost username race for {candidate.username}")
                raise InvalidRequestError(USERNAME_UNAVAILABLE) from exc
            except StorageError as exc:
                raise InternalError("An internal error occured while creating the user!") from exc

        logger.info(f"logins.create: ok id={login_id} username={candidate.username}")
        return login_id
