"""Use-case for ending the authenticated state of a session."""

from __future__ import annotations

from techquiry.domain.logins.repositories import AuthenticationHolder
from techquiry.shared.errors.base import ForbiddenOperationError
from techquiry.shared.logging import logger


class LogoutUserUseCase:
    def execute(self, session: AuthenticationHolder) -> None:
        with session.locked():
            current = session.get_authentication()
            if current is None:
                raise ForbiddenOperationError("Logging out with no active session is forbidden!")
            session.set_authentication(None)
        logger.info(f"logins.logout: ok id={current.user_id}")
