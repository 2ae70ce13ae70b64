# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from functools import cached_property

from sqlalchemy.engine import Engine
from sqlalchemy.orm import Session

from techquiry.application.services.password_hashing import SaltedDigestPasswordHasher
from techquiry.application.use_cases.logins import (
    AuthenticateUserUseCase,
    CreateLoginUseCase,
    DeleteLoginUseCase,
    GetCurrentLoginUseCase,
    LogoutUserUseCase,
    UpdateLoginUseCase,
)
from techquiry.infrastructure.audit import AuditLogger
from techquiry.infrastructure.db import ENGINE, SessionLocal
from techquiry.infrastructure.repositories.logins.sqlalchemy_login_repository import (
    SqlAlchemyLoginRepository,
)
from techquiry.infrastructure.session.slots import SessionSlotRegistry
from techquiry.interfaces.http.controllers.login_controller import LoginController
from techquiry.interfaces.http.controllers.misc_controller import MiscController
from techquiry.shared.config import AppConfig, load_config


class Container:
    def __init__(
        self,
        *,
        engine: Engine | None = None,
        session_factory: Callable[[], Session] | None = None,
        config: AppConfig | None = None,
    ) -> None:
        self.engine = engine or ENGINE
        self.session_factory = session_factory or SessionLocal
        self.config = config or load_config()

    @cached_property
    def password_hasher(self) -> SaltedDigestPasswordHasher:
        return SaltedDigestPasswordHasher(
            algorithm=self.config.hashing.algorithm,
            salt_length=self.config.hashing.salt_length,
        )

    @cached_property
    def login_repository(self) -> SqlAlchemyLoginRepository:
        return SqlAlchemyLoginRepository(self.session_factory)

    @cached_property
    def session_registry(self) -> SessionSlotRegistry:
        return SessionSlotRegistry(idle_timeout=self.config.security.session_lifetime)

    @cached_property
    def audit_logger(self) -> AuditLogger:
        return AuditLogger(self.session_factory)

    @cached_property
    def create_login_use_case(self) -> CreateLoginUseCase:
        return CreateLoginUseCase(logins=self.login_repository)

    @cached_property
    def delete_login_use_case(self) -> DeleteLoginUseCase:
        return DeleteLoginUseCase(logins=self.login_repository)

    @cached_property
    def update_login_use_case(self) -> UpdateLoginUseCase:
        return UpdateLoginUseCase(logins=self.login_repository)

    @cached_property
    def authenticate_user_use_case(self) -> AuthenticateUserUseCase:
        return AuthenticateUserUseCase(
            logins=self.login_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase()

    @cached_property
    def get_current_login_use_case(self) -> GetCurrentLoginUseCase:
        return GetCurrentLoginUseCase(logins=self.login_repository)

    @cached_property
    def login_controller(self) -> LoginController:
        return LoginController(
            create_login=self.create_login_use_case,
            delete_login=self.delete_login_use_case,
            update_login=self.update_login_use_case,
            authenticate_user=self.authenticate_user_use_case,
            logout_user=self.logout_user_use_case,
            get_current_login=self.get_current_login_use_case,
            password_hasher=self.password_hasher,
            sessions=self.session_registry,
            audit=self.audit_logger,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(engine=self.engine)
