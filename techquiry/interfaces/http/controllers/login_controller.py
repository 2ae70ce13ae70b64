# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, jsonify, request
from pydantic import BaseModel, ValidationError

from techquiry.application.use_cases.logins import (
    AuthenticateUserUseCase,
    CreateLoginUseCase,
    DeleteLoginUseCase,
    GetCurrentLoginUseCase,
    LogoutUserUseCase,
    UpdateLoginUseCase,
)
from techquiry.domain.logins.entities import LoginRecord
from techquiry.domain.logins.repositories import PasswordHasher
from techquiry.infrastructure.audit import AuditAction, AuditLogger
from techquiry.infrastructure.session.slots import SessionAuthenticationSlot, SessionSlotRegistry
from techquiry.interfaces.http.dto.logins import (
    AuthenticateRequestDTO,
    CreateLoginRequestDTO,
    LoginCreatedDTO,
    LoginDTO,
    OkDTO,
    UpdateLoginRequestDTO,
)
from techquiry.interfaces.http.session import current_slot, rotate_session_id
from techquiry.shared.errors.base import AppError
from techquiry.shared.errors.validation import raise_validation_error
from techquiry.shared.logging import logger
from techquiry.shared.middleware.csrf import csrf_protect
from techquiry.shared.middleware.rate_limit import rate_limit


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


def _parse(dto_type: type[BaseModel]):
    try:
        return dto_type.model_validate(request.get_json(silent=True) or {})
    except ValidationError as exc:
        raise_validation_error(exc)


def _ok() -> tuple[Response, int]:
    return jsonify(OkDTO().model_dump()), 200


class LoginController:
    def __init__(
        self,
        *,
        create_login: CreateLoginUseCase,
        delete_login: DeleteLoginUseCase,
        update_login: UpdateLoginUseCase,
        authenticate_user: AuthenticateUserUseCase,
        logout_user: LogoutUserUseCase,
        get_current_login: GetCurrentLoginUseCase,
        password_hasher: PasswordHasher,
        sessions: SessionSlotRegistry,
        audit: AuditLogger,
    ) -> None:
        self._create_login = create_login
        self._delete_login = delete_login
        self._update_login = update_login
        self._authenticate_user = authenticate_user
        self._logout_user = logout_user
        self._get_current_login = get_current_login
        self._password_hasher = password_hasher
        self._sessions = sessions
        self._audit = audit

    def _slot(self) -> SessionAuthenticationSlot:
        return current_slot(self._sessions)

    @rate_limit(limit=5, window_seconds=60.0)
    @csrf_protect
    def create(self) -> tuple[Response, int]:
        slot = self._slot()
        self._create_login.authorize(slot)
        dto = _parse(CreateLoginRequestDTO)
        candidate = LoginRecord.candidate(dto.username, self._password_hasher.hash(dto.password))

        login_id = self._create_login.execute(slot, candidate)

        self._audit.log(
            AuditAction.REGISTER,
            user_id=login_id,
            ip_address=_get_client_ip(),
            details={"username": dto.username},
        )
        return jsonify(LoginCreatedDTO(id=login_id).model_dump()), 201

    @rate_limit(limit=10, window_seconds=60.0)
    @csrf_protect
    def authenticate(self) -> tuple[Response, int]:
        slot = self._slot()
        self._authenticate_user.authorize(slot)
        dto = _parse(AuthenticateRequestDTO)
        ip_address = _get_client_ip()

        try:
            self._authenticate_user.execute(slot, dto.username, dto.password)
        except AppError as exc:
            self._audit.log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"username": dto.username, "error": exc.code},
                success=False,
            )
            raise

        slot = rotate_session_id(self._sessions, slot)
        authentication = slot.get_authentication()
        self._audit.log(
            AuditAction.LOGIN_SUCCESS,
            user_id=authentication.user_id if authentication else None,
            ip_address=ip_address,
            details={"username": dto.username},
        )
        return _ok()

    @csrf_protect
    def logout(self) -> tuple[Response, int]:
        slot = self._slot()
        authentication = slot.get_authentication()

        self._logout_user.execute(slot)

        self._audit.log(
            AuditAction.LOGOUT,
            user_id=authentication.user_id if authentication else None,
            ip_address=_get_client_ip(),
        )
        return _ok()

    def current(self) -> tuple[Response, int]:
        login = self._get_current_login.execute(self._slot())
        return jsonify(LoginDTO(id=login.id, username=login.username).model_dump()), 200

    @csrf_protect
    def update(self, login_id: int) -> tuple[Response, int]:
        slot = self._slot()
        self._update_login.authorize(slot, login_id)
        dto = _parse(UpdateLoginRequestDTO)
        digest = self._password_hasher.hash(dto.password)
        login = LoginRecord.candidate(dto.username, digest).with_id(login_id)

        self._update_login.execute(slot, login)

        self._audit.log(
            AuditAction.ACCOUNT_UPDATED,
            user_id=login_id,
            ip_address=_get_client_ip(),
            details={"username": dto.username},
        )
        return _ok()

    @csrf_protect
    def delete(self) -> tuple[Response, int]:
        slot = self._slot()
        authentication = slot.get_authentication()

        self._delete_login.execute(slot)

        self._audit.log(
            AuditAction.ACCOUNT_DELETED,
            user_id=authentication.user_id if authentication else None,
            ip_address=_get_client_ip(),
        )
        logger.info("logins.http: account deleted, session is anonymous")
        return _ok()

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("logins", __name__, url_prefix="/api/logins")
        bp.add_url_rule("", view_func=self.create, methods=["POST"])
        bp.add_url_rule("/session", view_func=self.authenticate, methods=["POST"])
        bp.add_url_rule("/session", view_func=self.logout, methods=["DELETE"])
        bp.add_url_rule("/me", view_func=self.current, methods=["GET"])
        bp.add_url_rule("/me", view_func=self.delete, methods=["DELETE"])
        bp.add_url_rule("/<int:login_id>", view_func=self.update, methods=["PUT"])
        return bp
