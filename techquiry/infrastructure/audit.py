# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Audit trail of the login lifecycle.

Events go to the application log first and are then stored in
``audit_logs``. Storing is best effort: a database failure is logged and
never fails the request that produced the event.
"""

from __future__ import annotations

import json
from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from techquiry.infrastructure.db.models import AuditLog
from techquiry.infrastructure.unit_of_work import unit_of_work_scope
from techquiry.shared.logging import logger


class AuditAction(str, Enum):
    REGISTER = "register"
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"
    ACCOUNT_UPDATED = "account_updated"
    ACCOUNT_DELETED = "account_deleted"


_REDACT_KEY_PARTS = ("password", "hash", "salt", "token", "secret", "sid")


@dataclass(slots=True, frozen=True)
class AuditEvent:
    action: AuditAction
    user_id: int | None
    ip_address: str | None
    success: bool
    details: Mapping[str, Any] = field(default_factory=dict)
    occurred_at: datetime = field(default_factory=lambda: datetime.now(UTC))

    @classmethod
    def redacted(
        cls, action: AuditAction, details: Mapping[str, Any] | None, **kwargs: Any
    ) -> AuditEvent:
        safe = {}
        for key, value in (details or {}).items():
            sensitive = any(part in key.lower() for part in _REDACT_KEY_PARTS)
            safe[key] = "***REDACTED***" if sensitive else value
        return cls(action=action, details=safe, **kwargs)

    def describe(self) -> str:
        text = (
            f"AUDIT {self.action.value}: user_id={self.user_id} "
            f"ip={self.ip_address} success={self.success}"
        )
        if self.details:
            text += f" details={dict(self.details)}"
        return text


class AuditLogger:
    def __init__(self, session_factory: Callable[[], Session]) -> None:
        self._session_factory = session_factory

    def log(
        self,
        action: AuditAction,
        *,
        user_id: int | None = None,
        ip_address: str | None = None,
        details: Mapping[str, Any] | None = None,
        success: bool = True,
    ) -> AuditEvent:
        event = AuditEvent.redacted(
            action, details, user_id=user_id, ip_address=ip_address, success=success
        )
        logger.log("INFO" if success else "WARNING", event.describe())
        self._store(event)
        return event

    def _store(self, event: AuditEvent) -> None:
        row = AuditLog(
            timestamp=event.occurred_at,
            action=event.action.value,
            user_id=event.user_id,
            ip_address=event.ip_address,
            success=event.success,
            details_json=json.dumps(dict(event.details)) if event.details else None,
        )
        try:
            with unit_of_work_scope(self._session_factory) as session:
                session.add(row)
        except SQLAlchemyError as exc:
            logger.warning(f"audit: could not store {event.action.value}: {type(exc).__name__}")


__all__ = ["AuditAction", "AuditEvent", "AuditLogger"]
