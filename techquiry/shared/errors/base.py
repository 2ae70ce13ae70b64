# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from http import HTTPStatus
from typing import Any


@dataclass(slots=True)
class AppError(Exception):
    code: str
    status: HTTPStatus
    context: Mapping[str, Any] | None = None

    def __post_init__(self) -> None:
        Exception.__init__(self, self.code)

    def to_dict(self) -> dict[str, Any]:
        payload: dict[str, Any] = {"error": self.code}
        if self.context:
            payload["context"] = dict(self.context)
        return payload


class InfrastructureError(AppError):
    def __init__(
        self,
        code: str = "infrastructure_error",
        *,
        status: HTTPStatus | None = None,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        resolved_status = status or HTTPStatus.INTERNAL_SERVER_ERROR
        super().__init__(code=code, status=resolved_status, context=context)


class ValidationError(AppError):
    def __init__(
        self,
        code: str = "validation_error",
        *,
        context: Mapping[str, Any] | None = None,
    ) -> None:
        super().__init__(
            code=code,
            status=HTTPStatus.UNPROCESSABLE_ENTITY,
            context=context,
        )


class ConfigurationError(InfrastructureError):
    """Raised when the environment holds an invalid configuration."""

    def __init__(self, message: str) -> None:
        super().__init__("configuration_error")
        self.message = message

    def __str__(self) -> str:
        return self.message


class SchemaInitializationError(InfrastructureError):
    """Raised when the database schema cannot be created."""

    def __init__(self, message: str) -> None:
        super().__init__("schema_initialization_error")
        self.message = message

    def __str__(self) -> str:
        return self.message


class StorageError(InfrastructureError):
    """Any failure at the login store boundary."""

    def __init__(self, message: str, *, code: str = "storage_error") -> None:
        super().__init__(code)
        self.message = message

    def __str__(self) -> str:
        return self.message


class DuplicateUsernameError(StorageError):
    def __init__(self, username: str) -> None:
        super().__init__(
            f"username {username!r} violates the unique constraint",
            code="duplicate_username",
        )
        self.username = username


class ServiceError(AppError):
    """Base of the errors surfaced by the login use cases.

    Every service error carries a human readable ``message`` next to its
    machine readable ``code``.
    """

    code: str = "service_error"
    status: HTTPStatus = HTTPStatus.BAD_REQUEST

    def __init__(self, message: str, *, context: Mapping[str, Any] | None = None) -> None:
        cls = type(self)
        super().__init__(code=cls.code, status=cls.status, context=context)
        self.message = message

    def __str__(self) -> str:
        return self.message

    def to_dict(self) -> dict[str, Any]:
        payload = super().to_dict()
        payload["message"] = self.message
        return payload


class ForbiddenOperationError(ServiceError):
    code = "forbidden_operation"
    status = HTTPStatus.FORBIDDEN


class InvalidRequestError(ServiceError):
    code = "invalid_request"
    status = HTTPStatus.BAD_REQUEST


class EntityNotFoundError(ServiceError):
    code = "entity_not_found"
    status = HTTPStatus.NOT_FOUND


class InternalError(ServiceError):
    code = "internal_error"
    status = HTTPStatus.INTERNAL_SERVER_ERROR

    def to_dict(self) -> dict[str, Any]:
        return {"error": self.code}
