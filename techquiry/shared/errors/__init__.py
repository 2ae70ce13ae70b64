from .base import (
    AppError,
    ConfigurationError,
    DuplicateUsernameError,
    EntityNotFoundError,
    ForbiddenOperationError,
    InfrastructureError,
    InternalError,
    InvalidRequestError,
    SchemaInitializationError,
    ServiceError,
    StorageError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "ConfigurationError",
    "DuplicateUsernameError",
    "EntityNotFoundError",
    "ForbiddenOperationError",
    "InfrastructureError",
    "InternalError",
    "InvalidRequestError",
    "SchemaInitializationError",
    "ServiceError",
    "StorageError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
