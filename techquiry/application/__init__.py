# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .services.password_hashing import SaltedDigestPasswordHasher
from .use_cases.logins import (
    AuthenticateUserUseCase,
    CreateLoginUseCase,
    DeleteLoginUseCase,
    GetCurrentLoginUseCase,
    LogoutUserUseCase,
    UpdateLoginUseCase,
)

__all__ = [
    "AuthenticateUserUseCase",
    "CreateLoginUseCase",
    "DeleteLoginUseCase",
    "GetCurrentLoginUseCase",
    "LogoutUserUseCase",
    "SaltedDigestPasswordHasher",
    "UpdateLoginUseCase",
]
