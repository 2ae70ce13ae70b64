# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .exceptions import DomainError, InvariantViolationError
from .logins import Authentication, LoginRecord, PasswordDigest

__all__ = [
    "Authentication",
    "DomainError",
    "InvariantViolationError",
    "LoginRecord",
    "PasswordDigest",
]
