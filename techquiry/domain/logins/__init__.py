# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import Authentication, LoginRecord, PasswordDigest
from .repositories import AuthenticationHolder, LoginRepository, PasswordHasher
from .rules import USERNAME_REGEX, matches_username_pattern

__all__ = [
    "Authentication",
    "AuthenticationHolder",
    "LoginRecord",
    "LoginRepository",
    "PasswordDigest",
    "PasswordHasher",
    "USERNAME_REGEX",
    "matches_username_pattern",
]
