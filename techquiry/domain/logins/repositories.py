# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from contextlib import AbstractContextManager
from typing import Protocol

from .entities import Authentication, LoginRecord, PasswordDigest


class LoginRepository(Protocol):
    def select_by_id(self, login_id: int) -> LoginRecord | None: ...
    def select_by_username(self, username: str) -> LoginRecord | None: ...
    def insert(self, login: LoginRecord) -> int: ...
    def update(self, login: LoginRecord) -> None: ...
    def delete(self, login_id: int) -> None: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> PasswordDigest: ...
    def verify(self, password: str, salt: bytes, expected_hash: bytes) -> bool: ...


class AuthenticationHolder(Protocol):
    def get_authentication(self) -> Authentication | None: ...
    def set_authentication(self, authentication: Authentication | None) -> None: ...
    def locked(self) -> AbstractContextManager[None]: ...
