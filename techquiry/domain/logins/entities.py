# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Login records and the per-session authentication marker."""

from __future__ import annotations

from dataclasses import dataclass, field

from techquiry.domain.exceptions import InvariantViolationError


@dataclass(slots=True)
class LoginRecord:
    """Stored identity and credential material of one account.

    ``id`` is ``None`` until the store assigns one. ``password_hash`` and
    ``password_salt`` are only ever replaced together.
    """

    id: int | None
    username: str
    password_hash: bytes = field(repr=False)
    password_salt: bytes = field(repr=False)

    def __post_init__(self) -> None:
        for name in ("username", "password_hash", "password_salt"):
            if getattr(self, name) is None:
                raise InvariantViolationError("login information must not be None", field=name)

    @classmethod
    def candidate(cls, username: str, digest: PasswordDigest) -> LoginRecord:
        return cls(
            id=None,
            username=username,
            password_hash=digest.hash,
            password_salt=digest.salt,
        )

    def with_id(self, login_id: int) -> LoginRecord:
        return LoginRecord(
            id=login_id,
            username=self.username,
            password_hash=self.password_hash,
            password_salt=self.password_salt,
        )


@dataclass(slots=True, frozen=True)
class PasswordDigest:
    hash: bytes = field(repr=False)
    salt: bytes = field(repr=False)


@dataclass(slots=True, frozen=True)
class Authentication:
    """Marks a session as logged in as ``user_id``."""

    user_id: int
