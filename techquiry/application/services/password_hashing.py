"""Password hashing strategies."""

from __future__ import annotations

import hashlib
import hmac
import secrets

from techquiry.domain.logins.entities import PasswordDigest
from techquiry.domain.logins.repositories import PasswordHasher


class SaltedDigestPasswordHasher(PasswordHasher):
    """Hashes ``salt || utf8(password)`` with a named :mod:`hashlib` algorithm."""

    def __init__(self, algorithm: str = "sha256", salt_length: int = 16) -> None:
        hashlib.new(algorithm)
        self._algorithm = algorithm
        self._salt_length = salt_length

    @property
    def algorithm(self) -> str:
        return self._algorithm

    def digest(self, password: str, salt: bytes) -> bytes:
        hasher = hashlib.new(self._algorithm)
        hasher.update(salt)
        hasher.update(password.encode("utf-8"))
        return hasher.digest()

    def hash(self, password: str) -> PasswordDigest:
        salt = secrets.token_bytes(self._salt_length)
        return PasswordDigest(hash=self.digest(password, salt), salt=salt)

    def verify(self, password: str, salt: bytes, expected_hash: bytes) -> bool:
        return hmac.compare_digest(self.digest(password, salt), expected_hash)
