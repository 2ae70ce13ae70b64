# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from collections.abc import Iterator
from contextlib import contextmanager
from threading import Lock, RLock

from techquiry.domain.logins.entities import Authentication
from techquiry.domain.logins.repositories import AuthenticationHolder
from techquiry.shared.logging import logger


class SessionAuthenticationSlot(AuthenticationHolder):
    """Holds at most one :class:`Authentication` for one session.

    Reads and writes are atomic. ``locked()`` keeps the slot for a whole
    read-then-write transition; the lock is reentrant so the accessors can
    be called inside it.
    """

    def __init__(self) -> None:
        self._lock = RLock()
        self._authentication: Authentication | None = None
        self._touched_at = time.monotonic()

    @property
    def touched_at(self) -> float:
        return self._touched_at

    def get_authentication(self) -> Authentication | None:
        with self._lock:
            return self._authentication

    def set_authentication(self, authentication: Authentication | None) -> None:
        with self._lock:
            self._authentication = authentication

    @contextmanager
    def locked(self) -> Iterator[None]:
        with self._lock:
            yield

    def touch(self) -> None:
        self._touched_at = time.monotonic()


class SessionSlotRegistry:
    """Server side slots keyed by the opaque session id of the HTTP layer."""

    def __init__(self, idle_timeout: float) -> None:
        self._idle_timeout = max(1.0, float(idle_timeout))
        self._slots: dict[str, SessionAuthenticationSlot] = {}
        self._lock = Lock()

    def slot_for(self, session_id: str) -> SessionAuthenticationSlot:
        with self._lock:
            self._purge_idle()
            slot = self._slots.get(session_id)
            if slot is None:
                slot = SessionAuthenticationSlot()
                self._slots[session_id] = slot
            slot.touch()
            return slot

    def discard(self, session_id: str) -> None:
        with self._lock:
            self._slots.pop(session_id, None)

    def __len__(self) -> int:
        with self._lock:
            return len(self._slots)

    def _purge_idle(self) -> None:
        cutoff = time.monotonic() - self._idle_timeout
        expired = [sid for sid, slot in self._slots.items() if slot.touched_at < cutoff]
        for sid in expired:
            del self._slots[sid]
        if expired:
            logger.debug(f"sessions: purged {len(expired)} idle slots")


__all__ = ["SessionAuthenticationSlot", "SessionSlotRegistry"]
