from __future__ import annotations

import threading
import time

from techquiry.application.services.password_hashing import SaltedDigestPasswordHasher
from techquiry.application.use_cases.logins import AuthenticateUserUseCase, LogoutUserUseCase
from techquiry.domain.logins.entities import Authentication, LoginRecord
from techquiry.infrastructure.session.slots import SessionAuthenticationSlot, SessionSlotRegistry
from techquiry.shared.errors.base import ForbiddenOperationError


def test_slot_starts_anonymous_and_holds_one_marker() -> None:
    slot = SessionAuthenticationSlot()
    assert slot.get_authentication() is None

    slot.set_authentication(Authentication(user_id=1))
    slot.set_authentication(Authentication(user_id=2))

    assert slot.get_authentication() == Authentication(user_id=2)
    slot.set_authentication(None)
    assert slot.get_authentication() is None


def test_slot_lock_is_reentrant() -> None:
    slot = SessionAuthenticationSlot()

    with slot.locked():
        with slot.locked():
            slot.set_authentication(Authentication(user_id=5))

    assert slot.get_authentication() == Authentication(user_id=5)


def test_racing_logouts_have_exactly_one_winner() -> None:
    slot = SessionAuthenticationSlot()
    slot.set_authentication(Authentication(user_id=1))
    use_case = LogoutUserUseCase()
    barrier = threading.Barrier(8)
    outcomes: list[str] = []
    outcomes_lock = threading.Lock()

    def worker() -> None:
        barrier.wait()
        try:
            use_case.execute(slot)
            result = "ok"
        except ForbiddenOperationError:
            result = "forbidden"
        with outcomes_lock:
            outcomes.append(result)

    threads = [threading.Thread(target=worker) for _ in range(8)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert outcomes.count("ok") == 1
    assert outcomes.count("forbidden") == 7


def test_racing_authentications_have_exactly_one_winner() -> None:
    hasher = SaltedDigestPasswordHasher()
    digest = hasher.hash("secret123")
    record = LoginRecord(id=1, username="alice", password_hash=digest.hash, password_salt=digest.salt)

    class SlowRepository:
        def select_by_username(self, username: str) -> LoginRecord | None:
            time.sleep(0.01)
            return record if username == "alice" else None

    use_case = AuthenticateUserUseCase(logins=SlowRepository(), password_hasher=hasher)  # type: ignore[arg-type]
    slot = SessionAuthenticationSlot()
    barrier = threading.Barrier(4)
    forbidden: list[ForbiddenOperationError] = []

    def worker() -> None:
        barrier.wait()
        try:
            use_case.execute(slot, "alice", "secret123")
        except ForbiddenOperationError as exc:
            forbidden.append(exc)

    threads = [threading.Thread(target=worker) for _ in range(4)]
    for thread in threads:
        thread.start()
    for thread in threads:
        thread.join()

    assert len(forbidden) == 3
    assert slot.get_authentication() == Authentication(user_id=1)


def test_registry_returns_same_slot_per_session_id() -> None:
    registry = SessionSlotRegistry(idle_timeout=60)

    first = registry.slot_for("a")
    again = registry.slot_for("a")
    other = registry.slot_for("b")

    assert first is again
    assert first is not other
    assert len(registry) == 2

    registry.discard("a")
    assert len(registry) == 1
    assert registry.slot_for("a") is not first


def test_registry_purges_idle_slots(monkeypatch) -> None:
    clock = [1000.0]
    monkeypatch.setattr(
        "techquiry.infrastructure.session.slots.time.monotonic", lambda: clock[0]
    )
    registry = SessionSlotRegistry(idle_timeout=10)
    stale = registry.slot_for("stale")
    stale.set_authentication(Authentication(user_id=1))

    clock[0] += 5
    registry.slot_for("fresh")
    clock[0] += 6

    assert registry.slot_for("fresh") is not None
    assert len(registry) == 1
    assert registry.slot_for("stale").get_authentication() is None
