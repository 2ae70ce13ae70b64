from __future__ import annotations

from unittest.mock import MagicMock

import pytest
from sqlalchemy import func, select
from sqlalchemy.exc import OperationalError
from sqlalchemy.orm import Session, sessionmaker

from techquiry.domain.logins.entities import LoginRecord, PasswordDigest
from techquiry.infrastructure.db.models import UserLogin
from techquiry.infrastructure.repositories.logins.sqlalchemy_login_repository import (
    SqlAlchemyLoginRepository,
)
from techquiry.shared.errors.base import DuplicateUsernameError, StorageError


def _record(username: str, *, secret: bytes = b"h") -> LoginRecord:
    return LoginRecord.candidate(username, PasswordDigest(hash=secret, salt=b"salt-" + secret))


@pytest.fixture()
def repository(session_factory: sessionmaker[Session]) -> SqlAlchemyLoginRepository:
    return SqlAlchemyLoginRepository(session_factory)


def test_insert_assigns_ids_and_round_trips_bytes(repository: SqlAlchemyLoginRepository) -> None:
    first = repository.insert(_record("alice", secret=b"\x00\xffhash"))
    second = repository.insert(_record("bob"))

    assert first != second
    stored = repository.select_by_id(first)
    assert stored == LoginRecord(
        id=first, username="alice", password_hash=b"\x00\xffhash", password_salt=b"salt-\x00\xffhash"
    )
    assert repository.select_by_username("bob").id == second


def test_insert_ignores_candidate_id(repository: SqlAlchemyLoginRepository) -> None:
    login_id = repository.insert(_record("alice").with_id(777))

    assert login_id != 777
    assert repository.select_by_id(777) is None


def test_select_missing_returns_none(repository: SqlAlchemyLoginRepository) -> None:
    assert repository.select_by_id(1) is None
    assert repository.select_by_username("nobody") is None


def test_duplicate_insert_raises_and_keeps_single_row(
    repository: SqlAlchemyLoginRepository, session_factory: sessionmaker[Session]
) -> None:
    repository.insert(_record("alice"))

    with pytest.raises(DuplicateUsernameError) as excinfo:
        repository.insert(_record("alice", secret=b"other"))

    assert excinfo.value.username == "alice"
    assert isinstance(excinfo.value, StorageError)
    with session_factory() as session:
        assert session.scalar(select(func.count()).select_from(UserLogin)) == 1


def test_update_replaces_username_and_credentials(repository: SqlAlchemyLoginRepository) -> None:
    login_id = repository.insert(_record("alice"))

    repository.update(_record("alice_2", secret=b"new").with_id(login_id))

    stored = repository.select_by_id(login_id)
    assert stored.username == "alice_2"
    assert stored.password_hash == b"new"
    assert stored.password_salt == b"salt-new"
    assert repository.select_by_username("alice") is None


def test_update_into_taken_username_raises(repository: SqlAlchemyLoginRepository) -> None:
    repository.insert(_record("alice"))
    bob = repository.insert(_record("bob"))

    with pytest.raises(DuplicateUsernameError):
        repository.update(_record("alice").with_id(bob))

    assert repository.select_by_id(bob).username == "bob"


def test_update_missing_id_raises_storage_error(repository: SqlAlchemyLoginRepository) -> None:
    with pytest.raises(StorageError):
        repository.update(_record("ghost").with_id(41))


def test_delete_removes_row_and_tolerates_missing(repository: SqlAlchemyLoginRepository) -> None:
    login_id = repository.insert(_record("alice"))

    repository.delete(login_id)
    repository.delete(login_id)

    assert repository.select_by_id(login_id) is None


def test_driver_failures_surface_as_storage_error() -> None:
    session = MagicMock()
    session.get.side_effect = OperationalError("SELECT", {}, Exception("database is locked"))
    repository = SqlAlchemyLoginRepository(lambda: session)

    with pytest.raises(StorageError) as excinfo:
        repository.select_by_id(1)

    assert isinstance(excinfo.value.__cause__, OperationalError)
    session.rollback.assert_called_once()
    session.close.assert_called_once()
