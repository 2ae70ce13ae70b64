# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from techquiry.domain.logins.entities import LoginRecord
from techquiry.domain.logins.repositories import LoginRepository
from techquiry.infrastructure.db.models import UserLogin
from techquiry.infrastructure.unit_of_work import unit_of_work_scope
from techquiry.shared.errors.base import DuplicateUsernameError, StorageError


def _to_domain(row: UserLogin) -> LoginRecord:
    return LoginRecord(
        id=row.id,
        username=row.username,
        password_hash=bytes(row.password_hash),
        password_salt=bytes(row.password_salt),
    )


class SqlAlchemyLoginRepository(LoginRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def select_by_id(self, login_id: int) -> LoginRecord | None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.get(UserLogin, login_id)
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            raise StorageError(f"could not select login id={login_id}") from exc

    def select_by_username(self, username: str) -> LoginRecord | None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.scalars(
                    select(UserLogin).where(UserLogin.username == username)
                ).first()
                return _to_domain(row) if row else None
        except SQLAlchemyError as exc:
            raise StorageError(f"could not select login username={username}") from exc

    def insert(self, login: LoginRecord) -> int:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = UserLogin(
                    username=login.username,
                    password_hash=login.password_hash,
                    password_salt=login.password_salt,
                )
                session.add(row)
                session.flush()
                return row.id
        except IntegrityError as exc:
            raise DuplicateUsernameError(login.username) from exc
        except SQLAlchemyError as exc:
            raise StorageError("could not insert login") from exc

    def update(self, login: LoginRecord) -> None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.get(UserLogin, login.id)
                if row is None:
                    raise StorageError(f"no login with id={login.id} to update")
                row.username = login.username
                row.password_hash = login.password_hash
                row.password_salt = login.password_salt
                session.flush()
        except IntegrityError as exc:
            raise DuplicateUsernameError(login.username) from exc
        except SQLAlchemyError as exc:
            raise StorageError(f"could not update login id={login.id}") from exc

    def delete(self, login_id: int) -> None:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = session.get(UserLogin, login_id)
                if row is not None:
                    session.delete(row)
        except SQLAlchemyError as exc:
            raise StorageError(f"could not delete login id={login_id}") from exc
