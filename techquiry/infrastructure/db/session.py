# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import DeclarativeBase, scoped_session, sessionmaker
from sqlalchemy.pool import StaticPool

from techquiry.shared.config import load_config
from techquiry.shared.config.settings import DatabaseConfig
from techquiry.shared.errors.base import SchemaInitializationError
from techquiry.shared.logging import logger

_config = load_config()


class Base(DeclarativeBase):
    pass


def build_engine(database: DatabaseConfig) -> Engine:
    connect_args: dict[str, object] = {}
    if database.url.startswith("sqlite"):
        connect_args = {
            "check_same_thread": False,
            "timeout": int(database.pool_timeout),
        }

    if database.url in ("sqlite://", "sqlite:///:memory:"):
        # one shared connection, otherwise every checkout sees an empty database
        return create_engine(database.url, connect_args=connect_args, poolclass=StaticPool)

    return create_engine(
        database.url,
        echo=False,
        pool_pre_ping=True,
        pool_size=database.pool_size,
        max_overflow=database.max_overflow,
        pool_timeout=database.pool_timeout,
        connect_args=connect_args,
    )


ENGINE: Engine = build_engine(_config.database)


SessionLocal = scoped_session(
    sessionmaker(bind=ENGINE, autoflush=False, autocommit=False, expire_on_commit=False)
)


def init_db(engine: Engine | None = None) -> None:
    # models register their tables on Base.metadata
    from techquiry.infrastructure.db import models  # noqa: F401

    target = engine or ENGINE
    try:
        Base.metadata.create_all(bind=target)
    except SQLAlchemyError as exc:
        raise SchemaInitializationError(
            f"Could not create the database schema on {target.url!r}"
        ) from exc
    logger.info("Database schema ensured")
