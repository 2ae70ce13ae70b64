from __future__ import annotations

import os
import tempfile

os.environ["DATABASE_URL"] = "sqlite://"
os.environ["ENABLE_RATE_LIMIT"] = "0"
os.environ["ENABLE_CSRF"] = "0"
os.environ["APP_ENV"] = "test"
os.environ["SECRET_KEY"] = "test-secret"
os.environ["LOG_FILE"] = os.path.join(tempfile.gettempdir(), "techquiry-tests.log")

from collections.abc import Iterator  # noqa: E402

import pytest  # noqa: E402
from flask import Flask  # noqa: E402
from flask.testing import FlaskClient  # noqa: E402
from sqlalchemy.engine import Engine  # noqa: E402
from sqlalchemy.orm import Session, sessionmaker  # noqa: E402

from techquiry.app import create_app  # noqa: E402
from techquiry.infrastructure.container import Container  # noqa: E402
from techquiry.infrastructure.db import build_engine, init_db  # noqa: E402
from techquiry.shared.config.settings import DatabaseConfig  # noqa: E402


@pytest.fixture()
def engine() -> Iterator[Engine]:
    engine = build_engine(DatabaseConfig(url="sqlite://"))
    init_db(engine)
    yield engine
    engine.dispose()


@pytest.fixture()
def session_factory(engine: Engine) -> sessionmaker[Session]:
    return sessionmaker(bind=engine, autoflush=False, expire_on_commit=False)


@pytest.fixture()
def container(engine: Engine, session_factory: sessionmaker[Session]) -> Container:
    return Container(engine=engine, session_factory=session_factory)


@pytest.fixture()
def app(container: Container) -> Flask:
    app = create_app(container)
    app.config["TESTING"] = True
    return app


@pytest.fixture()
def client(app: Flask) -> Iterator[FlaskClient]:
    with app.test_client() as client:
        yield client
