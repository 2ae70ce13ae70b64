from __future__ import annotations

from flask import Flask

from techquiry.shared.errors.base import (
    DuplicateUsernameError,
    EntityNotFoundError,
    ForbiddenOperationError,
    InternalError,
    InvalidRequestError,
)
from techquiry.shared.logging.sensitive_filter import sanitize_message
from techquiry.shared.middleware import csrf
from techquiry.shared.middleware.csrf import CSRF_COOKIE, CSRF_HEADER, csrf_protect
from techquiry.shared.middleware.error_handler import configure_error_handling
from techquiry.shared.middleware.rate_limit import InMemoryRateLimiter


def test_rate_limiter_window() -> None:
    limiter = InMemoryRateLimiter(limit=2, window_seconds=10)

    assert limiter.allow("k", now=0.0)
    assert limiter.allow("k", now=1.0)
    assert not limiter.allow("k", now=2.0)
    assert limiter.allow("other", now=2.0)
    assert limiter.retry_after("k", now=2.0) == 8.0
    assert limiter.allow("k", now=10.5)


def test_rate_limiter_forgets_idle_clients() -> None:
    limiter = InMemoryRateLimiter(limit=1, window_seconds=10)

    limiter.allow("gone", now=0.0)
    limiter.allow("busy", now=5.0)
    assert len(limiter) == 2

    limiter.allow("busy", now=11.0)

    assert len(limiter) == 1
    assert limiter.allow("gone", now=11.5)


def test_csrf_double_submit(monkeypatch) -> None:
    monkeypatch.setattr(csrf, "_is_enabled", lambda: True)
    app = Flask(__name__)

    @app.post("/mutate")
    @csrf_protect
    def mutate():
        return {"ok": True}

    with app.test_client() as client:
        assert client.post("/mutate").status_code == 403
        client.set_cookie(CSRF_COOKIE, "token-value")
        assert client.post("/mutate", headers={CSRF_HEADER: "other"}).status_code == 403
        assert client.post("/mutate", headers={CSRF_HEADER: "token-value"}).status_code == 200


def test_error_kinds_have_codes_and_statuses() -> None:
    assert (ForbiddenOperationError("x").code, ForbiddenOperationError("x").status) == (
        "forbidden_operation",
        403,
    )
    assert (InvalidRequestError("x").code, InvalidRequestError("x").status) == ("invalid_request", 400)
    assert (EntityNotFoundError("x").code, EntityNotFoundError("x").status) == ("entity_not_found", 404)
    assert (InternalError("x").code, InternalError("x").status) == ("internal_error", 500)
    assert str(InvalidRequestError("readable")) == "readable"
    assert DuplicateUsernameError("alice").code == "duplicate_username"


def test_unexpected_exception_becomes_internal_error() -> None:
    app = Flask(__name__)
    configure_error_handling(app)

    @app.get("/explode")
    def explode():
        raise RuntimeError("kaboom")

    with app.test_client() as client:
        response = client.get("/explode")

    assert response.status_code == 500
    assert response.get_json() == {"error": "internal_error"}


def test_unknown_route_keeps_http_status() -> None:
    app = Flask(__name__)
    configure_error_handling(app)

    with app.test_client() as client:
        assert client.get("/missing").status_code == 404


def test_log_messages_are_sanitized() -> None:
    message = sanitize_message(
        "password=hunter2 sid=abc123def456ghi789 url=postgresql://user:pw@db/techquiry"
    )

    assert "hunter2" not in message
    assert "abc123def456ghi789" not in message
    assert ":pw@" not in message
