# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import secrets
import time

from flask import Flask, Response, g, request

from techquiry.shared.config import load_config
from techquiry.shared.logging import clear_correlation_id, logger, set_correlation_id

REQUEST_ID_HEADER = "X-Request-ID"
_HIDDEN_HEADERS = frozenset({"authorization", "cookie", "x-csrf-token"})


def configure_request_logging(app: Flask) -> None:
    """Correlation id per request and one access line per response."""

    log_headers = load_config().debug_logging

    @app.before_request
    def _start() -> None:
        set_correlation_id(request.headers.get(REQUEST_ID_HEADER) or secrets.token_hex(6))
        g.request_started = time.perf_counter()
        if log_headers:
            headers = {
                name: "<redacted>" if name.lower() in _HIDDEN_HEADERS else value
                for name, value in request.headers.items()
            }
            logger.debug(f"--> {request.method} {request.path} headers={headers}")

    @app.after_request
    def _finish(response: Response) -> Response:
        elapsed_ms = (time.perf_counter() - g.get("request_started", time.perf_counter())) * 1000
        logger.info(
            f"{request.method} {request.path} {response.status_code} "
            f"{elapsed_ms:.1f}ms user={g.get('user_id')}"
        )
        return response

    @app.teardown_request
    def _reset(exc: BaseException | None) -> None:
        clear_correlation_id()


__all__ = ["REQUEST_ID_HEADER", "configure_request_logging"]
