# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Double-submit cookie CSRF protection.

Safe requests receive a readable ``csrf_token`` cookie; unsafe requests to
protected views must echo it in the ``X-CSRF-Token`` header.
"""

from __future__ import annotations

import secrets
from collections.abc import Callable
from functools import wraps

from flask import Flask, Response, jsonify, request

from techquiry.shared.config import load_config

SAFE_METHODS = frozenset({"GET", "HEAD", "OPTIONS"})
CSRF_COOKIE = "csrf_token"
CSRF_HEADER = "X-CSRF-Token"


def _is_enabled() -> bool:
    return load_config().security.enable_csrf


def _token_matches() -> bool:
    sent = request.headers.get(CSRF_HEADER, "").strip()
    expected = request.cookies.get(CSRF_COOKIE, "").strip()
    return bool(sent) and bool(expected) and secrets.compare_digest(sent, expected)


def configure_csrf(app: Flask) -> None:
    if not _is_enabled():
        return
    security = load_config().security

    @app.after_request
    def _issue_csrf_cookie(response: Response) -> Response:
        if request.method in SAFE_METHODS and CSRF_COOKIE not in request.cookies:
            response.set_cookie(
                CSRF_COOKIE,
                secrets.token_urlsafe(32),
                max_age=security.session_lifetime,
                secure=security.cookie_secure,
                samesite=security.cookie_samesite,
                httponly=False,
            )
        return response


def csrf_protect(view: Callable):
    @wraps(view)
    def protected(*args, **kwargs):
        if _is_enabled() and request.method not in SAFE_METHODS and not _token_matches():
            return jsonify({"error": "csrf"}), 403
        return view(*args, **kwargs)

    return protected


__all__ = ["CSRF_COOKIE", "CSRF_HEADER", "configure_csrf", "csrf_protect"]
