# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""JSON error responses for the Flask app."""

from __future__ import annotations

from http import HTTPStatus

from flask import Flask, Response, g, jsonify, request
from werkzeug.exceptions import HTTPException

from techquiry.shared.logging import logger

from .base import AppError


def handle_app_error(error: AppError) -> tuple[Response, HTTPStatus]:
    return jsonify(error.to_dict()), error.status


def _describe_request() -> str:
    return f"{request.method} {request.path} user={getattr(g, 'user_id', None)}"


def register_error_handler(app: Flask) -> None:
    from techquiry.shared.config import load_config

    verbose = load_config().debug_logging

    @app.errorhandler(AppError)
    def _on_app_error(exc: AppError):
        if exc.status >= HTTPStatus.INTERNAL_SERVER_ERROR:
            # the chained cause goes to the log only
            logger.opt(exception=exc).error(f"{exc.code}: {exc} ({_describe_request()})")
        else:
            logger.warning(f"{exc.code} -> {int(exc.status)} ({_describe_request()})")
        return handle_app_error(exc)

    @app.errorhandler(HTTPException)
    def _on_http_exception(exc: HTTPException):
        return exc

    @app.errorhandler(Exception)
    def _on_unexpected(exc: Exception):
        if verbose:
            logger.opt(exception=exc).error(f"unhandled {type(exc).__name__} ({_describe_request()})")
        else:
            logger.error(f"unhandled {type(exc).__name__} ({_describe_request()})")
        return jsonify({"error": "internal_error"}), HTTPStatus.INTERNAL_SERVER_ERROR
