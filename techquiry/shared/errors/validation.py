# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections import defaultdict
from typing import Any, NoReturn

from pydantic import ValidationError as PydanticValidationError

from .base import ValidationError


def format_pydantic_errors(exc: PydanticValidationError) -> dict[str, Any]:
    """Group pydantic errors by dotted field path.

    ``{"fields": {"password": ["String should have at least 8 characters"]}}``;
    errors that are not tied to a field (a non-object body) land under ``"body"``.
    """

    fields: dict[str, list[str]] = defaultdict(list)
    for error in exc.errors(include_url=False, include_context=False, include_input=False):
        path = ".".join(str(part) for part in error["loc"]) or "body"
        fields[path].append(error["msg"])
    return {"fields": dict(fields)}


def raise_validation_error(exc: PydanticValidationError) -> NoReturn:
    raise ValidationError(context=format_pydantic_errors(exc)) from exc


__all__ = ["format_pydantic_errors", "raise_validation_error"]
