# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re
from typing import Any

_REDACTED = "***REDACTED***"

# (pattern, replacement); group 1 is the kept prefix
_RULES: list[tuple[re.Pattern[str], str]] = [
    (re.compile(r"(secret[_-]?key\s*[:=]\s*['\"]?)[\w\-]{8,}", re.IGNORECASE), rf"\1{_REDACTED}"),
    (re.compile(r"(password[_-]?(?:hash|salt)\s*[:=]\s*)b?(['\"]).*?\2", re.IGNORECASE), rf"\1{_REDACTED}"),
    (re.compile(r"(passw(?:or)?d\s*[:=]\s*['\"]?)[^'\"\s,}]+", re.IGNORECASE), rf"\1{_REDACTED}"),
    (re.compile(r"((?:session[_-]?id|sid)\s*[:=]\s*['\"]?)[\w\-.]{16,}"), rf"\1{_REDACTED}"),
    (re.compile(r"(csrf[_-]?token\s*[:=]\s*['\"]?)[\w\-.]{20,}"), rf"\1{_REDACTED}"),
    (re.compile(r"(\w+(?:\+\w+)?://[^:/@\s]+:)[^@\s]+@"), rf"\1{_REDACTED}@"),
]


def sanitize_message(message: str) -> str:
    for pattern, replacement in _RULES:
        message = pattern.sub(replacement, message)
    return message


def sanitize_record(record: dict[str, Any]) -> bool:
    """Loguru filter: redacts the message in place and never drops a record."""
    record["message"] = sanitize_message(record["message"])
    return True
