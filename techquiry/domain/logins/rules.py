# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import re

USERNAME_REGEX = r"^[A-Za-z][A-Za-z0-9_]{2,14}$"

_USERNAME_PATTERN = re.compile(USERNAME_REGEX)


def matches_username_pattern(username: str) -> bool:
    """Return whether ``username`` is 3-15 ASCII word characters starting with a letter."""

    # fullmatch: "$" alone would accept a trailing newline
    return _USERNAME_PATTERN.fullmatch(username) is not None
