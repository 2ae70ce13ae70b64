# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""TechQuiry login and session backend."""

from techquiry.shared.config.settings import NAME, VERSION

__all__ = ["NAME", "VERSION"]
__version__ = VERSION
