# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .settings import NAME, VERSION, AppConfig, load_config

__all__ = ["NAME", "VERSION", "AppConfig", "load_config"]
