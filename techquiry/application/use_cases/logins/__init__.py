# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .authenticate_user import AuthenticateUserUseCase
from .create_login import CreateLoginUseCase
from .delete_login import DeleteLoginUseCase
from .get_current_login import GetCurrentLoginUseCase
from .logout_user import LogoutUserUseCase
from .update_login import UpdateLoginUseCase

__all__ = [
    "AuthenticateUserUseCase",
    "CreateLoginUseCase",
    "DeleteLoginUseCase",
    "GetCurrentLoginUseCase",
    "LogoutUserUseCase",
    "UpdateLoginUseCase",
]
