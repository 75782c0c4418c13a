# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .login_user import LoginResult, LoginUserUseCase
from .logout_user import LogoutUserUseCase
from .register_user import RegisterUserUseCase
from .sweep_sessions import SweepExpiredSessionsUseCase
from .update_password import UpdatePasswordUseCase
from .verify_session import VerifySessionUseCase

__all__ = [
    "LoginResult",
    "LoginUserUseCase",
    "LogoutUserUseCase",
    "RegisterUserUseCase",
    "SweepExpiredSessionsUseCase",
    "UpdatePasswordUseCase",
    "VerifySessionUseCase",
]
