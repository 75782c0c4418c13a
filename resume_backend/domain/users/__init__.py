# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from .entities import IssuedToken, PublicUser, Session, TokenClaims, User
from .exceptions import (
    InvalidCredentialsError,
    InvalidSessionError,
    InvalidTokenError,
    UserAlreadyExistsError,
)

__all__ = [
    "IssuedToken",
    "PublicUser",
    "Session",
    "TokenClaims",
    "User",
    "InvalidCredentialsError",
    "InvalidSessionError",
    "InvalidTokenError",
    "UserAlreadyExistsError",
]
