# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from http import HTTPStatus

from resume_backend.shared.errors.base import DomainError


class UserAlreadyExistsError(DomainError):
    code = "user_already_exists"
    status = HTTPStatus.CONFLICT
    message = "User with this email already exists"


class InvalidCredentialsError(DomainError):
    code = "invalid_credentials"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid email or password"


class InvalidSessionError(DomainError):
    code = "invalid_session"
    status = HTTPStatus.UNAUTHORIZED
    message = "Invalid or expired session"


class InvalidTokenError(InvalidSessionError):
    """Signature or embedded expiry check failed; raised before any database access."""
