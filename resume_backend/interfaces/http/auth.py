# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from functools import wraps
from typing import Any

from flask import Flask, Response, current_app, g, jsonify, request

from resume_backend.infrastructure.auth import RequestAuthorizer
from resume_backend.shared.errors import UnauthenticatedError
from resume_backend.shared.logging import logger

EXTENSION_KEY = "resume_backend.auth"


@dataclass(slots=True, frozen=True)
class AuthCookies:
    name: str = "auth_token"
    secure: bool = False
    samesite: str = "Strict"
    max_age: int = 60 * 60 * 24 * 7

    def set(self, response: Response, token: str) -> None:
        response.set_cookie(
            self.name,
            token,
            max_age=self.max_age,
            path="/",
            secure=self.secure,
            httponly=True,
            samesite=self.samesite,
        )

    def clear(self, response: Response) -> None:
        response.delete_cookie(
            self.name,
            path="/",
            secure=self.secure,
            httponly=True,
            samesite=self.samesite,
        )


@dataclass(slots=True, frozen=True)
class AuthExtension:
    authorizer: RequestAuthorizer
    cookies: AuthCookies


def init_auth(app: Flask, *, authorizer: RequestAuthorizer, cookies: AuthCookies) -> None:
    app.extensions[EXTENSION_KEY] = AuthExtension(authorizer=authorizer, cookies=cookies)


def get_auth() -> AuthExtension:
    return current_app.extensions[EXTENSION_KEY]


def unauthorized(cookies: AuthCookies, message: str = "Not authenticated") -> tuple[Response, int]:
    """401 that also tells the client to drop its stored credential."""

    error = UnauthenticatedError(message=message)
    response = jsonify(error.to_dict())
    cookies.clear(response)
    return response, int(error.status)


def auth_required(f: Callable[..., Any]) -> Callable[..., Any]:
    @wraps(f)
    def inner(*args: Any, **kwargs: Any) -> Any:
        auth = get_auth()
        user = auth.authorizer.authorize(request)
        if user is None:
            logger.warning(f"auth: unauthorized {request.method} {request.path}")
            return unauthorized(auth.cookies)

        g.user = user
        g.user_id = user.id
        logger.debug(f"auth: ok user={user.id} {request.method} {request.path}")
        return f(*args, **kwargs)

    return inner


__all__ = [
    "AuthCookies",
    "AuthExtension",
    "auth_required",
    "get_auth",
    "init_auth",
    "unauthorized",
]
