# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Signed session tokens (JWT, HMAC)."""

from __future__ import annotations

import secrets
from datetime import UTC, datetime, timedelta

import jwt

from resume_backend.domain.users.entities import IssuedToken, TokenClaims
from resume_backend.domain.users.exceptions import InvalidTokenError
from resume_backend.domain.users.repositories import TokenCodec


class JwtTokenCodec(TokenCodec):
    def __init__(self, secret: str, *, algorithm: str = "HS256", ttl: timedelta) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl

    def issue(self, user_id: str, email: str, now: datetime) -> IssuedToken:
        # JWT timestamps have second resolution; the session row must expire at the same instant
        issued_at = now.replace(microsecond=0)
        expires_at = issued_at + self._ttl
        claims = TokenClaims(
            user_id=user_id,
            email=email,
            expires_at=expires_at,
            issued_at=issued_at,
            token_id=secrets.token_urlsafe(16),
        )
        payload = {
            "userId": claims.user_id,
            "email": claims.email,
            "iat": int(issued_at.timestamp()),
            "exp": int(expires_at.timestamp()),
            "jti": claims.token_id,
        }
        token = jwt.encode(payload, self._secret, algorithm=self._algorithm)
        return IssuedToken(token=token, claims=claims)

    def decode(self, token: str) -> TokenClaims:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"require": ["exp", "userId"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise InvalidTokenError(message="Session token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise InvalidTokenError() from exc

        user_id = payload.get("userId")
        if not isinstance(user_id, str) or not user_id:
            raise InvalidTokenError()

        return TokenClaims(
            user_id=user_id,
            email=str(payload.get("email", "")),
            expires_at=datetime.fromtimestamp(payload["exp"], UTC),
            issued_at=datetime.fromtimestamp(payload.get("iat", payload["exp"]), UTC),
            token_id=str(payload.get("jti", "")),
        )


__all__ = ["JwtTokenCodec"]
