# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Use-case for resolving a bearer token to a live user."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from resume_backend.application.services.verification_cache import VerifiedTokenCache
from resume_backend.domain.users.entities import PublicUser
from resume_backend.domain.users.exceptions import InvalidSessionError
from resume_backend.domain.users.repositories import SessionRepository, TokenCodec


def _utcnow() -> datetime:
    return datetime.now(UTC)


class VerifySessionUseCase:
    """Accept a token only if its signature and expiry hold and a live session row exists."""

    def __init__(
        self,
        *,
        sessions: SessionRepository,
        tokens: TokenCodec,
        cache: VerifiedTokenCache | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._sessions = sessions
        self._tokens = tokens
        self._cache = cache
        self._clock = clock

    def execute(self, token: str) -> PublicUser:
        if not token:
            raise InvalidSessionError()

        # raises InvalidTokenError without touching the database
        claims = self._tokens.decode(token)

        if self._cache is not None:
            cached = self._cache.get(token)
            if cached is not None:
                return cached.public()

        user = self._sessions.find_active_user(token, self._clock())
        if user is None:
            raise InvalidSessionError()

        if self._cache is not None:
            self._cache.put(token, user, claims.expires_at.timestamp())
        return user.public()
