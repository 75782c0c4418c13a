# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import UTC, datetime

from resume_backend.domain.users.entities import PublicUser
from resume_backend.domain.users.exceptions import InvalidCredentialsError
from resume_backend.domain.users.repositories import (
    PasswordHasher,
    SessionRepository,
    TokenCodec,
    UserRepository,
)
from resume_backend.shared.logging import logger


@dataclass(slots=True, frozen=True)
class LoginResult:
    user: PublicUser
    token: str
    expires_at: datetime


def _utcnow() -> datetime:
    return datetime.now(UTC)


class LoginUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionRepository,
        password_hasher: PasswordHasher,
        tokens: TokenCodec,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher
        self._tokens = tokens
        self._clock = clock

    def execute(self, email: str, password: str) -> LoginResult:
        user = self._users.find_by_email(email)
        password_valid = user is not None and self._password_hasher.verify(
            password, user.password_hash
        )

        if user is None or not password_valid:
            raise InvalidCredentialsError()

        issued = self._tokens.issue(user.id, user.email, self._clock())
        self._sessions.add(user.id, issued.token, issued.claims.expires_at)
        logger.info(
            f"users.login: session issued user_id={user.id} "
            f"exp={issued.claims.expires_at.isoformat()}"
        )
        return LoginResult(
            user=user.public(),
            token=issued.token,
            expires_at=issued.claims.expires_at,
        )
