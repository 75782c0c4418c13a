# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from resume_backend.application.services.verification_cache import VerifiedTokenCache
from resume_backend.domain.users.repositories import (
    PasswordHasher,
    SessionRepository,
    UserRepository,
)
from resume_backend.shared.logging import logger


class UpdatePasswordUseCase:
    """Change a password after re-checking the current one.

    Existing sessions survive the change unless ``revoke_sessions`` is set.
    """

    def __init__(
        self,
        *,
        users: UserRepository,
        sessions: SessionRepository,
        password_hasher: PasswordHasher,
        revoke_sessions: bool = False,
        cache: VerifiedTokenCache | None = None,
    ) -> None:
        self._users = users
        self._sessions = sessions
        self._password_hasher = password_hasher
        self._revoke_sessions = revoke_sessions
        self._cache = cache

    def execute(self, user_id: str, current_password: str, new_password: str) -> bool:
        user = self._users.find_by_id(user_id)
        if user is None:
            return False

        if not self._password_hasher.verify(current_password, user.password_hash):
            logger.warning(f"users.password: current password mismatch user_id={user_id}")
            return False

        hashed = self._password_hasher.hash(new_password)
        if not self._users.update_password_hash(user_id, hashed):
            return False

        if self._revoke_sessions:
            revoked = self._sessions.delete_for_user(user_id)
            if self._cache is not None:
                self._cache.invalidate_user(user_id)
            logger.info(f"users.password: revoked sessions={revoked} user_id={user_id}")

        logger.info(f"users.password: updated user_id={user_id}")
        return True
