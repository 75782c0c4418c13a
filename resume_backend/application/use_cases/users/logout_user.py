"""Use-case for revoking session tokens."""

from __future__ import annotations

from resume_backend.application.services.verification_cache import VerifiedTokenCache
from resume_backend.domain.users.repositories import SessionRepository
from resume_backend.shared.logging import logger


class LogoutUserUseCase:
    def __init__(
        self, *, sessions: SessionRepository, cache: VerifiedTokenCache | None = None
    ) -> None:
        self._sessions = sessions
        self._cache = cache

    def execute(self, token: str) -> bool:
        if not token:
            return False
        if self._cache is not None:
            self._cache.invalidate(token)
        deleted = self._sessions.delete_by_token(token)
        logger.info(f"users.logout: revoked sessions={deleted}")
        return deleted > 0
