# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from resume_backend.domain.users.repositories import SessionRepository
from resume_backend.shared.logging import logger


def _utcnow() -> datetime:
    return datetime.now(UTC)


class SweepExpiredSessionsUseCase:
    def __init__(
        self,
        *,
        sessions: SessionRepository,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._sessions = sessions
        self._clock = clock

    def execute(self) -> int:
        deleted = self._sessions.delete_expired(self._clock())
        if deleted:
            logger.info(f"sessions.sweep: deleted expired={deleted}")
        return deleted
