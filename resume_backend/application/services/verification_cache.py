# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import time
from dataclasses import dataclass
from threading import Lock

from resume_backend.domain.users.entities import User
from resume_backend.shared.logging import logger


@dataclass(slots=True)
class CacheEntry:
    user: User
    expires_at: float

    def is_expired(self, now: float) -> bool:
        return now >= self.expires_at


class VerifiedTokenCache:
    """Short-lived memo of tokens that passed the session-row check.

    An entry never outlives the token it was built from, and is dropped as soon
    as the token is revoked, so revocation stays effective.

    The store lives in this process only. Under several workers a logout seen
    by one worker leaves the token cached in the others until the TTL ends.
    """

    def __init__(self, ttl_seconds: float, *, clock=time.time) -> None:
        self._ttl = ttl_seconds
        self._clock = clock
        self._lock = Lock()
        self._store: dict[str, CacheEntry] = {}
        if self.enabled:
            logger.warning(
                f"verify_cache: enabled with ttl={ttl_seconds}s; revocation reaches other "
                "worker processes only after the ttl expires"
            )

    @property
    def enabled(self) -> bool:
        return self._ttl > 0

    def get(self, token: str) -> User | None:
        if not self.enabled:
            return None
        now = self._clock()
        with self._lock:
            entry = self._store.get(token)
            if entry is None:
                return None
            if entry.is_expired(now):
                self._store.pop(token, None)
                return None
        logger.debug(f"verify_cache: hit user={entry.user.id}")
        return entry.user

    def put(self, token: str, user: User, token_expires_at: float) -> None:
        if not self.enabled:
            return
        expires_at = min(self._clock() + self._ttl, token_expires_at)
        with self._lock:
            self._store[token] = CacheEntry(user=user, expires_at=expires_at)

    def invalidate(self, token: str) -> None:
        with self._lock:
            if self._store.pop(token, None) is not None:
                logger.debug("verify_cache: invalidated token")

    def invalidate_user(self, user_id: str) -> None:
        with self._lock:
            stale = [key for key, entry in self._store.items() if entry.user.id == user_id]
            for key in stale:
                del self._store[key]
        if stale:
            logger.debug(f"verify_cache: invalidated {len(stale)} tokens for user={user_id}")


__all__ = ["VerifiedTokenCache"]
