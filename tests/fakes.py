from __future__ import annotations

import uuid
from datetime import UTC, datetime

from resume_backend.domain.users.entities import Session, User
from resume_backend.domain.users.repositories import (
    PasswordHasher,
    SessionRepository,
    UserRepository,
)


class InMemoryUserRepository(UserRepository):
    def __init__(self) -> None:
        self._users: dict[str, User] = {}

    def find_by_email(self, email: str) -> User | None:
        return next((u for u in self._users.values() if u.email == email), None)

    def find_by_id(self, user_id: str) -> User | None:
        return self._users.get(user_id)

    def add(self, email: str, password_hash: str) -> User:
        user = User(
            id=str(uuid.uuid4()),
            email=email,
            password_hash=password_hash,
            created_at=datetime.now(UTC),
        )
        self._users[user.id] = user
        return user

    def update_password_hash(self, user_id: str, password_hash: str) -> bool:
        user = self._users.get(user_id)
        if user is None:
            return False
        self._users[user_id] = User(
            id=user.id,
            email=user.email,
            password_hash=password_hash,
            created_at=user.created_at,
        )
        return True


class InMemorySessionRepository(SessionRepository):
    def __init__(self, users: InMemoryUserRepository) -> None:
        self._users = users
        self._sessions: dict[str, Session] = {}
        self._seq = 1
        self.lookups = 0

    def add(self, user_id: str, token: str, expires_at: datetime) -> Session:
        session = Session(id=self._seq, user_id=user_id, token=token, expires_at=expires_at)
        self._seq += 1
        self._sessions[token] = session
        return session

    def find_active_user(self, token: str, now: datetime) -> User | None:
        self.lookups += 1
        session = self._sessions.get(token)
        if session is None or session.expires_at <= now:
            return None
        return self._users.find_by_id(session.user_id)

    def delete_by_token(self, token: str) -> int:
        return 1 if self._sessions.pop(token, None) is not None else 0

    def delete_for_user(self, user_id: str) -> int:
        stale = [t for t, s in self._sessions.items() if s.user_id == user_id]
        for token in stale:
            del self._sessions[token]
        return len(stale)

    def delete_expired(self, now: datetime) -> int:
        stale = [t for t, s in self._sessions.items() if s.expires_at <= now]
        for token in stale:
            del self._sessions[token]
        return len(stale)

    def count(self) -> int:
        return len(self._sessions)


class DeterministicHasher(PasswordHasher):
    def hash(self, password: str) -> str:
        return f"hashed:{password}"

    def verify(self, password: str, hashed: str) -> bool:
        return hashed == f"hashed:{password}"
