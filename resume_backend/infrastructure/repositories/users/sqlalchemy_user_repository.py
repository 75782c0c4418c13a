# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from resume_backend.domain.users.entities import Session as DomainSession
from resume_backend.domain.users.entities import User as DomainUser
from resume_backend.domain.users.exceptions import UserAlreadyExistsError
from resume_backend.domain.users.repositories import SessionRepository, UserRepository
from resume_backend.infrastructure.db.models import SessionToken, User
from resume_backend.infrastructure.unit_of_work import unit_of_work_scope


def _aware(value: datetime) -> datetime:
    # SQLite hands back naive datetimes even for timezone-aware columns
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value


def _to_domain(row: User) -> DomainUser:
    return DomainUser(
        id=row.id,
        email=row.email,
        password_hash=row.password_hash,
        created_at=_aware(row.created_at),
    )


class SqlAlchemyUserRepository(UserRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def find_by_email(self, email: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(select(User).where(User.email == email)).first()
            return _to_domain(row) if row else None

    def find_by_id(self, user_id: str) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.get(User, user_id)
            return _to_domain(row) if row else None

    def add(self, email: str, password_hash: str) -> DomainUser:
        try:
            with unit_of_work_scope(self._session_factory) as session:
                row = User(email=email, password_hash=password_hash)
                session.add(row)
                session.flush()
                session.refresh(row)
                return _to_domain(row)
        except IntegrityError as exc:
            # lost a race with a concurrent registration for the same email
            raise UserAlreadyExistsError() from exc

    def update_password_hash(self, user_id: str, password_hash: str) -> bool:
        with unit_of_work_scope(self._session_factory) as session:
            result = session.execute(
                update(User).where(User.id == user_id).values(password_hash=password_hash)
            )
            return bool(result.rowcount)


class SqlAlchemySessionRepository(SessionRepository):
    def __init__(self, session_factory: Callable[[], Session]):
        self._session_factory = session_factory

    def add(self, user_id: str, token: str, expires_at: datetime) -> DomainSession:
        with unit_of_work_scope(self._session_factory) as session:
            row = SessionToken(user_id=user_id, token=token, expires_at=expires_at)
            session.add(row)
            session.flush()
            return DomainSession(
                id=row.id, user_id=user_id, token=token, expires_at=_aware(expires_at)
            )

    def find_active_user(self, token: str, now: datetime) -> DomainUser | None:
        with unit_of_work_scope(self._session_factory) as session:
            row = session.scalars(
                select(User)
                .join(SessionToken, SessionToken.user_id == User.id)
                .where(SessionToken.token == token, SessionToken.expires_at > now)
            ).first()
            return _to_domain(row) if row else None

    def delete_by_token(self, token: str) -> int:
        with unit_of_work_scope(self._session_factory) as session:
            result = session.execute(delete(SessionToken).where(SessionToken.token == token))
            return int(result.rowcount or 0)

    def delete_for_user(self, user_id: str) -> int:
        with unit_of_work_scope(self._session_factory) as session:
            result = session.execute(
                delete(SessionToken).where(SessionToken.user_id == user_id)
            )
            return int(result.rowcount or 0)

    def delete_expired(self, now: datetime) -> int:
        with unit_of_work_scope(self._session_factory) as session:
            result = session.execute(
                delete(SessionToken).where(SessionToken.expires_at <= now)
            )
            return int(result.rowcount or 0)
