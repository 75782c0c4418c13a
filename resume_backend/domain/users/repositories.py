# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from datetime import datetime
from typing import Protocol

from .entities import IssuedToken, Session, TokenClaims, User


class UserRepository(Protocol):
    def find_by_email(self, email: str) -> User | None: ...
    def find_by_id(self, user_id: str) -> User | None: ...
    def add(self, email: str, password_hash: str) -> User: ...
    def update_password_hash(self, user_id: str, password_hash: str) -> bool: ...


class SessionRepository(Protocol):
    def add(self, user_id: str, token: str, expires_at: datetime) -> Session: ...
    def find_active_user(self, token: str, now: datetime) -> User | None: ...
    def delete_by_token(self, token: str) -> int: ...
    def delete_for_user(self, user_id: str) -> int: ...
    def delete_expired(self, now: datetime) -> int: ...


class PasswordHasher(Protocol):
    def hash(self, password: str) -> str: ...
    def verify(self, password: str, hashed: str) -> bool: ...


class TokenCodec(Protocol):
    def issue(self, user_id: str, email: str, now: datetime) -> IssuedToken: ...
    def decode(self, token: str) -> TokenClaims: ...
