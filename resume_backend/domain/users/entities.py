# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Any


@dataclass(slots=True, frozen=True)
class User:

    id: str
    email: str
    password_hash: str
    created_at: datetime

    def public(self) -> PublicUser:
        return PublicUser(id=self.id, email=self.email, created_at=self.created_at)


@dataclass(slots=True, frozen=True)
class PublicUser:
    """User as exposed outside the service layer, without the password hash."""

    id: str
    email: str
    created_at: datetime

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "email": self.email,
            "created_at": self.created_at.isoformat(),
        }


@dataclass(slots=True, frozen=True)
class Session:

    id: int
    user_id: str
    token: str
    expires_at: datetime


@dataclass(slots=True, frozen=True)
class TokenClaims:
    """Payload embedded in a signed session token."""

    user_id: str
    email: str
    expires_at: datetime
    issued_at: datetime
    token_id: str


@dataclass(slots=True, frozen=True)
class IssuedToken:

    token: str
    claims: TokenClaims
