"""Password hashing strategies."""

from __future__ import annotations

import bcrypt

from resume_backend.domain.users.repositories import PasswordHasher

# bcrypt>=5 raises on longer input; older releases and bcryptjs truncated silently
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class BcryptPasswordHasher(PasswordHasher):
    def __init__(self, rounds: int = 10) -> None:
        self._rounds = rounds

    def hash(self, password: str) -> str:
        salt = bcrypt.gensalt(rounds=self._rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def verify(self, password: str, hashed: str) -> bool:
        try:
            return bcrypt.checkpw(_encode(password), hashed.encode("utf-8"))
        except ValueError:
            # malformed stored hash
            return False
