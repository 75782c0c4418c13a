# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from resume_backend.domain.users.entities import PublicUser
from resume_backend.domain.users.exceptions import UserAlreadyExistsError
from resume_backend.domain.users.repositories import PasswordHasher, UserRepository
from resume_backend.shared.logging import logger


class RegisterUserUseCase:
    def __init__(
        self,
        *,
        users: UserRepository,
        password_hasher: PasswordHasher,
    ) -> None:
        self._users = users
        self._password_hasher = password_hasher

    def execute(self, email: str, password: str) -> PublicUser:
        if self._users.find_by_email(email) is not None:
            raise UserAlreadyExistsError()
        hashed = self._password_hasher.hash(password)
        user = self._users.add(email, hashed)
        logger.info(f"users.register: created user_id={user.id}")
        return user.public()
