# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib

from flask import Request

from resume_backend.application.use_cases.users.verify_session import VerifySessionUseCase
from resume_backend.domain.users.entities import PublicUser
from resume_backend.shared.errors.base import AppError
from resume_backend.shared.logging import logger

_BEARER_PREFIX = "Bearer "


def _token_fingerprint(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()[:8]


class RequestAuthorizer:
    """Resolve the caller of a request to a user, or ``None``; never raises."""

    def __init__(
        self,
        *,
        verify_session: VerifySessionUseCase,
        cookie_name: str = "auth_token",
        legacy_cookie_name: str = "auth-token",
    ) -> None:
        self._verify_session = verify_session
        self._cookie_name = cookie_name
        self._legacy_cookie_name = legacy_cookie_name

    def extract_token(self, req: Request) -> str | None:
        """First present source wins: cookie, legacy cookie, then bearer header."""

        token = req.cookies.get(self._cookie_name)
        if token:
            return token

        token = req.cookies.get(self._legacy_cookie_name)
        if token:
            return token

        header = req.headers.get("Authorization", "")
        if header.startswith(_BEARER_PREFIX):
            token = header[len(_BEARER_PREFIX):].strip()
            if token:
                return token

        return None

    def authorize(self, req: Request) -> PublicUser | None:
        token: str | None = None
        try:
            token = self.extract_token(req)
            if not token:
                logger.debug(f"auth: no credential on {req.method} {req.path}")
                return None
            return self._verify_session.execute(token)
        except AppError as exc:
            logger.debug(f"auth: rejected {exc.code} on {req.method} {req.path}")
            return None
        except Exception:
            logger.exception(
                f"auth: verification error on {req.method} {req.path} "
                f"tok=<hash:{_token_fingerprint(token or '')}>"
            )
            return None


__all__ = ["RequestAuthorizer"]
