# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import json
from collections.abc import Callable
from datetime import UTC, datetime
from enum import Enum
from typing import Any

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from resume_backend.infrastructure.db.models import AuditLog
from resume_backend.shared.logging import logger


class AuditAction(str, Enum):
    REGISTER = "register"
    LOGIN_SUCCESS = "login_success"
    LOGIN_FAILED = "login_failed"
    LOGOUT = "logout"
    PASSWORD_CHANGED = "password_changed"
    PASSWORD_CHANGE_FAILED = "password_change_failed"
    SESSIONS_SWEPT = "sessions_swept"


_SENSITIVE_KEYS = {"password", "token", "secret", "hash", "cookie"}


def _sanitize_details(details: dict[str, Any]) -> dict[str, Any]:
    sanitized = {}
    for key, value in details.items():
        if any(sensitive in key.lower() for sensitive in _SENSITIVE_KEYS):
            sanitized[key] = "***REDACTED***"
        else:
            sanitized[key] = value

    return sanitized


class AuditLogger:
    """Logs security events and mirrors them into the audit_logs table.

    Storage failures are logged and dropped; an audit write never fails the request.
    """

    def __init__(self, session_factory: Callable[[], Session] | None = None) -> None:
        self._session_factory = session_factory

    def log(
        self,
        action: AuditAction,
        user_id: str | None = None,
        ip_address: str | None = None,
        details: dict[str, Any] | None = None,
        success: bool = True,
    ) -> None:
        safe_details = _sanitize_details(details) if details else {}

        message = (
            f"AUDIT: {action.value} | "
            f"user_id={user_id} | "
            f"ip={ip_address} | "
            f"success={success}"
        )
        if safe_details:
            message += f" | details={safe_details}"

        if success:
            logger.info(message)
        else:
            logger.warning(message)

        if self._session_factory is not None:
            self._store(action, user_id, ip_address, success, safe_details)

    def _store(
        self,
        action: AuditAction,
        user_id: str | None,
        ip_address: str | None,
        success: bool,
        details: dict[str, Any],
    ) -> None:
        assert self._session_factory is not None
        db = self._session_factory()
        try:
            db.add(
                AuditLog(
                    timestamp=datetime.now(UTC),
                    action=action.value,
                    user_id=user_id,
                    ip_address=ip_address,
                    success=success,
                    details_json=json.dumps(details, default=str) if details else None,
                )
            )
            db.commit()
        except SQLAlchemyError as exc:
            db.rollback()
            logger.warning(f"Failed to store audit log in database: {exc}")
        finally:
            db.close()


__all__ = ["AuditAction", "AuditLogger"]
