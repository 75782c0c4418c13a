# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Periodic removal of expired session rows."""

from __future__ import annotations

import threading

from resume_backend.application.use_cases.users.sweep_sessions import (
    SweepExpiredSessionsUseCase,
)
from resume_backend.infrastructure.audit import AuditAction, AuditLogger
from resume_backend.shared.logging import logger


class SessionSweeper:
    def __init__(
        self,
        *,
        sweep: SweepExpiredSessionsUseCase,
        interval_seconds: float,
        audit: AuditLogger | None = None,
    ) -> None:
        self._sweep = sweep
        self._interval = interval_seconds
        self._audit = audit
        self._stop = threading.Event()
        self._thread: threading.Thread | None = None

    @property
    def running(self) -> bool:
        return self._thread is not None and self._thread.is_alive()

    def sweep_once(self) -> int:
        deleted = self._sweep.execute()
        if deleted and self._audit is not None:
            self._audit.log(AuditAction.SESSIONS_SWEPT, details={"deleted": deleted})
        return deleted

    def _run(self) -> None:
        logger.info(f"sessions.sweeper: started interval={self._interval}s")
        while not self._stop.wait(self._interval):
            try:
                self.sweep_once()
            except Exception:
                logger.exception("sessions.sweeper: sweep failed")
        logger.info("sessions.sweeper: stopped")

    def start(self) -> None:
        if self._interval <= 0 or self.running:
            return
        self._stop.clear()
        self._thread = threading.Thread(target=self._run, name="session-sweeper", daemon=True)
        self._thread.start()

    def stop(self, timeout: float | None = 5.0) -> None:
        self._stop.set()
        if self._thread is not None:
            self._thread.join(timeout)
            self._thread = None


__all__ = ["SessionSweeper"]
