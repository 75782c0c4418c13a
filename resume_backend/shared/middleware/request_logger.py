# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

import hashlib
import secrets
import time

from flask import Flask, g, request

from resume_backend.shared.logging import (
    clear_correlation_id,
    get_correlation_id,
    logger,
    set_correlation_id,
)

_SENSITIVE_HEADERS = {"authorization", "cookie", "x-auth-token", "x-session-id"}


def _get_client_ip() -> str:
    forwarded = request.headers.get("X-Forwarded-For")
    if forwarded:
        return forwarded.split(",")[0].strip()

    return request.remote_addr or "unknown"


def _sanitize_headers(headers: dict[str, str]) -> dict[str, str]:
    sanitized = {}
    for key, value in headers.items():
        if key.lower() in _SENSITIVE_HEADERS:
            sanitized[key] = f"<hashed:{hashlib.sha256(value.encode()).hexdigest()[:8]}>"
        else:
            sanitized[key] = value

    return sanitized


def _log_request_start(debug_mode: bool) -> None:
    if debug_mode:
        headers = _sanitize_headers(dict(request.headers))
        logger.info(
            f"Request started: {request.method} {request.path} "
            f"from {_get_client_ip()}, headers={headers}, "
            f"body_size={len(request.get_data(cache=True))}"
        )
    else:
        logger.info(f"Request: {request.method} {request.path} from {_get_client_ip()}")


def _log_request_end(status_code: int, start_time: float) -> None:
    duration = time.perf_counter() - start_time
    user_id = getattr(g, "user_id", None)
    logger.info(
        f"Response: {request.method} {request.path} "
        f"status={status_code}, duration={duration:.3f}s, user={user_id}"
    )


def configure_request_logging(app: Flask, *, debug_mode: bool = False) -> None:
    @app.before_request
    def _before_request() -> None:
        correlation_id = request.headers.get("X-Request-ID") or secrets.token_urlsafe(8)
        set_correlation_id(correlation_id)
        g.request_start_time = time.perf_counter()
        _log_request_start(debug_mode)

    @app.after_request
    def _after_request(response):
        start_time = getattr(g, "request_start_time", time.perf_counter())
        _log_request_end(response.status_code, start_time)
        response.headers.setdefault("X-Request-ID", get_correlation_id())
        return response

    @app.teardown_request
    def _teardown_request(exc: BaseException | None) -> None:
        if exc is not None:
            logger.error(
                f"Request error: {type(exc).__name__} on {request.method} {request.path}"
            )
        clear_correlation_id()


__all__ = ["configure_request_logging"]
