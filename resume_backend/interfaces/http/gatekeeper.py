# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

"""Page-level guard: protected paths are only served to callers with a live session.

The check is delegated to the ``/api/auth/me`` endpoint so the guard holds no
token logic of its own; any failure on that call counts as "not signed in".
"""

from __future__ import annotations

from collections.abc import Iterable
from urllib.parse import urljoin

import httpx
from flask import Flask, Request, redirect, request

from resume_backend.shared.logging import logger

ME_PATH = "/api/auth/me"


class EdgeGatekeeper:
    def __init__(
        self,
        *,
        protected_prefixes: Iterable[str],
        cookie_name: str = "auth_token",
        me_url: str | None = None,
        redirect_to: str = "/",
        timeout: float = 5.0,
        transport: httpx.BaseTransport | None = None,
    ) -> None:
        self._prefixes = tuple(p.rstrip("/") or "/" for p in protected_prefixes)
        self._cookie_name = cookie_name
        self._me_url = me_url
        self._redirect_to = redirect_to
        self._timeout = timeout
        self._transport = transport

    def is_protected(self, path: str) -> bool:
        for prefix in self._prefixes:
            if prefix == "/":
                return True
            if path == prefix or path.startswith(prefix + "/"):
                return True
        return False

    def _resolve_me_url(self, req: Request) -> str:
        if self._me_url:
            return self._me_url
        return urljoin(req.host_url, ME_PATH.lstrip("/"))

    def _has_live_session(self, req: Request, token: str) -> bool:
        url = self._resolve_me_url(req)
        try:
            with httpx.Client(transport=self._transport, timeout=self._timeout) as client:
                resp = client.get(url, headers={"Cookie": f"{self._cookie_name}={token}"})
        except Exception as exc:
            logger.warning(f"gatekeeper: session check failed for {req.path}: {exc}")
            return False
        return resp.is_success

    def check(self, req: Request):
        """Return a redirect response to short-circuit the request, or ``None`` to let it through."""

        if not self.is_protected(req.path):
            return None

        token = req.cookies.get(self._cookie_name)
        if not token:
            logger.info(f"gatekeeper: no session cookie, redirecting {req.path}")
            return redirect(self._redirect_to)

        if not self._has_live_session(req, token):
            logger.info(f"gatekeeper: session rejected, redirecting {req.path}")
            return redirect(self._redirect_to)

        return None


def configure_edge_gatekeeper(app: Flask, gatekeeper: EdgeGatekeeper) -> None:
    @app.before_request
    def _guard_protected_pages():
        return gatekeeper.check(request)


__all__ = ["EdgeGatekeeper", "ME_PATH", "configure_edge_gatekeeper"]
