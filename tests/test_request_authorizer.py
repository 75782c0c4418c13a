from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import MagicMock

from flask import Flask, request

from resume_backend.domain.users.entities import PublicUser
from resume_backend.domain.users.exceptions import InvalidSessionError
from resume_backend.infrastructure.auth import RequestAuthorizer

USER = PublicUser(id="user-1", email="a@x.io", created_at=datetime(2026, 1, 1, tzinfo=UTC))

app = Flask(__name__)


def _authorizer(verify: MagicMock) -> RequestAuthorizer:
    return RequestAuthorizer(verify_session=verify)


def test_cookie_takes_precedence_over_bearer() -> None:
    authorizer = _authorizer(MagicMock())
    headers = {
        "Cookie": "auth_token=from-cookie; auth-token=from-legacy",
        "Authorization": "Bearer from-header",
    }

    with app.test_request_context("/", headers=headers):
        assert authorizer.extract_token(request) == "from-cookie"


def test_legacy_cookie_then_bearer() -> None:
    authorizer = _authorizer(MagicMock())

    with app.test_request_context("/", headers={"Cookie": "auth-token=legacy"}):
        assert authorizer.extract_token(request) == "legacy"
    with app.test_request_context("/", headers={"Authorization": "Bearer header-token"}):
        assert authorizer.extract_token(request) == "header-token"
    with app.test_request_context("/", headers={"Authorization": "Basic abc"}):
        assert authorizer.extract_token(request) is None


def test_authorize_returns_user_for_valid_token() -> None:
    verify = MagicMock()
    verify.execute.return_value = USER

    with app.test_request_context("/", headers={"Authorization": "Bearer tok"}):
        assert _authorizer(verify).authorize(request) == USER

    verify.execute.assert_called_once_with("tok")


def test_authorize_without_token_skips_verification() -> None:
    verify = MagicMock()

    with app.test_request_context("/"):
        assert _authorizer(verify).authorize(request) is None

    verify.execute.assert_not_called()


def test_authorize_maps_failures_to_none() -> None:
    verify = MagicMock()
    verify.execute.side_effect = InvalidSessionError()

    with app.test_request_context("/", headers={"Authorization": "Bearer tok"}):
        assert _authorizer(verify).authorize(request) is None

    verify.execute.side_effect = RuntimeError("database unavailable")

    with app.test_request_context("/", headers={"Authorization": "Bearer tok"}):
        assert _authorizer(verify).authorize(request) is None
