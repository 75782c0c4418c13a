from __future__ import annotations

from datetime import UTC, datetime, timedelta

import pytest
from flask import Flask
from sqlalchemy import func, select

from resume_backend.app import create_app
from resume_backend.container import Container
from resume_backend.infrastructure.db.models import AuditLog, SessionToken, User
from resume_backend.shared.config import AppConfig, AuthConfig, DatabaseConfig

CREDENTIALS = {"email": "a@x.io", "password": "password1"}


def _count(container: Container, model) -> int:
    with container.database.session_scope() as session:
        return session.scalar(select(func.count()).select_from(model))


def test_register_login_me_logout_flow(app: Flask, container: Container) -> None:
    with app.test_client() as client:
        register = client.post("/api/auth/register", json=CREDENTIALS)
        assert register.status_code == 200
        user = register.get_json()["user"]
        assert user["email"] == "a@x.io"
        assert "password" not in user and "password_hash" not in user

        login = client.post("/api/auth/login", json=CREDENTIALS)
        assert login.status_code == 200
        body = login.get_json()
        assert body["user"]["id"] == user["id"]
        assert body["token"]
        assert client.get_cookie("auth_token").value == body["token"]

        me = client.get("/api/auth/me")
        assert me.status_code == 200
        assert me.get_json()["user"] == user

        logout = client.post("/api/auth/logout")
        assert logout.status_code == 200
        assert logout.get_json() == {"success": True}
        assert client.get_cookie("auth_token") is None

        me_after = client.get("/api/auth/me")
        assert me_after.status_code == 401

    assert _count(container, User) == 1
    assert _count(container, SessionToken) == 0


def test_duplicate_register_leaves_user_count_unchanged(app: Flask, container: Container) -> None:
    with app.test_client() as client:
        assert client.post("/api/auth/register", json=CREDENTIALS).status_code == 200
        duplicate = client.post(
            "/api/auth/register", json={"email": "a@x.io", "password": "different-pass"}
        )

    assert duplicate.status_code == 409
    assert duplicate.get_json()["message"] == "User with this email already exists"
    assert _count(container, User) == 1


def test_password_is_stored_hashed(app: Flask, container: Container) -> None:
    with app.test_client() as client:
        client.post("/api/auth/register", json=CREDENTIALS)

    with container.database.session_scope() as session:
        stored = session.scalars(select(User)).one()
        assert stored.password_hash != "password1"
        assert stored.password_hash.startswith("$2")


def test_bearer_token_is_accepted(app: Flask) -> None:
    with app.test_client() as client:
        client.post("/api/auth/register", json=CREDENTIALS)
        token = client.post("/api/auth/login", json=CREDENTIALS).get_json()["token"]

    with app.test_client() as fresh:
        me = fresh.get("/api/auth/me", headers={"Authorization": f"Bearer {token}"})

    assert me.status_code == 200
    assert me.get_json()["user"]["email"] == "a@x.io"


def test_logout_twice_second_call_still_succeeds(app: Flask, container: Container) -> None:
    with app.test_client() as client:
        client.post("/api/auth/register", json=CREDENTIALS)
        token = client.post("/api/auth/login", json=CREDENTIALS).get_json()["token"]
        headers = {"Authorization": f"Bearer {token}"}

        first = client.post("/api/auth/logout", headers=headers)
        second = client.post("/api/auth/logout", headers=headers)

    assert first.status_code == 200
    assert second.status_code == 200
    assert _count(container, SessionToken) == 0


def test_one_logout_does_not_end_other_sessions(app: Flask) -> None:
    with app.test_client() as client:
        client.post("/api/auth/register", json=CREDENTIALS)
        first = client.post("/api/auth/login", json=CREDENTIALS).get_json()["token"]
        second = client.post("/api/auth/login", json=CREDENTIALS).get_json()["token"]

    # a client without the cookie, so the Bearer header decides which session ends
    with app.test_client() as other:
        logout = other.post("/api/auth/logout", headers={"Authorization": f"Bearer {first}"})
        assert logout.status_code == 200

    with app.test_client() as fresh:
        assert (
            fresh.get("/api/auth/me", headers={"Authorization": f"Bearer {first}"}).status_code
            == 401
        )
        assert (
            fresh.get("/api/auth/me", headers={"Authorization": f"Bearer {second}"}).status_code
            == 200
        )


@pytest.mark.parametrize("password", ["p" * 72, "пароль" * 6])
def test_register_and_login_with_72_byte_password(app: Flask, password: str) -> None:
    credentials = {"email": "long@x.io", "password": password}

    with app.test_client() as client:
        assert client.post("/api/auth/register", json=credentials).status_code == 200
        assert client.post("/api/auth/login", json=credentials).status_code == 200


@pytest.mark.parametrize("password", ["p" * 80, "пароль" * 7])
def test_register_over_72_bytes_returns_400(
    app: Flask, container: Container, password: str
) -> None:
    with app.test_client() as client:
        response = client.post(
            "/api/auth/register", json={"email": "long@x.io", "password": password}
        )

    assert response.status_code == 400
    assert response.get_json()["message"] == "Password must be at most 72 bytes long"
    assert _count(container, User) == 0


def test_expired_session_row_is_rejected(app: Flask, container: Container) -> None:
    with app.test_client() as client:
        client.post("/api/auth/register", json=CREDENTIALS)
        client.post("/api/auth/login", json=CREDENTIALS)

        with container.database.session_scope() as session:
            row = session.scalars(select(SessionToken)).one()
            row.expires_at = datetime.now(UTC) - timedelta(minutes=1)
            session.commit()

        me = client.get("/api/auth/me")

    assert me.status_code == 401
    assert me.get_json()["message"] == "Invalid or expired session"


def test_legacy_cookie_name_is_accepted(app: Flask) -> None:
    with app.test_client() as client:
        client.post("/api/auth/register", json=CREDENTIALS)
        token = client.post("/api/auth/login", json=CREDENTIALS).get_json()["token"]

    with app.test_client() as fresh:
        fresh.set_cookie("auth-token", token)
        me = fresh.get("/api/auth/me")

    assert me.status_code == 200


def test_login_failure_is_audited(app: Flask, container: Container) -> None:
    with app.test_client() as client:
        client.post("/api/auth/register", json=CREDENTIALS)
        failed = client.post(
            "/api/auth/login", json={"email": "a@x.io", "password": "wrong-password"}
        )

    assert failed.status_code == 401
    with container.database.session_scope() as session:
        actions = session.scalars(select(AuditLog.action)).all()
    assert "register" in actions
    assert "login_failed" in actions


def test_update_password_flow(app: Flask) -> None:
    with app.test_client() as client:
        client.post("/api/auth/register", json=CREDENTIALS)
        client.post("/api/auth/login", json=CREDENTIALS)

        changed = client.put(
            "/api/auth/password",
            json={"current_password": "password1", "new_password": "password2"},
        )
        assert changed.status_code == 200

        # existing session survives the change
        assert client.get("/api/auth/me").status_code == 200

        old = client.post("/api/auth/login", json=CREDENTIALS)
        new = client.post(
            "/api/auth/login", json={"email": "a@x.io", "password": "password2"}
        )

    assert old.status_code == 401
    assert new.status_code == 200


def test_password_change_revokes_sessions_when_configured() -> None:
    config = AppConfig(
        secret_key="test-secret-key",
        database=DatabaseConfig(url="sqlite://"),
        auth=AuthConfig(
            jwt_secret="test-jwt-secret",
            bcrypt_rounds=4,
            session_sweep_interval=0,
            revoke_sessions_on_password_change=True,
            verify_cache_ttl=30,
        ),
    )
    container = Container(config)
    app = create_app(container=container)

    try:
        with app.test_client() as client:
            client.post("/api/auth/register", json=CREDENTIALS)
            client.post("/api/auth/login", json=CREDENTIALS)
            assert client.get("/api/auth/me").status_code == 200

            changed = client.put(
                "/api/auth/password",
                json={"current_password": "password1", "new_password": "password2"},
            )
            assert changed.status_code == 200
            assert client.get("/api/auth/me").status_code == 401
    finally:
        container.database.dispose()


def test_health_reports_database(app: Flask) -> None:
    with app.test_client() as client:
        response = client.get("/api/health")

    assert response.status_code == 200
    assert response.get_json() == {"ok": True, "database": "ok"}


@pytest.mark.parametrize("header", ["X-Frame-Options", "X-Content-Type-Options"])
def test_security_headers_present(app: Flask, header: str) -> None:
    with app.test_client() as client:
        response = client.get("/api/health")

    assert header in response.headers


def test_request_id_is_echoed(app: Flask) -> None:
    with app.test_client() as client:
        response = client.get("/api/health", headers={"X-Request-ID": "req-123"})

    assert response.headers["X-Request-ID"] == "req-123"
