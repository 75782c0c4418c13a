# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

import sys
from functools import lru_cache
from typing import Annotated

from pydantic import Field, field_validator, model_validator
from pydantic_settings import BaseSettings, NoDecode, SettingsConfigDict

_SETTINGS_CONFIG = SettingsConfigDict(
    env_file=".env",
    env_file_encoding="utf-8",
    extra="ignore",
    validate_by_name=True,
)

_INSECURE_SECRETS = ("dev", "development", "test", "fallback-secret", "")

DEFAULT_PROTECTED_PREFIXES = [
    "/dashboard",
    "/resume/create",
    "/resume/tailor",
    "/editor",
    "/profile",
]


def _as_bool(value: str | bool) -> bool:
    if isinstance(value, str):
        return value.lower() in ("1", "true", "yes")
    return bool(value)


def _as_list(value: str | list[str]) -> list[str]:
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class DatabaseConfig(BaseSettings):
    url: str = Field("sqlite:///app.db", alias="DATABASE_URL")
    pool_size: int = Field(10, ge=1, alias="DATABASE_POOL_SIZE")
    max_overflow: int = Field(5, ge=0, alias="DATABASE_MAX_OVERFLOW")
    pool_timeout: float = Field(30.0, ge=0.1, alias="DATABASE_POOL_TIMEOUT")

    model_config = _SETTINGS_CONFIG


class AuthConfig(BaseSettings):
    jwt_secret: str = Field("dev", alias="JWT_SECRET")
    jwt_algorithm: str = Field("HS256", alias="JWT_ALGORITHM")
    token_ttl_days: int = Field(7, ge=1, alias="TOKEN_TTL_DAYS")
    bcrypt_rounds: int = Field(10, ge=4, le=31, alias="BCRYPT_ROUNDS")
    cookie_name: str = Field("auth_token", alias="AUTH_COOKIE_NAME")
    legacy_cookie_name: str = Field("auth-token", alias="AUTH_LEGACY_COOKIE_NAME")
    revoke_sessions_on_password_change: bool = Field(
        False, alias="REVOKE_SESSIONS_ON_PASSWORD_CHANGE"
    )
    # 0 disables the verified-token cache; the cache is per process, so with several
    # workers a revoked token can stay accepted elsewhere for up to this many seconds
    verify_cache_ttl: float = Field(0.0, ge=0.0, alias="VERIFY_CACHE_TTL")
    # 0 disables the background sweeper
    session_sweep_interval: float = Field(3600.0, ge=0.0, alias="SESSION_SWEEP_INTERVAL")

    model_config = _SETTINGS_CONFIG

    @field_validator("revoke_sessions_on_password_change", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        return _as_bool(value)

    @property
    def token_ttl_seconds(self) -> int:
        return self.token_ttl_days * 24 * 60 * 60


class GatekeeperConfig(BaseSettings):
    protected_prefixes: Annotated[list[str], NoDecode] = Field(
        default_factory=lambda: list(DEFAULT_PROTECTED_PREFIXES), alias="PROTECTED_PREFIXES"
    )
    # required in production; when unset the request host is used (development only)
    me_url: str | None = Field(None, alias="AUTH_ME_URL")
    redirect_to: str = Field("/", alias="GATEKEEPER_REDIRECT")
    timeout: float = Field(5.0, ge=0.1, alias="GATEKEEPER_TIMEOUT")

    model_config = _SETTINGS_CONFIG

    @field_validator("protected_prefixes", mode="before")
    @classmethod
    def _parse_prefixes(cls, value: str | list[str]) -> list[str]:
        return _as_list(value)


class SecurityConfig(BaseSettings):
    cookie_secure: bool = Field(False, alias="COOKIE_SECURE")
    cookie_samesite: str = Field("Strict", alias="COOKIE_SAMESITE")

    allowed_origins: Annotated[list[str], NoDecode] = Field(["*"], alias="ALLOWED_ORIGINS")

    enable_hsts: bool = Field(False, alias="ENABLE_HSTS")

    model_config = _SETTINGS_CONFIG

    @field_validator("allowed_origins", mode="before")
    @classmethod
    def _parse_origins(cls, value: str | list[str]) -> list[str]:
        return _as_list(value)

    @field_validator("cookie_secure", "enable_hsts", mode="before")
    @classmethod
    def _parse_bool(cls, value: str | bool) -> bool:
        return _as_bool(value)


def _database_config_factory() -> DatabaseConfig:
    return DatabaseConfig()  # type: ignore[call-arg]


def _auth_config_factory() -> AuthConfig:
    return AuthConfig()  # type: ignore[call-arg]


def _gatekeeper_config_factory() -> GatekeeperConfig:
    return GatekeeperConfig()  # type: ignore[call-arg]


def _security_config_factory() -> SecurityConfig:
    return SecurityConfig()  # type: ignore[call-arg]


class AppConfig(BaseSettings):
    app_env: str = Field("development", alias="APP_ENV")
    secret_key: str = Field("dev", alias="SECRET_KEY")
    debug_logging: bool = Field(False, alias="DEBUG_LOGGING")

    database: DatabaseConfig = Field(default_factory=_database_config_factory)
    auth: AuthConfig = Field(default_factory=_auth_config_factory)
    gatekeeper: GatekeeperConfig = Field(default_factory=_gatekeeper_config_factory)
    security: SecurityConfig = Field(default_factory=_security_config_factory)

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
        validate_by_name=True,
        validate_assignment=True,
    )

    @field_validator("debug_logging", mode="before")
    @classmethod
    def _parse_debug_logging(cls, value: str | bool) -> bool:
        return _as_bool(value)

    @model_validator(mode="after")
    def _validate_production_settings(self) -> "AppConfig":
        if not self.is_production():
            return self

        insecure = [
            name
            for name, value in (
                ("SECRET_KEY", self.secret_key),
                ("JWT_SECRET", self.auth.jwt_secret),
            )
            if value in _INSECURE_SECRETS
        ]
        if insecure:
            print(
                f"\n❌ CRITICAL SECURITY ERROR: Insecure {', '.join(insecure)} detected in production!\n"
                "   Secrets must be strong random values in production.\n"
                "   Generate one with: python -c \"import secrets; print(secrets.token_urlsafe(32))\"\n",
                file=sys.stderr,
            )
            sys.exit(1)

        if self.gatekeeper.protected_prefixes and not self.gatekeeper.me_url:
            print(
                "\n❌ CRITICAL SECURITY ERROR: AUTH_ME_URL is not set in production!\n"
                "   Without it the page guard would call back to whatever host the request names.\n"
                "   Set it to this service's internal URL, e.g. http://127.0.0.1:5000/api/auth/me\n",
                file=sys.stderr,
            )
            sys.exit(1)

        warnings = []
        if "*" in self.security.allowed_origins:
            warnings.append("⚠️  CORS allows wildcard (*) origins")
        if not self.security.enable_hsts:
            warnings.append("⚠️  HSTS is DISABLED (recommended for HTTPS)")

        if warnings:
            print("\n⚠️  PRODUCTION SECURITY WARNINGS:", file=sys.stderr)
            for warning in warnings:
                print(f"   {warning}", file=sys.stderr)
            print(
                "   Consider enabling these security features in production.\n",
                file=sys.stderr,
            )

        return self

    def is_production(self) -> bool:
        return self.app_env.lower() in ("production", "prod")

    def cookie_secure(self) -> bool:
        return self.is_production() or self.security.cookie_secure


@lru_cache(maxsize=1)
def load_config() -> AppConfig:
    return AppConfig()  # type: ignore[call-arg]


__all__ = [
    "AppConfig",
    "AuthConfig",
    "DatabaseConfig",
    "GatekeeperConfig",
    "SecurityConfig",
    "load_config",
]
