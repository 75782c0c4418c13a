"""Application dependency container."""

from __future__ import annotations

from datetime import timedelta
from functools import cached_property

from resume_backend.application.services.password_hashing import BcryptPasswordHasher
from resume_backend.application.services.tokens import JwtTokenCodec
from resume_backend.application.services.verification_cache import VerifiedTokenCache
from resume_backend.application.use_cases.users.login_user import LoginUserUseCase
from resume_backend.application.use_cases.users.logout_user import LogoutUserUseCase
from resume_backend.application.use_cases.users.register_user import RegisterUserUseCase
from resume_backend.application.use_cases.users.sweep_sessions import (
    SweepExpiredSessionsUseCase,
)
from resume_backend.application.use_cases.users.update_password import UpdatePasswordUseCase
from resume_backend.application.use_cases.users.verify_session import VerifySessionUseCase
from resume_backend.infrastructure.audit import AuditLogger
from resume_backend.infrastructure.auth import RequestAuthorizer
from resume_backend.infrastructure.db import Database
from resume_backend.infrastructure.repositories.users import (
    SqlAlchemySessionRepository,
    SqlAlchemyUserRepository,
)
from resume_backend.infrastructure.session_sweeper import SessionSweeper
from resume_backend.interfaces.http.auth import AuthCookies
from resume_backend.interfaces.http.controllers.auth_controller import AuthController
from resume_backend.interfaces.http.controllers.misc_controller import MiscController
from resume_backend.interfaces.http.gatekeeper import EdgeGatekeeper
from resume_backend.shared.config import AppConfig


class Container:
    def __init__(self, config: AppConfig, database: Database | None = None) -> None:
        self.config = config
        self.database = database or Database(config.database)

    @cached_property
    def password_hasher(self) -> BcryptPasswordHasher:
        return BcryptPasswordHasher(rounds=self.config.auth.bcrypt_rounds)

    @cached_property
    def token_codec(self) -> JwtTokenCodec:
        auth = self.config.auth
        return JwtTokenCodec(
            auth.jwt_secret,
            algorithm=auth.jwt_algorithm,
            ttl=timedelta(days=auth.token_ttl_days),
        )

    @cached_property
    def verification_cache(self) -> VerifiedTokenCache | None:
        ttl = self.config.auth.verify_cache_ttl
        if ttl <= 0:
            return None
        return VerifiedTokenCache(ttl)

    @cached_property
    def user_repository(self) -> SqlAlchemyUserRepository:
        return SqlAlchemyUserRepository(self.database.session_factory)

    @cached_property
    def session_repository(self) -> SqlAlchemySessionRepository:
        return SqlAlchemySessionRepository(self.database.session_factory)

    @cached_property
    def audit_logger(self) -> AuditLogger:
        return AuditLogger(self.database.session_factory)

    @cached_property
    def register_user_use_case(self) -> RegisterUserUseCase:
        return RegisterUserUseCase(
            users=self.user_repository,
            password_hasher=self.password_hasher,
        )

    @cached_property
    def login_user_use_case(self) -> LoginUserUseCase:
        return LoginUserUseCase(
            users=self.user_repository,
            sessions=self.session_repository,
            password_hasher=self.password_hasher,
            tokens=self.token_codec,
        )

    @cached_property
    def verify_session_use_case(self) -> VerifySessionUseCase:
        return VerifySessionUseCase(
            sessions=self.session_repository,
            tokens=self.token_codec,
            cache=self.verification_cache,
        )

    @cached_property
    def logout_user_use_case(self) -> LogoutUserUseCase:
        return LogoutUserUseCase(
            sessions=self.session_repository,
            cache=self.verification_cache,
        )

    @cached_property
    def update_password_use_case(self) -> UpdatePasswordUseCase:
        return UpdatePasswordUseCase(
            users=self.user_repository,
            sessions=self.session_repository,
            password_hasher=self.password_hasher,
            revoke_sessions=self.config.auth.revoke_sessions_on_password_change,
            cache=self.verification_cache,
        )

    @cached_property
    def sweep_sessions_use_case(self) -> SweepExpiredSessionsUseCase:
        return SweepExpiredSessionsUseCase(sessions=self.session_repository)

    @cached_property
    def session_sweeper(self) -> SessionSweeper:
        return SessionSweeper(
            sweep=self.sweep_sessions_use_case,
            interval_seconds=self.config.auth.session_sweep_interval,
            audit=self.audit_logger,
        )

    @cached_property
    def request_authorizer(self) -> RequestAuthorizer:
        return RequestAuthorizer(
            verify_session=self.verify_session_use_case,
            cookie_name=self.config.auth.cookie_name,
            legacy_cookie_name=self.config.auth.legacy_cookie_name,
        )

    @cached_property
    def auth_cookies(self) -> AuthCookies:
        return AuthCookies(
            name=self.config.auth.cookie_name,
            secure=self.config.cookie_secure(),
            samesite=self.config.security.cookie_samesite,
            max_age=self.config.auth.token_ttl_seconds,
        )

    @cached_property
    def edge_gatekeeper(self) -> EdgeGatekeeper:
        gk = self.config.gatekeeper
        return EdgeGatekeeper(
            protected_prefixes=gk.protected_prefixes,
            cookie_name=self.config.auth.cookie_name,
            me_url=gk.me_url,
            redirect_to=gk.redirect_to,
            timeout=gk.timeout,
        )

    @cached_property
    def auth_controller(self) -> AuthController:
        return AuthController(
            register_use_case=self.register_user_use_case,
            login_use_case=self.login_user_use_case,
            logout_use_case=self.logout_user_use_case,
            update_password_use_case=self.update_password_use_case,
            authorizer=self.request_authorizer,
            cookies=self.auth_cookies,
            audit=self.audit_logger,
        )

    @cached_property
    def misc_controller(self) -> MiscController:
        return MiscController(database=self.database)
