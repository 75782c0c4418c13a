# SPDX-License-Identifier: Apache-2.0
# Copyright 2025 Vova Orig

from __future__ import annotations

from flask import Blueprint, Response, g, jsonify, request
from pydantic import ValidationError

from resume_backend.application.use_cases.users.login_user import LoginUserUseCase
from resume_backend.application.use_cases.users.logout_user import LogoutUserUseCase
from resume_backend.application.use_cases.users.register_user import RegisterUserUseCase
from resume_backend.application.use_cases.users.update_password import UpdatePasswordUseCase
from resume_backend.domain.users.exceptions import InvalidCredentialsError
from resume_backend.infrastructure.audit import AuditAction, AuditLogger
from resume_backend.infrastructure.auth import RequestAuthorizer
from resume_backend.interfaces.http.auth import AuthCookies, auth_required, unauthorized
from resume_backend.interfaces.http.dto.auth import (
    LoginRequestDTO,
    RegisterRequestDTO,
    SuccessDTO,
    UpdatePasswordRequestDTO,
)
from resume_backend.shared.errors import ValidationError as AppValidationError
from resume_backend.shared.errors.validation import raise_validation_error
from resume_backend.shared.logging import logger


def _get_client_ip() -> str | None:
    ip_address = request.headers.get("X-Forwarded-For", request.remote_addr)
    if ip_address and "," in ip_address:
        ip_address = ip_address.split(",")[0].strip()
    return ip_address


def _json_body() -> object:
    return request.get_json(silent=True) or {}


class AuthController:
    def __init__(
        self,
        *,
        register_use_case: RegisterUserUseCase,
        login_use_case: LoginUserUseCase,
        logout_use_case: LogoutUserUseCase,
        update_password_use_case: UpdatePasswordUseCase,
        authorizer: RequestAuthorizer,
        cookies: AuthCookies,
        audit: AuditLogger,
    ) -> None:
        self._register_use_case = register_use_case
        self._login_use_case = login_use_case
        self._logout_use_case = logout_use_case
        self._update_password_use_case = update_password_use_case
        self._authorizer = authorizer
        self._cookies = cookies
        self._audit = audit

    def register(self) -> tuple[Response, int]:
        try:
            dto = RegisterRequestDTO.model_validate(_json_body())
        except ValidationError as exc:
            raise_validation_error(exc)

        user = self._register_use_case.execute(dto.email, dto.password)

        self._audit.log(
            AuditAction.REGISTER,
            user_id=user.id,
            ip_address=_get_client_ip(),
            success=True,
        )
        logger.info(f"auth.register: ok user_id={user.id}")
        return jsonify({"user": user.to_dict()}), 200

    def login(self) -> tuple[Response, int]:
        try:
            dto = LoginRequestDTO.model_validate(_json_body())
        except ValidationError as exc:
            raise_validation_error(exc)

        ip_address = _get_client_ip()

        try:
            result = self._login_use_case.execute(dto.email, dto.password)
        except InvalidCredentialsError:
            self._audit.log(
                AuditAction.LOGIN_FAILED,
                ip_address=ip_address,
                details={"email": dto.email},
                success=False,
            )
            raise

        self._audit.log(
            AuditAction.LOGIN_SUCCESS,
            user_id=result.user.id,
            ip_address=ip_address,
            success=True,
        )

        response = jsonify({"user": result.user.to_dict(), "token": result.token})
        self._cookies.set(response, result.token)
        logger.info(f"auth.login: ok user_id={result.user.id}")
        return response, 200

    def logout(self) -> tuple[Response, int]:
        token = self._authorizer.extract_token(request)
        if not token:
            return unauthorized(self._cookies)

        self._logout_use_case.execute(token)

        self._audit.log(AuditAction.LOGOUT, ip_address=_get_client_ip(), success=True)

        response = jsonify(SuccessDTO().model_dump())
        self._cookies.clear(response)
        logger.info("auth.logout: ok")
        return response, 200

    def me(self) -> tuple[Response, int]:
        if not self._authorizer.extract_token(request):
            return unauthorized(self._cookies)

        user = self._authorizer.authorize(request)
        if user is None:
            return unauthorized(self._cookies, "Invalid or expired session")

        g.user_id = user.id
        return jsonify({"user": user.to_dict()}), 200

    def update_password(self) -> tuple[Response, int]:
        try:
            dto = UpdatePasswordRequestDTO.model_validate(_json_body())
        except ValidationError as exc:
            raise_validation_error(exc)

        user_id = g.user_id
        updated = self._update_password_use_case.execute(
            user_id, dto.current_password, dto.new_password
        )
        self._audit.log(
            AuditAction.PASSWORD_CHANGED if updated else AuditAction.PASSWORD_CHANGE_FAILED,
            user_id=user_id,
            ip_address=_get_client_ip(),
            success=updated,
        )
        if not updated:
            raise AppValidationError(
                "password_not_updated", message="Current password is incorrect"
            )
        return jsonify(SuccessDTO().model_dump()), 200

    def as_blueprint(self) -> Blueprint:
        bp = Blueprint("auth", __name__, url_prefix="/api/auth")
        bp.add_url_rule("/register", view_func=self.register, methods=["POST"])
        bp.add_url_rule("/login", view_func=self.login, methods=["POST"])
        bp.add_url_rule("/logout", view_func=self.logout, methods=["POST"])
        bp.add_url_rule("/me", view_func=self.me, methods=["GET"])
        bp.add_url_rule(
            "/password",
            endpoint="update_password",
            view_func=auth_required(self.update_password),
            methods=["PUT"],
        )
        return bp
