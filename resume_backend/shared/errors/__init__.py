from .base import (
    AppError,
    DomainError,
    NotFoundError,
    UnauthenticatedError,
    ValidationError,
)
from .http import handle_app_error, register_error_handler

__all__ = [
    "AppError",
    "DomainError",
    "NotFoundError",
    "UnauthenticatedError",
    "ValidationError",
    "handle_app_error",
    "register_error_handler",
]
