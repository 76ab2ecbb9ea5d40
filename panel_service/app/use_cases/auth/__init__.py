"""
Authentication Use Cases

Password reset flows.
"""

from .request_password_reset_use_case import RequestPasswordResetUseCase
from .reset_password_use_case import ResetPasswordUseCase
from .dtos import (
    ResetPasswordCommand,
    RequestPasswordResetResponse,
    ResetPasswordResponse,
    ResetPasswordResult,
    IssuedSession,
)

__all__ = [
    # Use Cases
    "RequestPasswordResetUseCase",
    "ResetPasswordUseCase",
    # DTOs - Commands
    "ResetPasswordCommand",
    # DTOs - Responses
    "RequestPasswordResetResponse",
    "ResetPasswordResponse",
    "ResetPasswordResult",
    "IssuedSession",
]
