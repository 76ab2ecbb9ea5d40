"""
Authentication Use Case DTOs (Data Transfer Objects)

All Command and Response classes for auth domain.
Provides type safety and clear contracts between layers.
"""

from typing import Optional
from pydantic import BaseModel


# ============================================================================
# Command DTOs
# ============================================================================


class ResetPasswordCommand(BaseModel):
    """Reset a password using a token issued by the password broker"""

    token: str
    email: str
    password: str
    ip: str


# ============================================================================
# Response DTOs
# ============================================================================


class RequestPasswordResetResponse(BaseModel):
    """Response for request password reset use case"""

    status: str
    message: str


class ResetPasswordResponse(BaseModel):
    """HTTP-facing response for reset password use case"""

    success: bool
    redirect_to: str
    send_to_login: bool


class IssuedSession(BaseModel):
    """Session established for the user after a password reset"""

    session_id: str
    access_token: str
    refresh_token: str


class ResetPasswordResult(BaseModel):
    """Reset password outcome; session is None when two-factor is enabled"""

    response: ResetPasswordResponse
    session: Optional[IssuedSession] = None
