from fastapi import APIRouter, Depends, Request, Response, status
from pydantic import BaseModel, EmailStr, Field, model_validator

from config import ApplicationConfig
from panel_service.adapter.services.password_broker import PasswordBroker
from panel_service.api.error import ClientError, ServerError
from panel_service.app.services.event_dispatcher import EventDispatcher
from panel_service.app.services.unit_of_work import UnitOfWork
from panel_service.app.use_cases.auth import (
    RequestPasswordResetUseCase,
    ResetPasswordUseCase,
    ResetPasswordCommand,
    RequestPasswordResetResponse,
    ResetPasswordResponse,
)
from panel_service.depends import (
    ACCESS_TOKEN_COOKIE,
    REFRESH_TOKEN_COOKIE,
    get_event_dispatcher,
    get_password_broker,
    get_unit_of_work,
)

router = APIRouter(prefix="/auth", tags=["Authentication"])

BROKER_REJECTIONS = ("INVALID_TOKEN", "EXPIRED_TOKEN", "INVALID_USER")


def client_ip(request: Request) -> str:
    return request.client.host if request.client else "127.0.0.1"


class RequestPasswordResetRequest(BaseModel):
    """
    Request password reset HTTP request payload

    Validates incoming password reset request.
    """

    email: EmailStr = Field(..., description="User email address")


@router.post("/password/email", status_code=status.HTTP_200_OK, response_model=RequestPasswordResetResponse)
async def request_password_reset(
    request: RequestPasswordResetRequest,
    uow: UnitOfWork = Depends(get_unit_of_work),
    broker: PasswordBroker = Depends(get_password_broker),
):
    """
    Request Password Reset

    Issues a password reset token for the account. Delivery of the token
    happens outside this service.

    Security:
        - No email enumeration (same response for valid/invalid emails)
        - Token is cryptographically secure (32 bytes), stored as SHA-256

    Raises:
        - 429 Too Many Requests: A token was issued moments ago
        - 500 Internal Server Error: Server error
    """
    use_case = RequestPasswordResetUseCase(uow, broker, locale=ApplicationConfig.LOCALE)
    result = await use_case.execute(request.email)

    if result.is_err():
        error = result.error
        if error.code == "THROTTLED":
            raise ClientError(error, status_code=status.HTTP_429_TOO_MANY_REQUESTS)
        raise ServerError(error)

    return result.value


class ResetPasswordRequest(BaseModel):
    """
    Reset password HTTP request payload

    Validates incoming reset request; the password must be confirmed.
    """

    token: str = Field(..., min_length=1, description="Password reset token")
    email: EmailStr = Field(..., description="User email address")
    password: str = Field(..., min_length=8, description="New password (min 8 chars)")
    password_confirmation: str = Field(..., description="Repeat of the new password")

    @model_validator(mode="after")
    def passwords_match(self):
        if self.password != self.password_confirmation:
            raise ValueError("The password confirmation does not match.")
        return self


@router.post("/password/reset", status_code=status.HTTP_200_OK, response_model=ResetPasswordResponse)
async def reset_password(
    request: ResetPasswordRequest,
    http_request: Request,
    response: Response,
    uow: UnitOfWork = Depends(get_unit_of_work),
    broker: PasswordBroker = Depends(get_password_broker),
    dispatcher: EventDispatcher = Depends(get_event_dispatcher),
):
    """
    Reset Password

    Validates the reset token with the password broker, stores the new
    password and rotates the remember token. Accounts without two-factor
    authentication get a fresh session (cookies); two-factor accounts are
    sent back to the login form (send_to_login=true).

    Raises:
        - 400 Bad Request: Invalid/expired token, unknown user, weak password
        - 422 Unprocessable Entity: Invalid input (handled by FastAPI)
        - 429 Too Many Requests: Broker throttled the reset
        - 500 Internal Server Error: Server error
    """
    command = ResetPasswordCommand(
        token=request.token,
        email=request.email,
        password=request.password,
        ip=client_ip(http_request),
    )

    use_case = ResetPasswordUseCase(
        uow,
        broker,
        dispatcher,
        redirect_to=ApplicationConfig.RESET_REDIRECT_TO,
        locale=ApplicationConfig.LOCALE,
    )
    result = await use_case.execute(command)

    if result.is_err():
        error = result.error
        if error.code in BROKER_REJECTIONS or error.code == "INVALID_PASSWORD":
            raise ClientError(error, status_code=status.HTTP_400_BAD_REQUEST)
        elif error.code == "THROTTLED":
            raise ClientError(error, status_code=status.HTTP_429_TOO_MANY_REQUESTS)
        raise ServerError(error)

    outcome = result.value
    if outcome.session is not None:
        cookie_options = {
            "httponly": True,
            "secure": ApplicationConfig.SESSION_COOKIE_SECURE,
            "samesite": "lax",
        }
        response.set_cookie(ACCESS_TOKEN_COOKIE, outcome.session.access_token, **cookie_options)
        response.set_cookie(REFRESH_TOKEN_COOKIE, outcome.session.refresh_token, **cookie_options)

    return outcome.response
