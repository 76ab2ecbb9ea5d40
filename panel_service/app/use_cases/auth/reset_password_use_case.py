"""
Reset Password Use Case

Resets an account password from a broker-issued token and, unless the account
uses two-factor authentication, signs the user straight back in.
"""

import logging
import secrets
import string
from datetime import timedelta

import bcrypt

from panel_service.api.utils.jwt import generate_jwt
from panel_service.app.services.event_dispatcher import EventDispatcher
from panel_service.app.services.password_broker import IPasswordBroker, ResetCredentials
from panel_service.app.services.translator import DEFAULT_LOCALE, trans
from panel_service.app.services.unit_of_work import UnitOfWork
from panel_service.domain.base import utcnow
from panel_service.domain.entities import PasswordResetStatus, Session, User
from panel_service.domain.events import PasswordReset
from panel_service.libs.result import Error, Result, Return
from .dtos import IssuedSession, ResetPasswordCommand, ResetPasswordResponse, ResetPasswordResult

logger = logging.getLogger(__name__)

REMEMBER_TOKEN_LENGTH = 60
REMEMBER_TOKEN_ALPHABET = string.ascii_letters + string.digits
SESSION_LIFETIME = timedelta(days=30)


def generate_remember_token(length: int = REMEMBER_TOKEN_LENGTH) -> str:
    return "".join(secrets.choice(REMEMBER_TOKEN_ALPHABET) for _ in range(length))


class ResetPasswordUseCase:
    """
    Use case for resetting a password with a reset token.

    Business Rules:
    - Token verification and account lookup belong to the password broker
    - Password hash and remember token change in a single user update
    - Token consumption, user update and session changes share one commit
    - Existing sessions are revoked on every successful reset
    - A new session is created only when use_totp is off; two-factor users
      are sent back to the login form instead
    - PasswordReset is dispatched once, after the commit
    - Broker failures change nothing and map to a translated message
    """

    def __init__(
        self,
        uow: UnitOfWork,
        broker: IPasswordBroker,
        dispatcher: EventDispatcher,
        redirect_to: str = "/",
        locale: str = DEFAULT_LOCALE,
    ):
        self.uow = uow
        self.broker = broker
        self.dispatcher = dispatcher
        self.redirect_to = redirect_to
        self.locale = locale

    def _validate_password(self, password: str) -> Result[None]:
        if len(password) < 8:
            return Return.err(
                Error(
                    "INVALID_PASSWORD",
                    "Password must be at least 8 characters long",
                )
            )

        return Return.ok(None)

    async def execute(self, command: ResetPasswordCommand) -> Result[ResetPasswordResult]:
        """
        Execute reset password use case.

        Args:
            command: token, email, new password and request ip

        Returns:
            Result with ResetPasswordResult, or Error

        Errors:
            - INVALID_PASSWORD: Password does not meet complexity requirements
            - INVALID_TOKEN / EXPIRED_TOKEN / INVALID_USER / THROTTLED:
              broker rejected the reset, message is translated
        """
        password_validation = self._validate_password(command.password)
        if password_validation.is_err():
            return Return.err(password_validation.error)

        async with self.uow:
            status, user = await self.broker.validate_and_consume(
                ResetCredentials(token=command.token, email=command.email)
            )

            if status != PasswordResetStatus.reset_ok:
                logger.info(f"Password reset rejected: {status.code}")
                return Return.err(Error(status.code, trans(status.value, locale=self.locale)))

            user.password_hash = bcrypt.hashpw(
                command.password.encode(), bcrypt.gensalt(12)
            ).decode()
            user.remember_token = generate_remember_token()
            await self.uow.users.update(user)

            await self.uow.sessions.revoke_all_by_user_id(user.id)

            # Two-factor accounts must log in again and pass the checkpoint
            issued = None
            if not user.use_totp:
                issued = await self._login(user)

            await self.uow.commit()

        await self.dispatcher.dispatch(PasswordReset(user=user, ip=command.ip))

        return Return.ok(
            ResetPasswordResult(
                response=ResetPasswordResponse(
                    success=True,
                    redirect_to=self.redirect_to,
                    send_to_login=user.use_totp,
                ),
                session=issued,
            )
        )

    async def _login(self, user: User) -> IssuedSession:
        refresh_token = secrets.token_urlsafe(32)
        refresh_token_hash = bcrypt.hashpw(refresh_token.encode(), bcrypt.gensalt(12))

        session = Session(
            user_id=user.id,
            refresh_token_hash=refresh_token_hash.decode(),
            expires_at=utcnow() + SESSION_LIFETIME,
        )
        await self.uow.sessions.create(session)

        return IssuedSession(
            session_id=str(session.id),
            access_token=generate_jwt(user.id, session_id=session.id),
            refresh_token=refresh_token,
        )
