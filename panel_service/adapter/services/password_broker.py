"""
Password Broker

Issues and validates password reset tokens stored as SHA-256 hashes.
"""

import hashlib
import logging
import secrets
from datetime import datetime, timedelta
from typing import Callable, Optional, Tuple

from panel_service.app.services.password_broker import IPasswordBroker, ResetCredentials
from panel_service.app.services.unit_of_work import UnitOfWork
from panel_service.domain.base import utcnow
from panel_service.domain.entities import PasswordResetStatus, PasswordResetToken, User

logger = logging.getLogger(__name__)


def hash_token(token: str) -> str:
    return hashlib.sha256(token.encode()).hexdigest()


class PasswordBroker(IPasswordBroker):
    """
    Token broker backed by the password_reset_tokens table.

    Business Rules:
    - Plain tokens are 32 bytes of urlsafe randomness, only the hash is stored
    - Tokens expire after expire_minutes
    - One token per user per throttle_seconds
    - A token only resets the account it was issued for
    - Consumed tokens are marked used and cannot be replayed
    """

    def __init__(
        self,
        uow: UnitOfWork,
        expire_minutes: int = 60,
        throttle_seconds: int = 60,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.expire_minutes = expire_minutes
        self.throttle_seconds = throttle_seconds
        self.clock = clock

    async def create_token(self, email: str) -> Tuple[PasswordResetStatus, Optional[str]]:
        user = await self.uow.users.get_by_email(email)
        if user is None:
            return PasswordResetStatus.invalid_user, None

        now = self.clock()
        latest = await self.uow.password_reset_tokens.get_latest_by_user_id(user.id)
        if latest is not None and latest.created_at > now - timedelta(seconds=self.throttle_seconds):
            return PasswordResetStatus.throttled, None

        plain_token = secrets.token_urlsafe(32)
        await self.uow.password_reset_tokens.create(
            PasswordResetToken(
                user_id=user.id,
                token_hash=hash_token(plain_token),
                used=False,
                created_at=now,
                expires_at=now + timedelta(minutes=self.expire_minutes),
            )
        )

        return PasswordResetStatus.reset_link_sent, plain_token

    async def validate_and_consume(
        self, credentials: ResetCredentials
    ) -> Tuple[PasswordResetStatus, Optional[User]]:
        user = await self.uow.users.get_by_email(credentials.email)
        if user is None:
            return PasswordResetStatus.invalid_user, None

        if not credentials.token:
            return PasswordResetStatus.invalid_token, None

        reset_token = await self.uow.password_reset_tokens.get_by_token_hash(
            hash_token(credentials.token)
        )
        if reset_token is None or reset_token.user_id != user.id or reset_token.used:
            return PasswordResetStatus.invalid_token, None

        if reset_token.expires_at <= self.clock():
            return PasswordResetStatus.expired_token, None

        reset_token.used = True
        await self.uow.password_reset_tokens.update(reset_token)
        logger.debug(f"Consumed password reset token {reset_token.id} for user {user.id}")

        return PasswordResetStatus.reset_ok, user
