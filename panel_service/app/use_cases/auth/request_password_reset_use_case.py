"""
Request Password Reset Use Case

Issues a password reset token through the password broker.
"""

import logging

from panel_service.app.services.password_broker import IPasswordBroker
from panel_service.app.services.translator import DEFAULT_LOCALE, trans
from panel_service.app.services.unit_of_work import UnitOfWork
from panel_service.domain.entities import PasswordResetStatus
from panel_service.libs.result import Error, Result, Return
from .dtos import RequestPasswordResetResponse

logger = logging.getLogger(__name__)


class RequestPasswordResetUseCase:
    """
    Use case for requesting password reset.

    Business Rules:
    - No email enumeration (same response for valid/invalid emails)
    - Repeated requests inside the broker throttle window are rejected
    - Delivery of the token is handled outside this service
    """

    def __init__(self, uow: UnitOfWork, broker: IPasswordBroker, locale: str = DEFAULT_LOCALE):
        self.uow = uow
        self.broker = broker
        self.locale = locale

    async def execute(self, email: str) -> Result[RequestPasswordResetResponse]:
        """
        Execute request password reset use case.

        Args:
            email: User's email address

        Returns:
            Result with reset status, or Error

        Errors:
            - THROTTLED: A token was issued for this account moments ago
        """
        async with self.uow:
            status, _ = await self.broker.create_token(email)

            if status == PasswordResetStatus.throttled:
                return Return.err(Error(status.code, trans(status.value, locale=self.locale)))

            if status == PasswordResetStatus.reset_link_sent:
                await self.uow.commit()
                logger.info("Issued password reset token")

            return Return.ok(
                RequestPasswordResetResponse(
                    status="sent",
                    message=trans(PasswordResetStatus.reset_link_sent.value, locale=self.locale),
                )
            )
