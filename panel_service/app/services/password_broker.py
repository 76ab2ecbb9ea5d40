from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional, Tuple

from panel_service.domain.entities import PasswordResetStatus, User


@dataclass(frozen=True)
class ResetCredentials:
    token: str
    email: str


class IPasswordBroker(ABC):
    """
    Issues and validates password reset tokens.

    Runs inside the caller's unit of work; nothing is committed here.
    """

    @abstractmethod
    async def create_token(self, email: str) -> Tuple[PasswordResetStatus, Optional[str]]:
        """
        Issue a reset token for the account with this email.

        Returns:
            (reset_link_sent, plain_token) on success, otherwise
            (invalid_user | throttled, None)
        """
        pass

    @abstractmethod
    async def validate_and_consume(
        self, credentials: ResetCredentials
    ) -> Tuple[PasswordResetStatus, Optional[User]]:
        """
        Validate a reset token for the account and mark it used.

        Returns:
            (reset_ok, user) on success; the token can no longer be used.
            (invalid_user | invalid_token | expired_token, None) otherwise.
        """
        pass
