"""
Panel Service Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class PasswordResetStatus(str, Enum):
    """
    Password broker outcome.

    Values double as translation keys for the user-facing message.
    """

    reset_ok = "passwords.reset"
    reset_link_sent = "passwords.sent"
    invalid_token = "passwords.token"
    expired_token = "passwords.expired"
    invalid_user = "passwords.user"
    throttled = "passwords.throttled"

    @property
    def code(self) -> str:
        return self.name.upper()
