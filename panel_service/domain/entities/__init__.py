"""
Panel Service Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import PasswordResetStatus

# Export all entities
from .user import User
from .session import Session
from .password_reset_token import PasswordResetToken
from .activity_log import ActivityLog, ActivityLogSubject, DISABLED_EVENTS

__all__ = [
    # Enums
    "PasswordResetStatus",
    # Entities
    "User",
    "Session",
    "PasswordResetToken",
    "ActivityLog",
    "ActivityLogSubject",
    # Constants
    "DISABLED_EVENTS",
]
