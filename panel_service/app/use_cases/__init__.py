"""
Use Cases

Organized by domain folder:
- auth/: Password reset flows
- activity/: Activity log recording, listing and pruning
"""

from .auth import (
    RequestPasswordResetUseCase,
    ResetPasswordUseCase,
)
from .activity import (
    ActivityLogService,
    ActivityLogPruner,
    GetAccountActivityUseCase,
)

__all__ = [
    # Auth
    "RequestPasswordResetUseCase",
    "ResetPasswordUseCase",
    # Activity
    "ActivityLogService",
    "ActivityLogPruner",
    "GetAccountActivityUseCase",
]
