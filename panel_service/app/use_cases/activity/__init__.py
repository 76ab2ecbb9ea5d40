"""
Activity Use Cases

Recording, listing and pruning the activity log.
"""

from .activity_log_service import ActivityLogService
from .activity_log_pruner import ActivityConfigurationError, ActivityLogPruner, validate_prune_days
from .get_account_activity_use_case import GetAccountActivityUseCase
from .listeners import PasswordResetActivityListener, log_activity
from .summary import render_summary
from .dtos import RecordActivityCommand, ActivityEntry, ActivityListResponse

__all__ = [
    "ActivityLogService",
    "ActivityLogPruner",
    "ActivityConfigurationError",
    "validate_prune_days",
    "GetAccountActivityUseCase",
    "PasswordResetActivityListener",
    "log_activity",
    "render_summary",
    "RecordActivityCommand",
    "ActivityEntry",
    "ActivityListResponse",
]
