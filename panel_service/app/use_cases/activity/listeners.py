"""
Event listeners that feed or observe the activity log.
"""

import logging

from panel_service.domain.events import ActivityLogged, PasswordReset
from panel_service.domain.references import ActorReference
from .activity_log_service import ActivityLogService

logger = logging.getLogger(__name__)


class PasswordResetActivityListener:
    """Records an event:password-reset activity for the affected user."""

    def __init__(self, activity: ActivityLogService):
        self.activity = activity

    async def __call__(self, event: PasswordReset) -> None:
        reference = ActorReference.for_model(event.user)
        await self.activity.record(
            "event:password-reset",
            ip=event.ip,
            actor=reference,
            subjects=[reference],
        )


async def log_activity(event: ActivityLogged) -> None:
    activity = event.activity
    actor = f"{activity.actor_type}:{activity.actor_id}" if activity.actor_type else "system"
    logger.info(f"Activity logged: {activity.event} by {actor} from {activity.ip}")
