"""
Activity Log Pruner

Age-based deletion of activity records, run on a schedule.
"""

import logging
from datetime import datetime, timedelta
from typing import Any, Optional

from panel_service.app.services.unit_of_work import UnitOfWork
from panel_service.domain.base import utcnow

logger = logging.getLogger(__name__)


class ActivityConfigurationError(ValueError):
    """Retention window for activity pruning is missing or invalid."""


def validate_prune_days(prune_days: Any) -> int:
    if prune_days is None:
        raise ActivityConfigurationError(
            'Cannot prune activity logs: no "ACTIVITY_PRUNE_DAYS" configuration value is set.'
        )
    if isinstance(prune_days, bool) or not isinstance(prune_days, int) or prune_days <= 0:
        raise ActivityConfigurationError(
            f'Cannot prune activity logs: "ACTIVITY_PRUNE_DAYS" must be a positive integer, got {prune_days!r}.'
        )
    return prune_days


class ActivityLogPruner:
    """
    Deletes activity records at or past the retention window.

    The window is checked when the pruner is built so a bad configuration
    fails at startup rather than on the first scheduled run.
    """

    def __init__(self, uow: UnitOfWork, prune_days: Any):
        self.uow = uow
        self.prune_days = validate_prune_days(prune_days)

    def cutoff(self, now: datetime) -> datetime:
        return now - timedelta(days=self.prune_days)

    async def prune(self, now: Optional[datetime] = None) -> int:
        """Delete records with timestamp <= now - prune_days. Returns count removed."""
        cutoff = self.cutoff(now or utcnow())

        async with self.uow:
            removed = await self.uow.activity_logs.delete_older_than(cutoff)
            await self.uow.commit()

        logger.info(f"Pruned {removed} activity log(s) older than {cutoff.isoformat()}")
        return removed
