"""
Scheduled activity log prune.

Run from cron (or any scheduler), e.g. daily:

    0 3 * * * cd /srv/panel && python prune.py
"""

import asyncio
import logging
import sys

from config import ApplicationConfig
from panel_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from panel_service.app.use_cases.activity import ActivityConfigurationError, ActivityLogPruner
from panel_service.depends import AsyncSessionLocal

logger = logging.getLogger("prune")


async def run() -> int:
    async with AsyncSessionLocal() as session:
        pruner = ActivityLogPruner(SqlAlchemyUnitOfWork(session), ApplicationConfig.ACTIVITY_PRUNE_DAYS)
        return await pruner.prune()


def main() -> int:
    logging.basicConfig(
        level=ApplicationConfig.LOG_LEVEL,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        removed = asyncio.run(run())
    except ActivityConfigurationError as e:
        logger.error(str(e))
        return 1

    print(f"Pruned {removed} activity log record(s)")
    return 0


if __name__ == "__main__":
    sys.exit(main())
