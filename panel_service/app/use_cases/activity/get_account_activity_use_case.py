"""
Get Account Activity Use Case

Lists the signed-in user's own activity for display.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID

from panel_service.app.services.translator import DEFAULT_LOCALE
from panel_service.app.services.unit_of_work import UnitOfWork
from panel_service.domain.base import utcnow
from panel_service.domain.references import ActorReference
from panel_service.libs.result import Error, Result, Return
from .activity_log_service import ActivityLogService
from .dtos import ActivityEntry, ActivityListResponse, SubjectInfo
from .summary import render_summary


class GetAccountActivityUseCase:
    """
    Use case for listing a user's activity.

    Business Rules:
    - Only the caller's own activity is returned
    - Disabled/legacy events are left out
    - Results ordered by newest first with cursor-based pagination
    - Each entry carries a rendered HTML summary
    """

    def __init__(self, uow: UnitOfWork, activity: ActivityLogService, locale: str = DEFAULT_LOCALE):
        self.uow = uow
        self.activity = activity
        self.locale = locale

    async def execute(
        self,
        user_id: UUID,
        limit: int = 50,
        cursor: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> Result[ActivityListResponse]:
        """
        Errors:
            - USER_NOT_FOUND: Token refers to a missing or deleted user
        """
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)

        if user is None:
            return Return.err(Error("USER_NOT_FOUND", "User not found"))

        records, subjects, next_cursor = await self.activity.list_for_display(
            ActorReference.for_model(user), limit=limit, cursor=cursor
        )

        now = now or utcnow()
        entries = [
            ActivityEntry(
                id=str(record.id),
                batch=str(record.batch) if record.batch else None,
                event=record.event,
                ip=record.ip,
                description=record.description,
                properties=record.properties or {},
                timestamp=record.timestamp.isoformat() + "Z",
                subjects=[
                    SubjectInfo(type=s.subject_type, id=s.subject_id)
                    for s in subjects.get(record.id, [])
                ],
                summary=render_summary(record, actor=user, now=now, locale=self.locale),
            )
            for record in records
        ]

        return Return.ok(ActivityListResponse(data=entries, next_cursor=next_cursor))
