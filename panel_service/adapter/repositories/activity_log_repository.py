import base64
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple
from uuid import UUID

from sqlalchemy import and_, delete, or_
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from panel_service.app.repositories.activity_log_repository import IActivityLogRepository
from panel_service.domain.entities import ActivityLog, ActivityLogSubject
from panel_service.domain.references import ActorReference


def encode_cursor(activity: ActivityLog) -> str:
    position = f"{activity.timestamp.isoformat()}|{activity.id}"
    return base64.b64encode(position.encode("utf-8")).decode("utf-8")


def decode_cursor(cursor: str) -> Optional[Tuple[datetime, UUID]]:
    """None for a malformed cursor, which restarts the listing from the newest record."""
    try:
        timestamp_str, id_str = base64.b64decode(cursor).decode("utf-8").split("|", 1)
        return datetime.fromisoformat(timestamp_str), UUID(id_str)
    except ValueError:
        return None


class ActivityLogRepository(IActivityLogRepository):
    """ActivityLog repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(
        self, activity: ActivityLog, subjects: Sequence[ActivityLogSubject] = ()
    ) -> ActivityLog:
        """Insert an activity record and its subjects (never updated afterwards)"""
        self.session.add(activity)
        await self.session.flush()

        for subject in subjects:
            subject.activity_log_id = activity.id
            self.session.add(subject)
        if subjects:
            await self.session.flush()

        await self.session.refresh(activity)
        return activity

    async def get_by_event(self, event: str) -> List[ActivityLog]:
        """Get activity records whose event matches exactly"""
        stmt = select(ActivityLog).where(ActivityLog.event == event)
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_actor(self, actor: ActorReference) -> List[ActivityLog]:
        """Get activity records performed by the given actor"""
        stmt = select(ActivityLog).where(
            ActivityLog.actor_type == actor.type, ActivityLog.actor_id == actor.id
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_actor_paginated(
        self,
        actor: ActorReference,
        exclude_events: Sequence[str] = (),
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Tuple[List[ActivityLog], Optional[str]]:
        """
        Get activity records for an actor with cursor-based pagination.

        Cursor format: base64-encoded "<ISO timestamp>|<id>" of the last record
        returned. Records sharing a timestamp are ordered by id.
        """
        stmt = select(ActivityLog).where(
            ActivityLog.actor_type == actor.type, ActivityLog.actor_id == actor.id
        )
        if exclude_events:
            stmt = stmt.where(ActivityLog.event.not_in(list(exclude_events)))

        # Apply cursor if provided
        position = decode_cursor(cursor) if cursor else None
        if position is not None:
            cursor_timestamp, cursor_id = position
            stmt = stmt.where(
                or_(
                    ActivityLog.timestamp < cursor_timestamp,
                    and_(ActivityLog.timestamp == cursor_timestamp, ActivityLog.id < cursor_id),
                )
            )

        # Newest first, fetch one extra row to detect another page
        stmt = stmt.order_by(ActivityLog.timestamp.desc(), ActivityLog.id.desc()).limit(limit + 1)

        result = await self.session.exec(stmt)
        records = list(result.all())

        has_more = len(records) > limit
        if has_more:
            records = records[:limit]

        next_cursor = None
        if has_more and records:
            next_cursor = encode_cursor(records[-1])

        return records, next_cursor

    async def get_subjects(
        self, activity_ids: Sequence[UUID]
    ) -> Dict[UUID, List[ActivityLogSubject]]:
        """Get subjects grouped by activity id"""
        grouped: Dict[UUID, List[ActivityLogSubject]] = defaultdict(list)
        if not activity_ids:
            return grouped

        stmt = select(ActivityLogSubject).where(
            ActivityLogSubject.activity_log_id.in_(list(activity_ids))
        )
        result = await self.session.exec(stmt)
        for subject in result.all():
            grouped[subject.activity_log_id].append(subject)
        return grouped

    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete records with timestamp <= cutoff. Returns count removed."""
        expired_ids = select(ActivityLog.id).where(ActivityLog.timestamp <= cutoff)

        await self.session.execute(
            delete(ActivityLogSubject).where(ActivityLogSubject.activity_log_id.in_(expired_ids))
        )
        result = await self.session.execute(
            delete(ActivityLog).where(ActivityLog.timestamp <= cutoff)
        )
        await self.session.flush()
        return result.rowcount
