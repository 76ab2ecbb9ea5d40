from abc import ABC, abstractmethod
from datetime import datetime
from typing import Dict, List, Optional, Sequence, Tuple
from uuid import UUID

from panel_service.domain.entities import ActivityLog, ActivityLogSubject
from panel_service.domain.references import ActorReference


class IActivityLogRepository(ABC):
    """ActivityLog repository interface - application layer"""

    @abstractmethod
    async def create(
        self, activity: ActivityLog, subjects: Sequence[ActivityLogSubject] = ()
    ) -> ActivityLog:
        """Insert an activity record and its subjects (never updated afterwards)"""
        pass

    @abstractmethod
    async def get_by_event(self, event: str) -> List[ActivityLog]:
        """Get activity records whose event matches exactly"""
        pass

    @abstractmethod
    async def get_by_actor(self, actor: ActorReference) -> List[ActivityLog]:
        """Get activity records performed by the given actor"""
        pass

    @abstractmethod
    async def get_by_actor_paginated(
        self,
        actor: ActorReference,
        exclude_events: Sequence[str] = (),
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Tuple[List[ActivityLog], Optional[str]]:
        """
        Get activity records for an actor with cursor-based pagination.

        Returns:
            Tuple of (records list, next_cursor)
            - records: ordered by timestamp DESC then id DESC, excluding exclude_events
            - next_cursor: Cursor for next page, None if no more records
        """
        pass

    @abstractmethod
    async def get_subjects(
        self, activity_ids: Sequence[UUID]
    ) -> Dict[UUID, List[ActivityLogSubject]]:
        """Get subjects grouped by activity id"""
        pass

    @abstractmethod
    async def delete_older_than(self, cutoff: datetime) -> int:
        """Delete records with timestamp <= cutoff. Returns count removed."""
        pass
