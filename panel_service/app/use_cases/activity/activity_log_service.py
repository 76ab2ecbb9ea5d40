"""
Activity Log Service

Records activity and answers the scoped lookups over the activity log.
"""

import logging
from datetime import datetime
from typing import Any, Callable, Dict, List, Mapping, Optional, Sequence, Tuple
from uuid import UUID

from sqlmodel import SQLModel

from panel_service.app.services.event_dispatcher import EventDispatcher
from panel_service.app.services.translator import DEFAULT_LOCALE
from panel_service.app.services.unit_of_work import UnitOfWork
from panel_service.domain.base import utcnow
from panel_service.domain.entities import ActivityLog, ActivityLogSubject, DISABLED_EVENTS
from panel_service.domain.events import ActivityLogged
from panel_service.domain.references import ActorReference
from .dtos import RecordActivityCommand
from .summary import render_summary

logger = logging.getLogger(__name__)


class ActivityLogService:
    """
    Write-once activity store.

    Business Rules:
    - Attributes are validated before anything touches the database
    - timestamp comes from the service clock, never from the caller
    - ActivityLogged is dispatched once per record, after the commit
    - Validation and persistence errors propagate; nothing is dispatched
    - Display listings drop DISABLED_EVENTS, lookups return everything
    """

    def __init__(
        self,
        uow: UnitOfWork,
        dispatcher: EventDispatcher,
        clock: Callable[[], datetime] = utcnow,
    ):
        self.uow = uow
        self.dispatcher = dispatcher
        self.clock = clock

    async def record(
        self,
        event: str,
        ip: str,
        actor: Optional[ActorReference] = None,
        description: Optional[str] = None,
        properties: Optional[Mapping[str, Any]] = None,
        batch: Optional[UUID] = None,
        subjects: Sequence[ActorReference] = (),
        api_key_id: Optional[UUID] = None,
    ) -> ActivityLog:
        return await self.record_payload(
            {
                "event": event,
                "ip": ip,
                "description": description,
                "properties": dict(properties) if properties is not None else None,
                "batch": batch,
                "api_key_id": api_key_id,
            },
            actor=actor,
            subjects=subjects,
        )

    async def record_payload(
        self,
        payload: Mapping[str, Any],
        actor: Optional[ActorReference] = None,
        subjects: Sequence[ActorReference] = (),
    ) -> ActivityLog:
        """
        Validate a raw attribute mapping and record it.

        Raises:
            pydantic.ValidationError: payload does not match RecordActivityCommand
        """
        command = RecordActivityCommand.model_validate(dict(payload))

        activity = ActivityLog(
            batch=command.batch,
            event=command.event,
            ip=command.ip,
            description=command.description,
            actor_type=actor.type if actor else None,
            actor_id=actor.id if actor else None,
            api_key_id=command.api_key_id,
            properties=command.properties,
            timestamp=self.clock(),
        )
        subject_rows = [
            ActivityLogSubject(subject_type=subject.type, subject_id=subject.id)
            for subject in subjects
        ]

        async with self.uow:
            activity = await self.uow.activity_logs.create(activity, subject_rows)
            await self.uow.commit()

        logger.debug(f"Recorded activity {activity.event} ({activity.id})")
        await self.dispatcher.dispatch(ActivityLogged(activity=activity, subjects=subject_rows))

        return activity

    async def query_by_event(self, event: str) -> List[ActivityLog]:
        async with self.uow:
            return await self.uow.activity_logs.get_by_event(event)

    async def query_by_actor(self, actor: ActorReference) -> List[ActivityLog]:
        async with self.uow:
            return await self.uow.activity_logs.get_by_actor(actor)

    async def list_for_display(
        self,
        actor: ActorReference,
        limit: int = 50,
        cursor: Optional[str] = None,
    ) -> Tuple[List[ActivityLog], Dict[UUID, List[ActivityLogSubject]], Optional[str]]:
        """
        Newest-first page of an actor's activity without disabled events.

        Returns:
            (records, subjects grouped by record id, next_cursor)
        """
        async with self.uow:
            records, next_cursor = await self.uow.activity_logs.get_by_actor_paginated(
                actor, exclude_events=DISABLED_EVENTS, limit=limit, cursor=cursor
            )
            subjects = await self.uow.activity_logs.get_subjects([r.id for r in records])
            return records, subjects, next_cursor

    async def resolve_actor(self, activity: ActivityLog) -> Optional[SQLModel]:
        """Load the record's actor, soft-deleted accounts included. None means system."""
        reference = activity.actor
        if reference is None:
            return None

        async with self.uow:
            return await self.uow.actors.resolve(reference)

    async def summarize(
        self,
        activity: ActivityLog,
        now: Optional[datetime] = None,
        locale: str = DEFAULT_LOCALE,
    ) -> str:
        actor = await self.resolve_actor(activity)
        return render_summary(activity, actor=actor, now=now, locale=locale)
