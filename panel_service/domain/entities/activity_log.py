"""
ActivityLog Entity

Write-once record of something that happened on the panel.
"""

from datetime import datetime
from typing import Any, Dict, Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, JSON, SQLModel

from panel_service.domain.references import ActorReference

# Legacy events, or events whose data never ended up being used. They are still
# recorded and retained, but display listings leave them out.
DISABLED_EVENTS = ["server:file.upload"]


class ActivityLog(SQLModel, table=True):
    """
    ActivityLog entity - one row per recorded activity.

    Business Rules:
    - Never updated once created
    - timestamp is assigned by the store at creation time
    - actor_type/actor_id are both set or both empty (empty means system)
    - properties, when present, is a JSON object
    - Deleted only by the age-based prune sweep
    """

    __tablename__ = "activity_logs"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    batch: Optional[UUID] = Field(default=None, index=True)
    event: str = Field(max_length=255)
    ip: str = Field(max_length=45)
    description: Optional[str] = Field(default=None)

    actor_type: Optional[str] = Field(default=None, max_length=64)
    actor_id: Optional[str] = Field(default=None, max_length=64)

    api_key_id: Optional[UUID] = Field(default=None)

    properties: Optional[Dict[str, Any]] = Field(default=None, sa_column=Column(JSON))

    timestamp: datetime = Field(sa_column=Column(DateTime, nullable=False))

    __table_args__ = (
        Index("idx_activity_event", "event"),
        Index("idx_activity_actor", "actor_type", "actor_id"),
        Index("idx_activity_timestamp", "timestamp"),
    )

    @property
    def actor(self) -> Optional[ActorReference]:
        if self.actor_type is None or self.actor_id is None:
            return None
        return ActorReference(type=self.actor_type, id=self.actor_id)


class ActivityLogSubject(SQLModel, table=True):
    """An entity that an activity acted upon."""

    __tablename__ = "activity_log_subjects"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    activity_log_id: UUID = Field(foreign_key="activity_logs.id", index=True)
    subject_type: str = Field(max_length=64)
    subject_id: str = Field(max_length=64)

    __table_args__ = (Index("idx_activity_subject", "subject_type", "subject_id"),)

    @property
    def subject(self) -> ActorReference:
        return ActorReference(type=self.subject_type, id=self.subject_id)
