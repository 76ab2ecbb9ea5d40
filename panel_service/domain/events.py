"""
Domain events raised by the panel service.

Events are dispatched only after the change they describe has been committed.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from datetime import datetime
from typing import List
from uuid import UUID, uuid4

from panel_service.domain.base import utcnow
from panel_service.domain.entities import ActivityLog, ActivityLogSubject, User


@dataclass
class DomainEvent(ABC):
    """Base class for all domain events"""

    event_id: UUID = field(default_factory=uuid4, init=False)
    occurred_at: datetime = field(default_factory=utcnow, init=False)

    @property
    @abstractmethod
    def event_name(self) -> str:
        """Return the name of the event"""
        pass


@dataclass
class PasswordReset(DomainEvent):
    """A user's password was reset through the password broker."""

    user: User = None
    ip: str = ""

    @property
    def event_name(self) -> str:
        return "auth.password_reset"


@dataclass
class ActivityLogged(DomainEvent):
    """An activity record (and its subjects) was durably written."""

    activity: ActivityLog = None
    subjects: List[ActivityLogSubject] = field(default_factory=list)

    @property
    def event_name(self) -> str:
        return "activity.logged"
