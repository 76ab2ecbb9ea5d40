from abc import ABC, abstractmethod
from typing import Optional

from sqlmodel import SQLModel

from panel_service.domain.references import ActorReference


class IActorRepository(ABC):
    """Resolves polymorphic actor/subject references - application layer"""

    @abstractmethod
    async def resolve(self, reference: ActorReference) -> Optional[SQLModel]:
        """Load the referenced entity, including soft-deleted rows. None for unregistered types."""
        pass
