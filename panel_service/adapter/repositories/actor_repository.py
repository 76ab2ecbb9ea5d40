from typing import Optional
from uuid import UUID

from sqlmodel import SQLModel, select
from sqlmodel.ext.asyncio.session import AsyncSession

from panel_service.app.repositories.actor_repository import IActorRepository
from panel_service.domain.references import ActorReference, morph_map


class ActorRepository(IActorRepository):
    """Resolves actor references through the morph map using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def resolve(self, reference: ActorReference) -> Optional[SQLModel]:
        """Load the referenced entity, including soft-deleted rows. None for unregistered types."""
        model_cls = morph_map().get(reference.type)
        if model_cls is None:
            return None

        try:
            entity_id = UUID(reference.id)
        except ValueError:
            return None

        # No deleted_at filter: historical actors stay resolvable
        stmt = select(model_cls).where(model_cls.id == entity_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()
