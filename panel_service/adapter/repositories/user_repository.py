from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from panel_service.app.repositories.user_repository import IUserRepository
from panel_service.domain.base import utcnow
from panel_service.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a non-deleted user by email address"""
        stmt = select(User).where(User.email == email, User.deleted_at.is_(None))
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get a non-deleted user by ID"""
        stmt = select(User).where(User.id == user_id, User.deleted_at.is_(None))
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def soft_delete(self, user: User) -> User:
        """Mark user as deleted without removing the row"""
        user.deleted_at = utcnow()
        return await self.update(user)
