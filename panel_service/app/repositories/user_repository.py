from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from panel_service.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_email(self, email: str) -> Optional[User]:
        """Get a non-deleted user by email address"""
        pass

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get a non-deleted user by ID"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass

    @abstractmethod
    async def soft_delete(self, user: User) -> User:
        """Mark user as deleted without removing the row"""
        pass
