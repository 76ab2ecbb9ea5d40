"""
User Entity

An account that can sign in to the panel and act on servers.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from panel_service.domain.base import utcnow


class User(SQLModel, table=True):
    """
    User entity - a panel account.

    Business Rules:
    - Email must be unique across all users
    - Password stored as bcrypt hash (cost factor 12)
    - remember_token is rotated whenever the password changes
    - Accounts with use_totp enabled are never signed in automatically
      after a password reset
    - Deleting a user is a soft delete; activity history keeps pointing at it
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    email: str = Field(unique=True, index=True, max_length=255)
    username: str = Field(unique=True, max_length=255)
    password_hash: str = Field(max_length=60)  # Bcrypt output is 60 chars

    remember_token: Optional[str] = Field(default=None, max_length=60)
    use_totp: bool = Field(default=False)

    # Timestamps
    created_at: datetime = Field(default_factory=utcnow, sa_column=Column(DateTime))
    deleted_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_user_deleted_at", "deleted_at"),)

    @property
    def is_deleted(self) -> bool:
        return self.deleted_at is not None
