from abc import ABC, abstractmethod

from panel_service.app.repositories.activity_log_repository import IActivityLogRepository
from panel_service.app.repositories.actor_repository import IActorRepository
from panel_service.app.repositories.password_reset_token_repository import IPasswordResetTokenRepository
from panel_service.app.repositories.session_repository import ISessionRepository
from panel_service.app.repositories.user_repository import IUserRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    sessions: ISessionRepository
    password_reset_tokens: IPasswordResetTokenRepository
    activity_logs: IActivityLogRepository
    actors: IActorRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass
