from sqlmodel.ext.asyncio.session import AsyncSession

from panel_service.adapter.repositories.activity_log_repository import ActivityLogRepository
from panel_service.adapter.repositories.actor_repository import ActorRepository
from panel_service.adapter.repositories.password_reset_token_repository import PasswordResetTokenRepository
from panel_service.adapter.repositories.session_repository import SessionRepository
from panel_service.adapter.repositories.user_repository import UserRepository
from panel_service.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.sessions = SessionRepository(self.session)
        self.password_reset_tokens = PasswordResetTokenRepository(self.session)
        self.activity_logs = ActivityLogRepository(self.session)
        self.actors = ActorRepository(self.session)
        return self

    async def __aexit__(self, *args):
        # Rows loaded inside the block stay readable after it closes
        self.session.expunge_all()
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()
