from datetime import datetime
from typing import Callable, List, Optional

import pytest
import pytest_asyncio
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

import panel_service.domain.entities  # noqa: F401  (registers tables on SQLModel.metadata)
from panel_service.adapter.services.event_dispatcher import InMemoryEventDispatcher
from panel_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from panel_service.app.use_cases.activity import ActivityLogService
from panel_service.depends import get_unit_of_work
from panel_service.domain.events import ActivityLogged


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def db_session(engine):
    Session = sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)
    async with Session() as session:
        yield session


@pytest_asyncio.fixture
async def client(db_session):
    from httpx import ASGITransport
    from panel_service.api.app import create_app
    from config import ApplicationConfig

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


@pytest.fixture
def logged_events() -> List[ActivityLogged]:
    return []


@pytest.fixture
def activity_service_factory(db_session, logged_events) -> Callable[..., ActivityLogService]:
    """Builds an ActivityLogService on the test session with a fixed clock."""

    def factory(now: Optional[datetime] = None) -> ActivityLogService:
        dispatcher = InMemoryEventDispatcher()

        async def capture(event: ActivityLogged):
            logged_events.append(event)

        dispatcher.listen(ActivityLogged, capture)
        uow = SqlAlchemyUnitOfWork(db_session)
        if now is None:
            return ActivityLogService(uow, dispatcher)
        return ActivityLogService(uow, dispatcher, clock=lambda: now)

    return factory

