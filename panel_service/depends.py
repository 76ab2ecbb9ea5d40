from typing import Optional
from uuid import UUID

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel.ext.asyncio.session import AsyncSession
from config import ApplicationConfig
from panel_service.adapter.services.event_dispatcher import InMemoryEventDispatcher
from panel_service.adapter.services.password_broker import PasswordBroker
from panel_service.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from panel_service.api.utils.jwt import verify_jwt
from panel_service.app.services.event_dispatcher import EventDispatcher
from panel_service.app.services.unit_of_work import UnitOfWork
from panel_service.app.use_cases.activity import (
    ActivityLogService,
    PasswordResetActivityListener,
    log_activity,
)
from panel_service.domain.base import utcnow
from panel_service.domain.events import ActivityLogged, PasswordReset

ACCESS_TOKEN_COOKIE = "access_token"
REFRESH_TOKEN_COOKIE = "refresh_token"

engine = create_async_engine(ApplicationConfig.DB_URI, echo=False, future=True)

AsyncSessionLocal = sessionmaker(
    engine, class_=AsyncSession, expire_on_commit=False, autoflush=False
)

security = HTTPBearer(auto_error=False)


async def get_unit_of_work():
    async with AsyncSessionLocal() as session:
        yield SqlAlchemyUnitOfWork(session)


def build_event_dispatcher(uow: UnitOfWork) -> EventDispatcher:
    """Dispatcher with the listeners every request needs."""
    dispatcher = InMemoryEventDispatcher()
    activity = ActivityLogService(uow, dispatcher)
    dispatcher.listen(PasswordReset, PasswordResetActivityListener(activity))
    dispatcher.listen(ActivityLogged, log_activity)
    return dispatcher


async def get_event_dispatcher(uow: UnitOfWork = Depends(get_unit_of_work)) -> EventDispatcher:
    return build_event_dispatcher(uow)


async def get_password_broker(uow: UnitOfWork = Depends(get_unit_of_work)) -> PasswordBroker:
    return PasswordBroker(
        uow,
        expire_minutes=ApplicationConfig.PASSWORD_RESET_EXPIRE_MINUTES,
        throttle_seconds=ApplicationConfig.PASSWORD_RESET_THROTTLE_SECONDS,
    )


async def get_activity_service(
    uow: UnitOfWork = Depends(get_unit_of_work),
    dispatcher: EventDispatcher = Depends(get_event_dispatcher),
) -> ActivityLogService:
    return ActivityLogService(uow, dispatcher)


async def get_current_user(
    request: Request,
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    uow: UnitOfWork = Depends(get_unit_of_work),
) -> dict:
    """
    Dependency to extract and verify the JWT access token.

    The token is read from the Authorization header, falling back to the
    session cookie set after a password reset. Tokens bound to a session
    stop working once that session is revoked or expires.

    Returns:
        Decoded JWT payload containing user_id

    Raises:
        HTTPException: 401 if token is missing, invalid, expired or revoked
    """
    token = credentials.credentials if credentials else request.cookies.get(ACCESS_TOKEN_COOKIE)
    if not token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    payload = verify_jwt(token)

    if payload is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )

    if "session_id" in payload and not await session_is_active(uow, payload["session_id"]):
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Session has been revoked",
        )

    return payload


async def session_is_active(uow: UnitOfWork, session_id: str) -> bool:
    try:
        session_uuid = UUID(session_id)
    except ValueError:
        return False

    async with uow:
        session = await uow.sessions.get_by_id(session_uuid)

    return session is not None and not session.revoked and session.expires_at > utcnow()
