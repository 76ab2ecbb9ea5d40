"""
Activity API Routes

Handles account activity listing.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from config import ApplicationConfig
from panel_service.api.error import ClientError, ServerError
from panel_service.app.services.unit_of_work import UnitOfWork
from panel_service.app.use_cases.activity import (
    ActivityListResponse,
    ActivityLogService,
    GetAccountActivityUseCase,
)
from panel_service.depends import get_activity_service, get_current_user, get_unit_of_work

router = APIRouter(prefix="/account", tags=["Activity"])


@router.get(
    "/activity",
    status_code=status.HTTP_200_OK,
    response_model=ActivityListResponse,
)
async def get_account_activity(
    current_user: dict = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    activity: ActivityLogService = Depends(get_activity_service),
    limit: int = Query(50, ge=1, le=100, description="Maximum number of entries to return"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
):
    """
    Get Account Activity

    Returns the caller's activity, newest first, without disabled events.

    Raises:
        - 401 Unauthorized: Missing, invalid or expired token
        - 404 Not Found: User no longer exists
        - 500 Internal Server Error: Server error
    """
    use_case = GetAccountActivityUseCase(uow, activity, locale=ApplicationConfig.LOCALE)
    result = await use_case.execute(
        user_id=UUID(current_user["user_id"]),
        limit=limit,
        cursor=cursor,
    )

    if result.is_err():
        error = result.error
        if error.code == "USER_NOT_FOUND":
            raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
        raise ServerError(error)

    return result.value
