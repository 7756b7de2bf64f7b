"""
Activity Log API Routes
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from engagement.api.error import envelope
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.app.use_cases.activity import ListActivityEventsUseCase
from engagement.app.use_cases.users import CurrentUser
from engagement.depends import get_current_user, get_unit_of_work
from engagement.domain.entities import ActivityEventType

router = APIRouter(prefix="/workspaces/{slug}", tags=["Activity"])


@router.get("/activity", status_code=status.HTTP_200_OK)
async def list_activity_events(
    slug: str,
    limit: int = Query(50, ge=1, le=200, description="Maximum number of events to return"),
    cursor: Optional[str] = Query(None, description="Pagination cursor"),
    event_type: Optional[ActivityEventType] = Query(None, alias="type"),
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Workspace Activity Log

    Returns events newest first. Only ADMIN and MANAGER members may read it.

    Query Parameters:
        - limit: Maximum number of events to return (1-200, default 50)
        - cursor: Pagination cursor for fetching next page
        - type: Only events of this type

    Returns:
        - events: List of activity events ordered by newest first
        - next_cursor: Cursor for next page (null if no more events)
    """
    result = await ListActivityEventsUseCase(uow).execute(
        current_user.id, slug, limit=limit, cursor=cursor, event_type=event_type
    )
    return envelope(result)
