from fastapi import APIRouter, Depends, status

from engagement.api.error import envelope
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.app.use_cases.memberships import ListMembershipsUseCase
from engagement.app.use_cases.users import CurrentUser, LoadContextUseCase
from engagement.depends import get_current_user, get_unit_of_work

router = APIRouter(tags=["User"])


@router.get("/me", status_code=status.HTTP_200_OK)
async def get_me(
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Load Current User & Workspace Context

    Returns the caller and every active workspace they belong to, primary
    first.

    Raises:
        - 401 Unauthorized: Invalid or expired JWT
    """
    result = await LoadContextUseCase(uow).execute(current_user.id)
    return envelope(result)


@router.get("/me/memberships", status_code=status.HTTP_200_OK)
async def list_my_memberships(
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List the caller's memberships, primary first, then by join date"""
    result = await ListMembershipsUseCase(uow).execute(current_user.id)
    return envelope(result)
