"""
Points, Budget & Leaderboard API Routes
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from engagement.api.error import envelope
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.app.use_cases.points import (
    AwardPointsCommand,
    AwardPointsUseCase,
    GetBalanceUseCase,
    GetBudgetsUseCase,
    GetChallengeLeaderboardUseCase,
    GetWorkspaceLeaderboardUseCase,
    SetBudgetCommand,
    SetChallengeBudgetUseCase,
    SetWorkspaceBudgetUseCase,
)
from engagement.app.use_cases.users import CurrentUser
from engagement.depends import get_current_user, get_unit_of_work

router = APIRouter(prefix="/workspaces/{slug}", tags=["Points"])


@router.post("/points/award", status_code=status.HTTP_200_OK)
async def award_points(
    slug: str,
    request: AwardPointsCommand,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Manually award points. ADMIN only.

    Raises:
        - 409 Conflict: BUDGET_EXCEEDED
    """
    result = await AwardPointsUseCase(uow).execute(current_user.id, slug, request)
    return envelope(result)


@router.get("/points/balance", status_code=status.HTTP_200_OK)
async def get_balance(
    slug: str,
    user_id: Optional[UUID] = Query(None, description="Defaults to the caller"),
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Points balance of the caller, or of any member for ADMIN/MANAGER"""
    result = await GetBalanceUseCase(uow).execute(current_user.id, slug, user_id)
    return envelope(result)


@router.get("/budgets", status_code=status.HTTP_200_OK)
async def get_budgets(
    slug: str,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Workspace and challenge budgets. ADMIN/MANAGER only."""
    result = await GetBudgetsUseCase(uow).execute(current_user.id, slug)
    return envelope(result)


@router.put("/budget", status_code=status.HTTP_200_OK)
async def set_workspace_budget(
    slug: str,
    request: SetBudgetCommand,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Set the workspace points budget. ADMIN only."""
    result = await SetWorkspaceBudgetUseCase(uow).execute(current_user.id, slug, request)
    return envelope(result)


@router.put("/challenges/{challenge_id}/budget", status_code=status.HTTP_200_OK)
async def set_challenge_budget(
    slug: str,
    challenge_id: UUID,
    request: SetBudgetCommand,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Set a challenge points budget. ADMIN only."""
    result = await SetChallengeBudgetUseCase(uow).execute(current_user.id, slug, challenge_id, request)
    return envelope(result)


@router.get("/leaderboard", status_code=status.HTTP_200_OK)
async def workspace_leaderboard(
    slug: str,
    limit: int = Query(10, ge=1, le=100),
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Workspace leaderboard by total points"""
    result = await GetWorkspaceLeaderboardUseCase(uow).execute(current_user.id, slug, limit)
    return envelope(result)


@router.get("/challenges/{challenge_id}/leaderboard", status_code=status.HTTP_200_OK)
async def challenge_leaderboard(
    slug: str,
    challenge_id: UUID,
    limit: int = Query(10, ge=1, le=100),
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Challenge leaderboard by points from approved submissions"""
    result = await GetChallengeLeaderboardUseCase(uow).execute(current_user.id, slug, challenge_id, limit)
    return envelope(result)
