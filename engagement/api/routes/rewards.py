"""
Reward Issuance API Routes
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from config import ApplicationConfig
from engagement.api.error import envelope
from engagement.app.services.reward_provider import RewardProvider
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.app.use_cases.rewards import (
    CancelRewardUseCase,
    IssueRewardCommand,
    IssueRewardUseCase,
    ListRewardsUseCase,
    ListWebhookEventsUseCase,
    ReconcileRewardsUseCase,
    RetryRewardUseCase,
    RewardFilter,
)
from engagement.app.use_cases.users import CurrentUser
from engagement.depends import get_current_user, get_reward_provider, get_unit_of_work
from engagement.domain.entities import RewardStatus, RewardType

router = APIRouter(prefix="/workspaces/{slug}/rewards", tags=["Rewards"])


@router.post("", status_code=status.HTTP_201_CREATED)
async def issue_reward(
    slug: str,
    request: IssueRewardCommand,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    provider: Optional[RewardProvider] = Depends(get_reward_provider),
):
    """
    Issue a reward manually. ADMIN only.

    The response reflects the delivery outcome (ISSUED or FAILED).
    """
    use_case = IssueRewardUseCase(
        uow, provider, ApplicationConfig.REWARD_PROVIDER_TIMEOUT_SECONDS
    )
    result = await use_case.execute(current_user.id, slug, request)
    return envelope(result)


@router.get("", status_code=status.HTTP_200_OK)
async def list_rewards(
    slug: str,
    reward_status: Optional[RewardStatus] = Query(None, alias="status"),
    reward_type: Optional[RewardType] = Query(None, alias="type"),
    user_id: Optional[UUID] = Query(None),
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List reward issuances, newest first"""
    filters = RewardFilter(status=reward_status, type=reward_type, user_id=user_id)
    result = await ListRewardsUseCase(uow).execute(current_user.id, slug, filters)
    return envelope(result)


@router.get("/reconcile", status_code=status.HTTP_200_OK)
async def reconcile_rewards(
    slug: str,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Issuance counts by status and type. ADMIN/MANAGER only."""
    result = await ReconcileRewardsUseCase(uow).execute(current_user.id, slug)
    return envelope(result)


@router.post("/{issuance_id}/retry", status_code=status.HTTP_200_OK)
async def retry_reward(
    slug: str,
    issuance_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    provider: Optional[RewardProvider] = Depends(get_reward_provider),
):
    """
    Retry a FAILED issuance. ADMIN only.

    Raises:
        - 409 Conflict: issuance is not FAILED
    """
    use_case = RetryRewardUseCase(
        uow, provider, ApplicationConfig.REWARD_PROVIDER_TIMEOUT_SECONDS
    )
    result = await use_case.execute(current_user.id, slug, issuance_id)
    return envelope(result)


@router.post("/{issuance_id}/cancel", status_code=status.HTTP_200_OK)
async def cancel_reward(
    slug: str,
    issuance_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Cancel a PENDING or FAILED issuance. ADMIN only."""
    result = await CancelRewardUseCase(uow).execute(current_user.id, slug, issuance_id)
    return envelope(result)


@router.get("/{issuance_id}/webhooks", status_code=status.HTTP_200_OK)
async def list_webhook_events(
    slug: str,
    issuance_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Provider webhook deliveries matched to an issuance"""
    result = await ListWebhookEventsUseCase(uow).execute(current_user.id, slug, issuance_id)
    return envelope(result)
