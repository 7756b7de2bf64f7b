"""
Submission Review API Routes
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, status

from config import ApplicationConfig
from engagement.api.error import envelope
from engagement.app.services.reward_provider import RewardProvider
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.app.use_cases.submissions import (
    CreateSubmissionCommand,
    CreateSubmissionUseCase,
    ListPendingSubmissionsUseCase,
    ReviewSubmissionCommand,
    ReviewSubmissionUseCase,
    SubmitDraftUseCase,
)
from engagement.app.use_cases.users import CurrentUser
from engagement.depends import get_current_user, get_reward_provider, get_unit_of_work

router = APIRouter(prefix="/workspaces/{slug}", tags=["Submissions"])


@router.post("/activities/{activity_id}/submissions", status_code=status.HTTP_201_CREATED)
async def create_submission(
    slug: str,
    activity_id: UUID,
    request: CreateSubmissionCommand,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Submit work for an activity.

    Raises:
        - 404 Not Found: activity not in this workspace
        - 422 Unprocessable Entity: not enrolled, or empty submission
    """
    result = await CreateSubmissionUseCase(uow).execute(current_user.id, slug, activity_id, request)
    return envelope(result)


@router.post("/submissions/{submission_id}/submit", status_code=status.HTTP_200_OK)
async def submit_draft(
    slug: str,
    submission_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Move a DRAFT submission into the review queue"""
    result = await SubmitDraftUseCase(uow).execute(current_user.id, slug, submission_id)
    return envelope(result)


@router.get("/submissions/pending", status_code=status.HTTP_200_OK)
async def list_pending_submissions(
    slug: str,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Review queue, oldest first. ADMIN/MANAGER only."""
    result = await ListPendingSubmissionsUseCase(uow).execute(current_user.id, slug)
    return envelope(result)


@router.post("/submissions/{submission_id}/review", status_code=status.HTTP_200_OK)
async def review_submission(
    slug: str,
    submission_id: UUID,
    request: ReviewSubmissionCommand,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
    provider: Optional[RewardProvider] = Depends(get_reward_provider),
):
    """
    Approve or reject a PENDING submission.

    Approval awards points against the budget and issues the configured
    rewards; reward delivery failures show up as FAILED issuances, never as
    a failed review.

    Raises:
        - 403 Forbidden: caller is not ADMIN/MANAGER
        - 404 Not Found: submission not in this workspace
        - 409 Conflict: already reviewed, or BUDGET_EXCEEDED
        - 422 Unprocessable Entity: invalid status or points
    """
    use_case = ReviewSubmissionUseCase(
        uow,
        provider=provider,
        provider_timeout_seconds=ApplicationConfig.REWARD_PROVIDER_TIMEOUT_SECONDS,
    )
    result = await use_case.execute(current_user.id, slug, submission_id, request)
    return envelope(result)
