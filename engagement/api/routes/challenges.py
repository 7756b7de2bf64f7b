"""
Challenge & Enrollment API Routes
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from engagement.api.error import envelope
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.app.use_cases.challenges import (
    CreateActivityCommand,
    CreateActivityUseCase,
    CreateChallengeCommand,
    CreateChallengeUseCase,
    ListChallengesUseCase,
)
from engagement.app.use_cases.enrollments import (
    BatchCreateEnrollmentsCommand,
    BatchCreateEnrollmentsUseCase,
    CreateEnrollmentCommand,
    CreateEnrollmentUseCase,
    DeleteEnrollmentUseCase,
    ListChallengeEnrollmentsUseCase,
    UpdateEnrollmentStatusCommand,
    UpdateEnrollmentStatusUseCase,
)
from engagement.app.use_cases.users import CurrentUser
from engagement.depends import get_current_user, get_unit_of_work
from engagement.domain.entities import EnrollmentStatus

router = APIRouter(prefix="/workspaces/{slug}", tags=["Challenges"])


@router.post("/challenges", status_code=status.HTTP_201_CREATED)
async def create_challenge(
    slug: str,
    request: CreateChallengeCommand,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Create a challenge. ADMIN only."""
    result = await CreateChallengeUseCase(uow).execute(current_user.id, slug, request)
    return envelope(result)


@router.get("/challenges", status_code=status.HTTP_200_OK)
async def list_challenges(
    slug: str,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List challenges with their activities"""
    result = await ListChallengesUseCase(uow).execute(current_user.id, slug)
    return envelope(result)


@router.post("/challenges/{challenge_id}/activities", status_code=status.HTTP_201_CREATED)
async def create_activity(
    slug: str,
    challenge_id: UUID,
    request: CreateActivityCommand,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Add an activity to a challenge. ADMIN only."""
    result = await CreateActivityUseCase(uow).execute(current_user.id, slug, challenge_id, request)
    return envelope(result)


@router.post("/challenges/{challenge_id}/enrollments", status_code=status.HTTP_201_CREATED)
async def create_enrollment(
    slug: str,
    challenge_id: UUID,
    request: CreateEnrollmentCommand,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Enroll in a challenge (self), or enroll another member (ADMIN/MANAGER).

    Raises:
        - 403 Forbidden: not a member, or enrolling others without the role
        - 404 Not Found: challenge not in this workspace
        - 409 Conflict: already enrolled
    """
    result = await CreateEnrollmentUseCase(uow).execute(current_user.id, slug, challenge_id, request)
    return envelope(result)


@router.post("/challenges/{challenge_id}/enrollments/batch", status_code=status.HTTP_201_CREATED)
async def batch_create_enrollments(
    slug: str,
    challenge_id: UUID,
    request: BatchCreateEnrollmentsCommand,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Enroll several members at once; already-enrolled users are skipped"""
    result = await BatchCreateEnrollmentsUseCase(uow).execute(
        current_user.id, slug, challenge_id, request
    )
    return envelope(result)


@router.get("/challenges/{challenge_id}/enrollments", status_code=status.HTTP_200_OK)
async def list_enrollments(
    slug: str,
    challenge_id: UUID,
    enrollment_status: Optional[EnrollmentStatus] = Query(None, alias="status"),
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """List a challenge's enrollments. ADMIN/MANAGER only."""
    result = await ListChallengeEnrollmentsUseCase(uow).execute(
        current_user.id, slug, challenge_id, enrollment_status
    )
    return envelope(result)


@router.patch("/enrollments/{enrollment_id}", status_code=status.HTTP_200_OK)
async def update_enrollment_status(
    slug: str,
    enrollment_id: UUID,
    request: UpdateEnrollmentStatusCommand,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Change an enrollment's status.

    Raises:
        - 403 Forbidden: participant changing someone else's enrollment
        - 404 Not Found: enrollment not in this workspace
        - 422 Unprocessable Entity: transition not allowed
    """
    result = await UpdateEnrollmentStatusUseCase(uow).execute(
        current_user.id, slug, enrollment_id, request
    )
    return envelope(result)


@router.delete("/enrollments/{enrollment_id}", status_code=status.HTTP_200_OK)
async def delete_enrollment(
    slug: str,
    enrollment_id: UUID,
    current_user: CurrentUser = Depends(get_current_user),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """Delete an enrollment"""
    result = await DeleteEnrollmentUseCase(uow).execute(current_user.id, slug, enrollment_id)
    return envelope(result)
