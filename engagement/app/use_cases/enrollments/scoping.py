"""Workspace scoping helpers shared by the enrollment use cases"""

from uuid import UUID

from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import Challenge, Enrollment, Workspace
from engagement.domain.errors import NotFoundError


async def get_challenge(uow: UnitOfWork, workspace: Workspace, challenge_id: UUID) -> Challenge:
    challenge = await uow.challenges.get_in_workspace(challenge_id, workspace.id)
    if challenge is None:
        raise NotFoundError("Challenge", challenge_id)
    return challenge


async def get_enrollment(uow: UnitOfWork, workspace: Workspace, enrollment_id: UUID) -> Enrollment:
    """An enrollment whose challenge lives in another workspace does not exist here"""
    enrollment = await uow.enrollments.get_by_id(enrollment_id)
    if enrollment is None:
        raise NotFoundError("Enrollment", enrollment_id)
    if await uow.challenges.get_in_workspace(enrollment.challenge_id, workspace.id) is None:
        raise NotFoundError("Enrollment", enrollment_id)
    return enrollment
