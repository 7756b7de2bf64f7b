from typing import List, Optional
from uuid import UUID

from engagement.app.services.access import MANAGE_ROLES, get_active_workspace, require_role
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import EnrollmentStatus
from engagement.libs.result import Result, Return

from .dtos import EnrollmentResponse
from .scoping import get_challenge


class ListChallengeEnrollmentsUseCase:
    """Enrollments of one challenge. ADMIN/MANAGER only."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self,
        actor_user_id: UUID,
        workspace_slug: str,
        challenge_id: UUID,
        status: Optional[EnrollmentStatus] = None,
    ) -> Result[List[EnrollmentResponse]]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id, MANAGE_ROLES)
            challenge = await get_challenge(self.uow, workspace, challenge_id)

            enrollments = await self.uow.enrollments.get_by_challenge_id(challenge.id, status)
            return Return.ok([EnrollmentResponse.from_entity(e) for e in enrollments])
