from uuid import UUID

from engagement.app.services.access import MANAGE_ROLES, get_active_workspace, require_role
from engagement.app.services.activity_log import record_activity_event
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import ActivityEventType
from engagement.domain.errors import AuthorizationError
from engagement.libs.result import Result, Return

from .dtos import DeleteEnrollmentResponse
from .scoping import get_enrollment


class DeleteEnrollmentUseCase:
    """Hard-delete an enrollment. ADMIN/MANAGER, or the enrolled user."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self, actor_user_id: UUID, workspace_slug: str, enrollment_id: UUID
    ) -> Result[DeleteEnrollmentResponse]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            actor_role = await require_role(self.uow, workspace, actor_user_id)
            enrollment = await get_enrollment(self.uow, workspace, enrollment_id)

            if actor_role not in MANAGE_ROLES and enrollment.user_id != actor_user_id:
                raise AuthorizationError("Participants can only remove their own enrollment")

            enrollment_user_id, challenge_id = enrollment.user_id, enrollment.challenge_id
            await self.uow.enrollments.delete(enrollment)

            await record_activity_event(
                self.uow,
                workspace.id,
                ActivityEventType.unenrolled,
                challenge_id=challenge_id,
                user_id=enrollment_user_id,
                actor_user_id=actor_user_id,
                metadata={"enrollment_id": str(enrollment_id), "deleted": True},
            )

            await self.uow.commit()
            return Return.ok(DeleteEnrollmentResponse())
