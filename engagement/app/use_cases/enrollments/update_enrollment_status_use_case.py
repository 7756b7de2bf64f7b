from uuid import UUID

from engagement.app.services.access import MANAGE_ROLES, get_active_workspace, require_role
from engagement.app.services.activity_log import record_activity_event
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.base import utc_now
from engagement.domain.entities import ActivityEventType, EnrollmentStatus
from engagement.domain.errors import AuthorizationError, ValidationError
from engagement.libs.result import Result, Return

from .dtos import EnrollmentResponse, UpdateEnrollmentStatusCommand
from .scoping import get_enrollment


class UpdateEnrollmentStatusUseCase:
    """
    Move an enrollment along INVITED -> ENROLLED, to WITHDRAWN, or back to
    ENROLLED after a withdrawal.

    Participants may only change their own enrollment. Nothing moves back to
    INVITED.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self,
        actor_user_id: UUID,
        workspace_slug: str,
        enrollment_id: UUID,
        command: UpdateEnrollmentStatusCommand,
    ) -> Result[EnrollmentResponse]:
        if command.status == EnrollmentStatus.invited:
            raise ValidationError("An enrollment cannot be moved back to INVITED")

        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            actor_role = await require_role(self.uow, workspace, actor_user_id)
            enrollment = await get_enrollment(self.uow, workspace, enrollment_id)

            if actor_role not in MANAGE_ROLES and enrollment.user_id != actor_user_id:
                raise AuthorizationError("Participants can only change their own enrollment")

            if enrollment.status == command.status:
                return Return.ok(EnrollmentResponse.from_entity(enrollment))

            if not enrollment.can_transition_to(command.status):
                raise ValidationError(
                    f"Cannot move enrollment from {enrollment.status.value} to {command.status.value}",
                    {"from": enrollment.status.value, "to": command.status.value},
                )

            previous = enrollment.status
            enrollment.status = command.status
            enrollment.updated_at = utc_now()
            enrollment = await self.uow.enrollments.update(enrollment)

            event_type = (
                ActivityEventType.unenrolled
                if command.status == EnrollmentStatus.withdrawn
                else ActivityEventType.enrollment_updated
            )
            await record_activity_event(
                self.uow,
                workspace.id,
                event_type,
                challenge_id=enrollment.challenge_id,
                enrollment_id=enrollment.id,
                user_id=enrollment.user_id,
                actor_user_id=actor_user_id,
                metadata={"from": previous.value, "to": command.status.value},
            )

            await self.uow.commit()
            return Return.ok(EnrollmentResponse.from_entity(enrollment))
