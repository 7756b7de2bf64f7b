from uuid import UUID

from engagement.app.services.access import MANAGE_ROLES, get_active_workspace, require_role
from engagement.app.services.activity_log import record_activity_event
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import ActivityEventType, Enrollment, EnrollmentStatus
from engagement.domain.errors import AuthorizationError, ConflictError, ValidationError
from engagement.libs.result import Result, Return

from .dtos import CreateEnrollmentCommand, EnrollmentResponse
from .scoping import get_challenge


class CreateEnrollmentUseCase:
    """
    Enroll a member in a challenge.

    Business Rules:
    - Any member may enroll themselves
    - ADMIN/MANAGER may enroll another member, optionally as INVITED
    - The target must be a member of the challenge's workspace
    - One enrollment per (user, challenge); duplicates are CONFLICT
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self,
        actor_user_id: UUID,
        workspace_slug: str,
        challenge_id: UUID,
        command: CreateEnrollmentCommand,
    ) -> Result[EnrollmentResponse]:
        if command.status == EnrollmentStatus.withdrawn:
            raise ValidationError("A new enrollment cannot start as WITHDRAWN")

        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            actor_role = await require_role(self.uow, workspace, actor_user_id)
            challenge = await get_challenge(self.uow, workspace, challenge_id)

            target_user_id = command.user_id or actor_user_id
            on_behalf = target_user_id != actor_user_id
            if on_behalf or command.status == EnrollmentStatus.invited:
                if actor_role not in MANAGE_ROLES:
                    raise AuthorizationError("Only admins and managers can enroll other members")
                if on_behalf:
                    await require_role(self.uow, workspace, target_user_id)

            existing = await self.uow.enrollments.get_by_user_and_challenge(target_user_id, challenge.id)
            if existing is not None:
                raise ConflictError(
                    "User is already enrolled in this challenge",
                    {"enrollment_id": str(existing.id), "status": existing.status.value},
                )

            enrollment = await self.uow.enrollments.create(
                Enrollment(user_id=target_user_id, challenge_id=challenge.id, status=command.status)
            )

            await record_activity_event(
                self.uow,
                workspace.id,
                ActivityEventType.enrolled,
                challenge_id=challenge.id,
                enrollment_id=enrollment.id,
                user_id=target_user_id,
                actor_user_id=actor_user_id,
                metadata={"status": enrollment.status.value, "self_enrolled": not on_behalf},
            )

            await self.uow.commit()
            return Return.ok(EnrollmentResponse.from_entity(enrollment))
