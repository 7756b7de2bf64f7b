from typing import List
from uuid import UUID

from engagement.app.services.access import MANAGE_ROLES, get_active_workspace, require_role
from engagement.app.services.activity_log import record_activity_event
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import ActivityEventType, Enrollment, EnrollmentStatus
from engagement.domain.errors import AuthorizationError, ValidationError
from engagement.libs.result import Result, Return

from .dtos import BatchCreateEnrollmentsCommand, EnrollmentResponse
from .scoping import get_challenge


class BatchCreateEnrollmentsUseCase:
    """
    Enroll several members at once. ADMIN/MANAGER only.

    Every target must be a member of the workspace, otherwise nothing is
    written. Users that already have an enrollment are skipped.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self,
        actor_user_id: UUID,
        workspace_slug: str,
        challenge_id: UUID,
        command: BatchCreateEnrollmentsCommand,
    ) -> Result[List[EnrollmentResponse]]:
        if command.status == EnrollmentStatus.withdrawn:
            raise ValidationError("A new enrollment cannot start as WITHDRAWN")

        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id, MANAGE_ROLES)
            challenge = await get_challenge(self.uow, workspace, challenge_id)

            # Preserve request order, drop duplicates
            user_ids = list(dict.fromkeys(command.user_ids))

            to_enroll = []
            for user_id in user_ids:
                try:
                    await require_role(self.uow, workspace, user_id)
                except AuthorizationError:
                    raise AuthorizationError(
                        "Every user must be a member of this workspace",
                        {"user_id": str(user_id)},
                    ) from None

                existing = await self.uow.enrollments.get_by_user_and_challenge(user_id, challenge.id)
                if existing is None:
                    to_enroll.append(user_id)

            if not to_enroll:
                return Return.ok([])

            enrollments = await self.uow.enrollments.create_many(
                [
                    Enrollment(user_id=user_id, challenge_id=challenge.id, status=command.status)
                    for user_id in to_enroll
                ]
            )

            for enrollment in enrollments:
                await record_activity_event(
                    self.uow,
                    workspace.id,
                    ActivityEventType.enrolled,
                    challenge_id=challenge.id,
                    enrollment_id=enrollment.id,
                    user_id=enrollment.user_id,
                    actor_user_id=actor_user_id,
                    metadata={"status": enrollment.status.value, "batch": True},
                )

            await self.uow.commit()
            return Return.ok([EnrollmentResponse.from_entity(e) for e in enrollments])
