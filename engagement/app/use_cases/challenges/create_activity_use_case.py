from uuid import UUID

from engagement.app.services.access import ADMIN_ONLY, get_active_workspace, require_role
from engagement.app.services.activity_log import record_activity_event
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import Activity, ActivityEventType
from engagement.domain.errors import NotFoundError
from engagement.libs.result import Result, Return

from .dtos import ActivityResponse, CreateActivityCommand


class CreateActivityUseCase:
    """Add an activity (with its default points) to a challenge. ADMIN only."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self,
        actor_user_id: UUID,
        workspace_slug: str,
        challenge_id: UUID,
        command: CreateActivityCommand,
    ) -> Result[ActivityResponse]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id, ADMIN_ONLY)

            challenge = await self.uow.challenges.get_in_workspace(challenge_id, workspace.id)
            if challenge is None:
                raise NotFoundError("Challenge", challenge_id)

            activity = await self.uow.activities.create(
                Activity(
                    challenge_id=challenge.id,
                    name=command.name.strip(),
                    points_value=command.points_value,
                )
            )

            await record_activity_event(
                self.uow,
                workspace.id,
                ActivityEventType.activity_created,
                challenge_id=challenge.id,
                actor_user_id=actor_user_id,
                metadata={"activity_id": str(activity.id), "points_value": activity.points_value},
            )

            await self.uow.commit()
            return Return.ok(ActivityResponse.from_entity(activity))
