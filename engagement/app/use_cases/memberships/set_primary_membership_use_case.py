"""
Set Primary Membership Use Case
"""

from uuid import UUID

from engagement.app.services.access import get_active_workspace
from engagement.app.services.activity_log import record_activity_event
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import ActivityEventType
from engagement.domain.errors import NotFoundError
from engagement.libs.result import Result, Return

from .dtos import MembershipResponse


class SetPrimaryMembershipUseCase:
    """
    Use case for switching the user's primary workspace.

    Business Rules:
    - The user must already be a member of the target workspace
    - Clearing the old primary and setting the new one is one transaction
    - At most one primary membership per user afterwards
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(self, user_id: UUID, workspace_slug: str) -> Result[MembershipResponse]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)

            membership = await self.uow.memberships.get_by_user_and_workspace(user_id, workspace.id)
            if membership is None:
                raise NotFoundError("Membership", workspace_slug)

            if not membership.is_primary:
                flagged = await self.uow.memberships.set_primary(user_id, workspace.id)
                if flagged == 0:
                    raise NotFoundError("Membership", workspace_slug)

                await record_activity_event(
                    self.uow,
                    workspace.id,
                    ActivityEventType.primary_workspace_changed,
                    user_id=user_id,
                    actor_user_id=user_id,
                )
                await self.uow.commit()

            return Return.ok(MembershipResponse.from_entity(membership, workspace.slug))
