"""
Create Membership Use Case

Adds an existing user to a workspace without an invite.
"""

from uuid import UUID

from engagement.app.services.access import ADMIN_ONLY, get_active_workspace, require_role
from engagement.app.services.activity_log import record_activity_event
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.membership_registry import add_membership
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import ActivityEventType
from engagement.domain.errors import ConflictError, NotFoundError
from engagement.libs.result import Result, Return

from .dtos import CreateMembershipCommand, MembershipResponse


class CreateMembershipUseCase:
    """
    Use case for adding a member directly.

    Business Rules:
    - Only a workspace ADMIN may add members
    - (user, workspace) is unique; an existing membership is a CONFLICT
    - is_primary clears the user's previous primary in the same transaction
    - A user without any primary gets this membership as primary
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self,
        actor_user_id: UUID,
        workspace_slug: str,
        user_id: UUID,
        command: CreateMembershipCommand,
    ) -> Result[MembershipResponse]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id, ADMIN_ONLY)

            if await self.uow.users.get_by_id(user_id) is None:
                raise NotFoundError("User", user_id)

            existing = await self.uow.memberships.get_by_user_and_workspace(user_id, workspace.id)
            if existing is not None:
                raise ConflictError("User is already a member of this workspace")

            membership = await add_membership(
                self.uow, user_id, workspace.id, command.role, is_primary=command.is_primary
            )

            await record_activity_event(
                self.uow,
                workspace.id,
                ActivityEventType.membership_created,
                user_id=user_id,
                actor_user_id=actor_user_id,
                metadata={"role": command.role.value, "is_primary": membership.is_primary},
            )

            await self.uow.commit()
            return Return.ok(MembershipResponse.from_entity(membership, workspace.slug))
