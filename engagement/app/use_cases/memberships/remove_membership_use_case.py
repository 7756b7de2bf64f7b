"""
Remove Membership Use Case

Handles a member leaving, or an ADMIN removing a member.
"""

from uuid import UUID

from engagement.app.services.access import get_active_workspace, require_role
from engagement.app.services.activity_log import record_activity_event
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import ActivityEventType, MembershipRole
from engagement.domain.errors import AuthorizationError, ConflictError, NotFoundError
from engagement.libs.result import Result, Return

from .dtos import RemoveMembershipResponse


class RemoveMembershipUseCase:
    """
    Use case for removing a membership.

    Business Rules:
    - Members may remove themselves; removing someone else requires ADMIN
    - The owner membership cannot be removed (transfer ownership first)
    - If the removed membership was primary, the user's oldest remaining
      membership becomes primary
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self, actor_user_id: UUID, workspace_slug: str, target_user_id: UUID
    ) -> Result[RemoveMembershipResponse]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)

            is_self_removal = actor_user_id == target_user_id
            if not is_self_removal:
                role = await require_role(self.uow, workspace, actor_user_id)
                if role != MembershipRole.admin:
                    raise AuthorizationError("Only ADMINs can remove other members")

            target_membership = await self.uow.memberships.get_by_user_and_workspace(
                target_user_id, workspace.id
            )
            if target_membership is None:
                raise NotFoundError("Membership", target_user_id)

            if target_membership.is_owner:
                raise ConflictError("The workspace owner cannot be removed; transfer ownership first")

            was_primary = target_membership.is_primary
            removed_role = target_membership.role.value
            await self.uow.memberships.delete(target_membership)

            new_primary_workspace_id = None
            if was_primary:
                remaining = await self.uow.memberships.get_by_user_id(target_user_id)
                if remaining:
                    oldest = min(remaining, key=lambda m: m.joined_at)
                    await self.uow.memberships.set_primary(target_user_id, oldest.workspace_id)
                    new_primary_workspace_id = str(oldest.workspace_id)

            await record_activity_event(
                self.uow,
                workspace.id,
                ActivityEventType.membership_removed,
                user_id=target_user_id,
                actor_user_id=actor_user_id,
                metadata={
                    "removed_role": removed_role,
                    "self_removal": is_self_removal,
                    "new_primary_workspace_id": new_primary_workspace_id,
                },
            )

            await self.uow.commit()
            return Return.ok(
                RemoveMembershipResponse(
                    status="removed", new_primary_workspace_id=new_primary_workspace_id
                )
            )
