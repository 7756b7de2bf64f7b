"""
Change Role Use Case

Handles changing a member's role within a workspace.
"""

from uuid import UUID

from engagement.app.services.access import ADMIN_ONLY, get_active_workspace, require_role
from engagement.app.services.activity_log import record_activity_event
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import ActivityEventType, MembershipRole
from engagement.domain.errors import ConflictError, NotFoundError, ValidationError
from engagement.libs.result import Result, Return

from .dtos import MembershipResponse


class ChangeRoleUseCase:
    """
    Use case for changing a member's role within a workspace.

    Business Rules:
    - Only ADMINs can change roles
    - Target user must be a member
    - Role must be one of ADMIN, MANAGER, PARTICIPANT
    - The owner's role cannot be changed away from ADMIN
    - Records RBAC_ROLE_CHANGED
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self, actor_user_id: UUID, workspace_slug: str, target_user_id: UUID, new_role: str
    ) -> Result[MembershipResponse]:
        try:
            membership_role = MembershipRole(new_role.upper())
        except ValueError:
            raise ValidationError(
                f"Invalid role: {new_role}. Must be one of: ADMIN, MANAGER, PARTICIPANT"
            ) from None

        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id, ADMIN_ONLY)

            target_membership = await self.uow.memberships.get_by_user_and_workspace(
                target_user_id, workspace.id
            )
            if target_membership is None:
                raise NotFoundError("Membership", target_user_id)

            if target_membership.is_owner and membership_role != MembershipRole.admin:
                raise ConflictError("The workspace owner must remain an ADMIN")

            old_role = target_membership.role.value
            target_membership.role = membership_role
            target_membership = await self.uow.memberships.update(target_membership)

            await record_activity_event(
                self.uow,
                workspace.id,
                ActivityEventType.rbac_role_changed,
                user_id=target_user_id,
                actor_user_id=actor_user_id,
                metadata={"old_role": old_role, "new_role": membership_role.value},
            )

            await self.uow.commit()
            return Return.ok(MembershipResponse.from_entity(target_membership, workspace.slug))
