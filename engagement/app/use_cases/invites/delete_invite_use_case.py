from typing import Dict
from uuid import UUID

from engagement.app.services.access import ADMIN_ONLY, get_active_workspace, require_role
from engagement.app.services.activity_log import record_activity_event
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import ActivityEventType
from engagement.domain.errors import NotFoundError
from engagement.libs.result import Result, Return


class DeleteInviteUseCase:
    """
    Delete an invite code. ADMIN only.

    An invite belonging to another workspace is reported as NOT_FOUND.
    Memberships already granted by the code are untouched.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self, actor_user_id: UUID, workspace_slug: str, invite_id: UUID
    ) -> Result[Dict[str, str]]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id, ADMIN_ONLY)

            invite = await self.uow.invites.get_by_id(invite_id)
            if invite is None or invite.workspace_id != workspace.id:
                raise NotFoundError("Invite", invite_id)

            code, challenge_id, used_count = invite.code, invite.challenge_id, invite.used_count
            await self.uow.invites.delete(invite)

            await record_activity_event(
                self.uow,
                workspace.id,
                ActivityEventType.invite_deleted,
                challenge_id=challenge_id,
                actor_user_id=actor_user_id,
                metadata={"invite_id": str(invite_id), "code": code, "used_count": used_count},
            )

            await self.uow.commit()
            return Return.ok({"status": "deleted", "invite_id": str(invite_id)})
