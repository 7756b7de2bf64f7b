from typing import List
from uuid import UUID

from engagement.app.services.access import ADMIN_ONLY, get_active_workspace, require_role
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.libs.result import Result, Return

from .dtos import InviteResponse


class ListInvitesUseCase:
    """All invites of a workspace, newest first. ADMIN only."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(self, actor_user_id: UUID, workspace_slug: str) -> Result[List[InviteResponse]]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id, ADMIN_ONLY)

            invites = await self.uow.invites.get_by_workspace_id(workspace.id)
            return Return.ok([InviteResponse.from_entity(invite) for invite in invites])
