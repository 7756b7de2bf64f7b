from typing import List
from uuid import UUID

from engagement.app.services.access import MANAGE_ROLES, get_active_workspace, require_role
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.libs.result import Result, Return

from .dtos import SubmissionResponse


class ListPendingSubmissionsUseCase:
    """Review queue of a workspace, oldest first. ADMIN/MANAGER only."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(self, actor_user_id: UUID, workspace_slug: str) -> Result[List[SubmissionResponse]]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id, MANAGE_ROLES)

            submissions = await self.uow.submissions.list_pending_for_workspace(workspace.id)
            return Return.ok([SubmissionResponse.from_entity(s) for s in submissions])
