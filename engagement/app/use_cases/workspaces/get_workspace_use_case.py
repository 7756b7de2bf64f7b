from engagement.app.services.access import get_active_workspace
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.libs.result import Result, Return

from .dtos import WorkspaceResponse


class GetWorkspaceUseCase:
    """Look up an active workspace by slug; inactive workspaces are NOT_FOUND"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(self, slug: str) -> Result[WorkspaceResponse]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, slug)
            return Return.ok(WorkspaceResponse.from_entity(workspace))
