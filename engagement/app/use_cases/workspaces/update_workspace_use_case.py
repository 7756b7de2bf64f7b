"""
Update Workspace Use Case

Platform-admin edits. Workspaces are soft-disabled, never deleted.
"""

from engagement.app.services.activity_log import record_activity_event
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import ActivityEventType
from engagement.domain.errors import NotFoundError, ValidationError
from engagement.libs.result import Result, Return

from .dtos import UpdateWorkspaceCommand, WorkspaceResponse


class UpdateWorkspaceUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(self, slug: str, command: UpdateWorkspaceCommand) -> Result[WorkspaceResponse]:
        async with self.uow:
            # Inactive workspaces stay reachable here so they can be re-enabled
            workspace = await self.uow.workspaces.get_by_slug(slug)
            if workspace is None:
                raise NotFoundError("Workspace", slug)

            changes = command.model_dump(exclude_none=True)
            if "name" in changes and not changes["name"].strip():
                raise ValidationError("Workspace name cannot be empty")

            for field, value in changes.items():
                setattr(workspace, field, value)
            workspace = await self.uow.workspaces.update(workspace)

            changes.pop("reward_webhook_secret", None)
            await record_activity_event(
                self.uow,
                workspace.id,
                ActivityEventType.workspace_updated,
                metadata={"changes": changes},
            )

            await self.uow.commit()
            return Return.ok(WorkspaceResponse.from_entity(workspace))
