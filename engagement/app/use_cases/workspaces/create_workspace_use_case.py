"""
Create Workspace Use Case

Platform-admin action creating a workspace and, optionally, its owner.
"""

import re

from engagement.app.services.activity_log import record_activity_event
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.membership_registry import add_membership
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import ActivityEventType, MembershipRole, Workspace
from engagement.domain.errors import ConflictError, NotFoundError, ValidationError
from engagement.libs.result import Result, Return

from .dtos import CreateWorkspaceCommand, WorkspaceResponse

SLUG_PATTERN = re.compile(r"^[a-z0-9](?:[a-z0-9-]{0,98}[a-z0-9])?$")


class CreateWorkspaceUseCase:
    """
    Use case for creating a workspace.

    Business Rules:
    - Slug is lowercase alphanumerics and dashes, unique across workspaces
    - An optional owner gets an ADMIN membership with is_owner=True
    - The owner membership becomes primary when the owner has none
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(self, command: CreateWorkspaceCommand) -> Result[WorkspaceResponse]:
        slug = command.slug.strip().lower()
        if not SLUG_PATTERN.match(slug):
            raise ValidationError(
                "Slug must be lowercase letters, digits and dashes (max 100 chars)"
            )
        if not command.name.strip():
            raise ValidationError("Workspace name is required")

        async with self.uow:
            if await self.uow.workspaces.get_by_slug(slug) is not None:
                raise ConflictError(f"Workspace slug '{slug}' is already taken")

            owner_id = command.owner_user_id
            if owner_id is not None:
                if await self.uow.users.get_by_id(owner_id) is None:
                    raise NotFoundError("User", owner_id)

            workspace = await self.uow.workspaces.create(
                Workspace(
                    slug=slug,
                    name=command.name.strip(),
                    tenant_id=command.tenant_id,
                    reward_provider_enabled=command.reward_provider_enabled,
                    reward_webhook_secret=command.reward_webhook_secret,
                )
            )

            if owner_id is not None:
                await add_membership(
                    self.uow, owner_id, workspace.id, MembershipRole.admin, is_owner=True
                )

            await record_activity_event(
                self.uow,
                workspace.id,
                ActivityEventType.workspace_created,
                user_id=owner_id,
                metadata={"slug": slug},
            )

            await self.uow.commit()
            return Return.ok(WorkspaceResponse.from_entity(workspace))
