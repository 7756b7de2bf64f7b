"""
Load Context Use Case

Loads the current user together with every workspace they belong to.
"""

from uuid import UUID

from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.errors import NotFoundError
from engagement.libs.result import Result, Return

from .dtos import UserContextResponse, UserResponse, WorkspaceContext


class LoadContextUseCase:
    """
    Use case for loading current user context.

    Business Rules:
    - User must exist
    - Memberships are listed primary first, then by join date
    - Inactive workspaces are omitted
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(self, user_id: UUID) -> Result[UserContextResponse]:
        async with self.uow:
            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                raise NotFoundError("User", user_id)

            memberships = await self.uow.memberships.get_by_user_id(user_id)
            workspaces = await self.uow.workspaces.list_by_ids(
                [m.workspace_id for m in memberships]
            )
            by_id = {w.id: w for w in workspaces}

            contexts = [
                WorkspaceContext.from_entities(m, by_id[m.workspace_id])
                for m in memberships
                if m.workspace_id in by_id and by_id[m.workspace_id].active
            ]

            return Return.ok(
                UserContextResponse(user=UserResponse.from_entity(user), workspaces=contexts)
            )
