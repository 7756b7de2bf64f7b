"""
List Memberships Use Cases

Both directions of the registry: a user's workspaces, and a workspace's
members.
"""

from typing import List
from uuid import UUID

from engagement.app.services.access import MANAGE_ROLES, get_active_workspace, require_role
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.libs.result import Result, Return

from .dtos import MembershipResponse


class ListMembershipsUseCase:
    """
    Memberships of a user, primary first, then by join date.
    Memberships in inactive workspaces are omitted.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(self, user_id: UUID) -> Result[List[MembershipResponse]]:
        async with self.uow:
            memberships = await self.uow.memberships.get_by_user_id(user_id)
            workspaces = await self.uow.workspaces.list_by_ids(
                [m.workspace_id for m in memberships]
            )
            active = {w.id: w.slug for w in workspaces if w.active}

            return Return.ok(
                [
                    MembershipResponse.from_entity(m, active[m.workspace_id])
                    for m in memberships
                    if m.workspace_id in active
                ]
            )


class ListWorkspaceMembershipsUseCase:
    """Members of a workspace; ADMIN or MANAGER only"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(self, actor_user_id: UUID, workspace_slug: str) -> Result[List[MembershipResponse]]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id, MANAGE_ROLES)

            memberships = await self.uow.memberships.get_by_workspace_id(workspace.id)
            return Return.ok(
                [MembershipResponse.from_entity(m, workspace.slug) for m in memberships]
            )
