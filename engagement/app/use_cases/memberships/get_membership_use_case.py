from uuid import UUID

from engagement.app.services.access import get_active_workspace
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.errors import NotFoundError
from engagement.libs.result import Result, Return

from .dtos import MembershipResponse


class GetMembershipUseCase:
    """The caller's own membership in a workspace"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(self, user_id: UUID, workspace_slug: str) -> Result[MembershipResponse]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            membership = await self.uow.memberships.get_by_user_and_workspace(user_id, workspace.id)
            if membership is None:
                raise NotFoundError("Membership", workspace_slug)
            return Return.ok(MembershipResponse.from_entity(membership, workspace.slug))
