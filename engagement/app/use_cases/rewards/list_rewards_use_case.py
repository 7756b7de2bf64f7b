from typing import List, Optional
from uuid import UUID

from engagement.app.services.access import MANAGE_ROLES, get_active_workspace, require_role
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.libs.result import Result, Return

from .dtos import RewardFilter, RewardIssuanceResponse


class ListRewardsUseCase:
    """
    Reward issuances of a workspace, newest first.

    ADMIN/MANAGER see everything; participants only see their own.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self,
        actor_user_id: UUID,
        workspace_slug: str,
        filters: Optional[RewardFilter] = None,
    ) -> Result[List[RewardIssuanceResponse]]:
        filters = filters or RewardFilter()

        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            role = await require_role(self.uow, workspace, actor_user_id)

            user_id = filters.user_id
            if role not in MANAGE_ROLES:
                user_id = actor_user_id

            issuances = await self.uow.rewards.list_for_workspace(
                workspace.id, status=filters.status, reward_type=filters.type, user_id=user_id
            )
            return Return.ok([RewardIssuanceResponse.from_entity(i) for i in issuances])
