from uuid import UUID

from engagement.app.services.access import ADMIN_ONLY, get_active_workspace, require_role
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.reward_issuance import RewardIssuanceEngine
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.libs.result import Result, Return

from .dtos import RewardIssuanceResponse


class CancelRewardUseCase:
    """Cancel a PENDING or FAILED issuance. ADMIN only."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self, actor_user_id: UUID, workspace_slug: str, issuance_id: UUID
    ) -> Result[RewardIssuanceResponse]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id, ADMIN_ONLY)

            issuance = await RewardIssuanceEngine(self.uow).cancel(workspace, issuance_id, actor_user_id)
            return Return.ok(RewardIssuanceResponse.from_entity(issuance))
