from uuid import UUID

from engagement.app.services.access import MANAGE_ROLES, get_active_workspace, require_role
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import RewardStatus
from engagement.libs.result import Result, Return

from .dtos import ReconcileRewardsResponse


class ReconcileRewardsUseCase:
    """Issuance counts by status and type for operator reconciliation"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(self, actor_user_id: UUID, workspace_slug: str) -> Result[ReconcileRewardsResponse]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id, MANAGE_ROLES)

            counts = await self.uow.rewards.count_by_status_and_type(workspace.id)
            return Return.ok(
                ReconcileRewardsResponse(
                    counts=counts,
                    total=sum(sum(by_type.values()) for by_type in counts.values()),
                    pending=sum(counts.get(RewardStatus.pending.value, {}).values()),
                    failed=sum(counts.get(RewardStatus.failed.value, {}).values()),
                )
            )
