from typing import Optional
from uuid import UUID

from engagement.app.services.access import ADMIN_ONLY, get_active_workspace, require_role
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.reward_issuance import (
    DEFAULT_PROVIDER_TIMEOUT_SECONDS,
    RewardIssuanceEngine,
)
from engagement.app.services.reward_provider import RewardProvider
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.libs.result import Result, Return

from .dtos import RewardIssuanceResponse


class RetryRewardUseCase:
    """Re-attempt a FAILED issuance with the same idempotency key. ADMIN only."""

    def __init__(
        self,
        uow: UnitOfWork,
        provider: Optional[RewardProvider] = None,
        provider_timeout_seconds: float = DEFAULT_PROVIDER_TIMEOUT_SECONDS,
    ):
        self.uow = uow
        self.provider = provider
        self.provider_timeout_seconds = provider_timeout_seconds

    @returns_result
    async def execute(
        self, actor_user_id: UUID, workspace_slug: str, issuance_id: UUID
    ) -> Result[RewardIssuanceResponse]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id, ADMIN_ONLY)

            engine = RewardIssuanceEngine(self.uow, self.provider, self.provider_timeout_seconds)
            issuance = await engine.retry(workspace, issuance_id, actor_user_id)
            return Return.ok(RewardIssuanceResponse.from_entity(issuance))
