from typing import Optional
from uuid import UUID

from engagement.app.services.access import ADMIN_ONLY, get_active_workspace, require_role
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.reward_issuance import (
    DEFAULT_PROVIDER_TIMEOUT_SECONDS,
    RewardIssuanceEngine,
    validate_reward,
)
from engagement.app.services.reward_provider import RewardProvider
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.errors import NotFoundError
from engagement.libs.result import Result, Return

from .dtos import IssueRewardCommand, RewardIssuanceResponse


class IssueRewardUseCase:
    """
    Manually issue a reward to a member. ADMIN only.

    The issuance is committed PENDING before the provider is called, so the
    response carries its final ISSUED or FAILED state.
    """

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
        self, actor_user_id: UUID, workspace_slug: str, command: IssueRewardCommand
    ) -> Result[RewardIssuanceResponse]:
        validate_reward(command.type, command.amount, command.currency, command.sku_id)

        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id, ADMIN_ONLY)
            await require_role(self.uow, workspace, command.user_id)

            if command.challenge_id is not None:
                challenge = await self.uow.challenges.get_in_workspace(command.challenge_id, workspace.id)
                if challenge is None:
                    raise NotFoundError("Challenge", command.challenge_id)

            engine = RewardIssuanceEngine(self.uow, self.provider, self.provider_timeout_seconds)
            issuance = await engine.issue(
                workspace,
                command.user_id,
                command.type,
                amount=command.amount,
                currency=command.currency,
                sku_id=command.sku_id,
                challenge_id=command.challenge_id,
                actor_user_id=actor_user_id,
            )
            return Return.ok(RewardIssuanceResponse.from_entity(issuance))
