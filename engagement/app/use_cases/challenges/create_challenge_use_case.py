from uuid import UUID

from engagement.app.services.access import ADMIN_ONLY, get_active_workspace, require_role
from engagement.app.services.activity_log import record_activity_event
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.reward_issuance import validate_reward
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import ActivityEventType, Challenge, RewardType
from engagement.libs.result import Result, Return

from .dtos import ChallengeResponse, CreateChallengeCommand


class CreateChallengeUseCase:
    """
    Create a challenge in a workspace. ADMIN only.

    A sku/monetary reward_type must carry a reward_config the issuance engine
    can fulfil (sku_id, or amount + currency).
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self, actor_user_id: UUID, workspace_slug: str, command: CreateChallengeCommand
    ) -> Result[ChallengeResponse]:
        if command.reward_type in (RewardType.sku, RewardType.monetary):
            config = command.reward_config or {}
            validate_reward(
                command.reward_type, config.get("amount"), config.get("currency"), config.get("sku_id")
            )

        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id, ADMIN_ONLY)

            challenge = await self.uow.challenges.create(
                Challenge(
                    workspace_id=workspace.id,
                    title=command.title.strip(),
                    reward_type=command.reward_type,
                    reward_config=command.reward_config,
                )
            )

            await record_activity_event(
                self.uow,
                workspace.id,
                ActivityEventType.challenge_created,
                challenge_id=challenge.id,
                actor_user_id=actor_user_id,
                metadata={
                    "title": challenge.title,
                    "reward_type": command.reward_type.value if command.reward_type else None,
                },
            )

            await self.uow.commit()
            return Return.ok(ChallengeResponse.from_entity(challenge))
