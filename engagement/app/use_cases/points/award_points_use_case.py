from uuid import UUID

from engagement.app.services.access import ADMIN_ONLY, get_active_workspace, require_role
from engagement.app.services.activity_log import record_activity_event
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.points_ledger import PointsLedger
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import ActivityEventType
from engagement.domain.errors import NotFoundError
from engagement.libs.result import Result, Return

from .dtos import AwardPointsCommand, BalanceResponse


class AwardPointsUseCase:
    """
    Manually award points to a member. ADMIN only.

    The award goes through the same budget check as review approvals.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self, actor_user_id: UUID, workspace_slug: str, command: AwardPointsCommand
    ) -> Result[BalanceResponse]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id, ADMIN_ONLY)
            await require_role(self.uow, workspace, command.user_id)

            if command.challenge_id is not None:
                challenge = await self.uow.challenges.get_in_workspace(command.challenge_id, workspace.id)
                if challenge is None:
                    raise NotFoundError("Challenge", command.challenge_id)

            balance = await PointsLedger(self.uow).award_with_budget(
                workspace.id,
                command.user_id,
                command.amount,
                challenge_id=command.challenge_id,
                actor_user_id=actor_user_id,
                reason=command.reason or "manual_award",
            )

            await record_activity_event(
                self.uow,
                workspace.id,
                ActivityEventType.points_awarded,
                challenge_id=command.challenge_id,
                user_id=command.user_id,
                actor_user_id=actor_user_id,
                metadata={"amount": command.amount, "reason": command.reason},
            )

            await self.uow.commit()
            return Return.ok(BalanceResponse.from_entity(balance))
