"""
Points budget use cases.

Lowering a budget below what is already allocated is a validation error;
allocated never decreases.
"""

from uuid import UUID

from engagement.app.services.access import ADMIN_ONLY, get_active_workspace, require_role
from engagement.app.services.activity_log import record_activity_event
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.base import utc_now
from engagement.domain.entities import (
    ActivityEventType,
    ChallengePointsBudget,
    WorkspacePointsBudget,
)
from engagement.domain.errors import NotFoundError, ValidationError
from engagement.libs.result import Result, Return

from .dtos import BudgetResponse, SetBudgetCommand


def _check_total(total_budget: int, allocated: int) -> None:
    if total_budget < allocated:
        raise ValidationError(
            "Budget cannot be lower than the points already allocated",
            {"allocated": allocated, "requested_total": total_budget},
        )


class SetWorkspaceBudgetUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self, actor_user_id: UUID, workspace_slug: str, command: SetBudgetCommand
    ) -> Result[BudgetResponse]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id, ADMIN_ONLY)

            budget = await self.uow.points.get_workspace_budget(workspace.id)
            if budget is None:
                budget = WorkspacePointsBudget(workspace_id=workspace.id)
            _check_total(command.total_budget, budget.allocated)

            budget.total_budget = command.total_budget
            budget.updated_by = actor_user_id
            budget.updated_at = utc_now()
            budget = await self.uow.points.save_workspace_budget(budget)

            await record_activity_event(
                self.uow,
                workspace.id,
                ActivityEventType.budget_updated,
                actor_user_id=actor_user_id,
                metadata={"scope": "workspace", "total_budget": budget.total_budget},
            )

            await self.uow.commit()
            return Return.ok(BudgetResponse.from_entity(budget))


class SetChallengeBudgetUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self,
        actor_user_id: UUID,
        workspace_slug: str,
        challenge_id: UUID,
        command: SetBudgetCommand,
    ) -> Result[BudgetResponse]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id, ADMIN_ONLY)

            challenge = await self.uow.challenges.get_in_workspace(challenge_id, workspace.id)
            if challenge is None:
                raise NotFoundError("Challenge", challenge_id)

            budget = await self.uow.points.get_challenge_budget(challenge.id)
            if budget is None:
                budget = ChallengePointsBudget(challenge_id=challenge.id, workspace_id=workspace.id)
            _check_total(command.total_budget, budget.allocated)

            budget.total_budget = command.total_budget
            budget.updated_by = actor_user_id
            budget.updated_at = utc_now()
            budget = await self.uow.points.save_challenge_budget(budget)

            await record_activity_event(
                self.uow,
                workspace.id,
                ActivityEventType.budget_updated,
                challenge_id=challenge.id,
                actor_user_id=actor_user_id,
                metadata={"scope": "challenge", "total_budget": budget.total_budget},
            )

            await self.uow.commit()
            return Return.ok(BudgetResponse.from_entity(budget))
