from uuid import UUID

from engagement.app.services.access import MANAGE_ROLES, get_active_workspace, require_role
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.libs.result import Result, Return

from .dtos import BudgetResponse, BudgetsResponse, workspace_budget_response


class GetBudgetsUseCase:
    """Workspace budget plus every configured challenge budget. ADMIN/MANAGER only."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(self, actor_user_id: UUID, workspace_slug: str) -> Result[BudgetsResponse]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id, MANAGE_ROLES)

            challenge_budgets = []
            for challenge in await self.uow.challenges.get_by_workspace_id(workspace.id):
                budget = await self.uow.points.get_challenge_budget(challenge.id)
                if budget is not None:
                    challenge_budgets.append(BudgetResponse.from_entity(budget))

            workspace_budget = await self.uow.points.get_workspace_budget(workspace.id)
            return Return.ok(
                BudgetsResponse(
                    workspace=workspace_budget_response(workspace_budget),
                    challenges=challenge_budgets,
                )
            )
