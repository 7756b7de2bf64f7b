"""
Points Ledger

Budget-checked, append-only points awards. Every hot counter (budget
allocation, balance totals) changes through a single arithmetic UPDATE.
"""

import logging
from typing import Dict, List, Optional
from uuid import UUID

from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import PointsBalance, PointsLedgerEntry
from engagement.domain.errors import BudgetExceededError, ValidationError

logger = logging.getLogger(__name__)


class PointsLedger:
    """Runs inside the caller's transaction; never commits on its own"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    async def get_or_create_balance(self, user_id: UUID, workspace_id: UUID) -> PointsBalance:
        return await self.uow.points.get_or_create_balance(user_id, workspace_id)

    async def award_with_budget(
        self,
        workspace_id: UUID,
        to_user_id: UUID,
        amount: int,
        *,
        challenge_id: Optional[UUID] = None,
        actor_user_id: Optional[UUID] = None,
        submission_id: Optional[UUID] = None,
        reason: Optional[str] = None,
    ) -> PointsBalance:
        """
        Award points, charging the challenge budget when one exists, else
        the workspace budget, else nothing.

        Raises:
            ValidationError: amount is not positive
            BudgetExceededError: the charged budget has no room left
        """
        if amount <= 0:
            raise ValidationError("Points amount must be positive")

        challenge_budget = None
        if challenge_id is not None:
            challenge_budget = await self.uow.points.get_challenge_budget(challenge_id)

        if challenge_budget is not None:
            charged = await self.uow.points.charge_challenge_budget(challenge_id, amount)
            if not charged:
                raise BudgetExceededError(
                    "Challenge points budget exceeded",
                    {
                        "total_budget": challenge_budget.total_budget,
                        "allocated": challenge_budget.allocated,
                        "requested": amount,
                    },
                )
        else:
            workspace_budget = await self.uow.points.get_workspace_budget(workspace_id)
            if workspace_budget is not None:
                charged = await self.uow.points.charge_workspace_budget(workspace_id, amount)
                if not charged:
                    raise BudgetExceededError(
                        "Workspace points budget exceeded",
                        {
                            "total_budget": workspace_budget.total_budget,
                            "allocated": workspace_budget.allocated,
                            "requested": amount,
                        },
                    )

        await self.uow.points.add_ledger_entry(
            PointsLedgerEntry(
                workspace_id=workspace_id,
                challenge_id=challenge_id,
                to_user_id=to_user_id,
                actor_user_id=actor_user_id,
                submission_id=submission_id,
                amount=amount,
                reason=reason,
            )
        )

        await self.uow.points.get_or_create_balance(to_user_id, workspace_id)
        await self.uow.points.increment_balance(to_user_id, workspace_id, amount)
        balance = await self.uow.points.get_balance(to_user_id, workspace_id)

        logger.info(
            "Awarded %s points to user %s in workspace %s", amount, to_user_id, workspace_id
        )
        return balance


def rank_leaderboard(
    totals: Dict[UUID, int], approved_activities: Dict[UUID, int], limit: int
) -> List[Dict]:
    """
    Order by total points desc, then distinct approved activities desc,
    then user id asc.
    """
    ordered = sorted(
        totals.keys(),
        key=lambda user_id: (-totals[user_id], -approved_activities.get(user_id, 0), str(user_id)),
    )
    return [
        {
            "rank": position,
            "user_id": str(user_id),
            "total_points": totals[user_id],
            "approved_activities": approved_activities.get(user_id, 0),
        }
        for position, user_id in enumerate(ordered[:limit], start=1)
    ]
