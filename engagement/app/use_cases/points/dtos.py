"""
Points Ledger DTOs (Data Transfer Objects)
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from engagement.domain.entities import ChallengePointsBudget, PointsBalance, WorkspacePointsBudget


class AwardPointsCommand(BaseModel):
    user_id: UUID
    amount: int = Field(..., gt=0)
    challenge_id: Optional[UUID] = None
    reason: Optional[str] = Field(None, max_length=100)


class SetBudgetCommand(BaseModel):
    total_budget: int = Field(..., ge=0)


class BalanceResponse(BaseModel):
    user_id: str
    workspace_id: str
    total_points: int
    available_points: int

    @classmethod
    def from_entity(cls, balance: PointsBalance) -> "BalanceResponse":
        return cls(
            user_id=str(balance.user_id),
            workspace_id=str(balance.workspace_id),
            total_points=balance.total_points,
            available_points=balance.available_points,
        )


class BudgetResponse(BaseModel):
    total_budget: int
    allocated: int
    remaining: int
    challenge_id: Optional[str] = None

    @classmethod
    def from_entity(cls, budget) -> "BudgetResponse":
        return cls(
            total_budget=budget.total_budget,
            allocated=budget.allocated,
            remaining=max(budget.total_budget - budget.allocated, 0),
            challenge_id=(
                str(budget.challenge_id) if isinstance(budget, ChallengePointsBudget) else None
            ),
        )


class BudgetsResponse(BaseModel):
    workspace: Optional[BudgetResponse] = None
    challenges: List[BudgetResponse] = []


class LeaderboardEntry(BaseModel):
    rank: int
    user_id: str
    total_points: int
    approved_activities: int


class LeaderboardResponse(BaseModel):
    challenge_id: Optional[str] = None
    entries: List[LeaderboardEntry]


def workspace_budget_response(budget: Optional[WorkspacePointsBudget]) -> Optional[BudgetResponse]:
    return BudgetResponse.from_entity(budget) if budget is not None else None
