"""
Points Ledger Use Cases
"""

from .award_points_use_case import AwardPointsUseCase
from .dtos import (
    AwardPointsCommand,
    BalanceResponse,
    BudgetResponse,
    BudgetsResponse,
    LeaderboardEntry,
    LeaderboardResponse,
    SetBudgetCommand,
)
from .get_balance_use_case import GetBalanceUseCase
from .get_budgets_use_case import GetBudgetsUseCase
from .leaderboard_use_case import GetChallengeLeaderboardUseCase, GetWorkspaceLeaderboardUseCase
from .set_budget_use_case import SetChallengeBudgetUseCase, SetWorkspaceBudgetUseCase

__all__ = [
    "AwardPointsUseCase",
    "GetBalanceUseCase",
    "GetBudgetsUseCase",
    "GetChallengeLeaderboardUseCase",
    "GetWorkspaceLeaderboardUseCase",
    "SetChallengeBudgetUseCase",
    "SetWorkspaceBudgetUseCase",
    "AwardPointsCommand",
    "BalanceResponse",
    "BudgetResponse",
    "BudgetsResponse",
    "LeaderboardEntry",
    "LeaderboardResponse",
    "SetBudgetCommand",
]
