from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from engagement.domain.entities import (
    ChallengePointsBudget,
    PointsBalance,
    PointsLedgerEntry,
    WorkspacePointsBudget,
)


class IPointsRepository(ABC):
    """Points balance, budget and ledger repository interface - application layer"""

    @abstractmethod
    async def get_balance(self, user_id: UUID, workspace_id: UUID) -> Optional[PointsBalance]:
        """Get a balance row"""
        pass

    @abstractmethod
    async def get_or_create_balance(self, user_id: UUID, workspace_id: UUID) -> PointsBalance:
        """Upsert a zeroed balance row and return it"""
        pass

    @abstractmethod
    async def increment_balance(self, user_id: UUID, workspace_id: UUID, amount: int) -> None:
        """Arithmetic increment of total and available points"""
        pass

    @abstractmethod
    async def get_workspace_budget(self, workspace_id: UUID) -> Optional[WorkspacePointsBudget]:
        """Get the workspace budget, if configured"""
        pass

    @abstractmethod
    async def get_challenge_budget(self, challenge_id: UUID) -> Optional[ChallengePointsBudget]:
        """Get the challenge budget, if configured"""
        pass

    @abstractmethod
    async def save_workspace_budget(self, budget: WorkspacePointsBudget) -> WorkspacePointsBudget:
        """Create or update a workspace budget"""
        pass

    @abstractmethod
    async def save_challenge_budget(self, budget: ChallengePointsBudget) -> ChallengePointsBudget:
        """Create or update a challenge budget"""
        pass

    @abstractmethod
    async def charge_workspace_budget(self, workspace_id: UUID, amount: int) -> bool:
        """Conditional allocation. False when it would exceed total_budget."""
        pass

    @abstractmethod
    async def charge_challenge_budget(self, challenge_id: UUID, amount: int) -> bool:
        """Conditional allocation. False when it would exceed total_budget."""
        pass

    @abstractmethod
    async def add_ledger_entry(self, entry: PointsLedgerEntry) -> PointsLedgerEntry:
        """Append an award to the ledger"""
        pass

    @abstractmethod
    async def list_balances(self, workspace_id: UUID) -> List[PointsBalance]:
        """All balance rows of a workspace"""
        pass
