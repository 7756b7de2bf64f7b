from typing import List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from engagement.app.repositories.points_repository import IPointsRepository
from engagement.domain.base import utc_now
from engagement.domain.entities import (
    ChallengePointsBudget,
    PointsBalance,
    PointsLedgerEntry,
    WorkspacePointsBudget,
)


class PointsRepository(IPointsRepository):
    """Points repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_balance(self, user_id: UUID, workspace_id: UUID) -> Optional[PointsBalance]:
        """Get a balance row"""
        stmt = select(PointsBalance).where(
            PointsBalance.user_id == user_id, PointsBalance.workspace_id == workspace_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_or_create_balance(self, user_id: UUID, workspace_id: UUID) -> PointsBalance:
        """
        Upsert a zeroed balance row.

        The insert runs in a SAVEPOINT so losing a creation race to another
        request only rolls back the insert, never the caller's transaction.
        """
        balance = await self.get_balance(user_id, workspace_id)
        if balance is not None:
            return balance

        try:
            async with self.session.begin_nested():
                balance = PointsBalance(user_id=user_id, workspace_id=workspace_id)
                self.session.add(balance)
        except IntegrityError:
            balance = await self.get_balance(user_id, workspace_id)
        return balance

    async def increment_balance(self, user_id: UUID, workspace_id: UUID, amount: int) -> None:
        """Arithmetic increment of total and available points"""
        stmt = (
            update(PointsBalance)
            .where(PointsBalance.user_id == user_id, PointsBalance.workspace_id == workspace_id)
            .values(
                total_points=PointsBalance.total_points + amount,
                available_points=PointsBalance.available_points + amount,
                updated_at=utc_now(),
            )
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)

        balance = await self.get_balance(user_id, workspace_id)
        if balance is not None:
            await self.session.refresh(balance)

    async def get_workspace_budget(self, workspace_id: UUID) -> Optional[WorkspacePointsBudget]:
        """Get the workspace budget, if configured"""
        stmt = select(WorkspacePointsBudget).where(WorkspacePointsBudget.workspace_id == workspace_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_challenge_budget(self, challenge_id: UUID) -> Optional[ChallengePointsBudget]:
        """Get the challenge budget, if configured"""
        stmt = select(ChallengePointsBudget).where(ChallengePointsBudget.challenge_id == challenge_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def save_workspace_budget(self, budget: WorkspacePointsBudget) -> WorkspacePointsBudget:
        """Create or update a workspace budget"""
        self.session.add(budget)
        await self.session.flush()
        await self.session.refresh(budget)
        return budget

    async def save_challenge_budget(self, budget: ChallengePointsBudget) -> ChallengePointsBudget:
        """Create or update a challenge budget"""
        self.session.add(budget)
        await self.session.flush()
        await self.session.refresh(budget)
        return budget

    async def charge_workspace_budget(self, workspace_id: UUID, amount: int) -> bool:
        """Conditional allocation. False when it would exceed total_budget."""
        stmt = (
            update(WorkspacePointsBudget)
            .where(
                WorkspacePointsBudget.workspace_id == workspace_id,
                WorkspacePointsBudget.allocated + amount <= WorkspacePointsBudget.total_budget,
            )
            .values(
                allocated=WorkspacePointsBudget.allocated + amount,
                updated_at=utc_now(),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            return False

        budget = await self.get_workspace_budget(workspace_id)
        if budget is not None:
            await self.session.refresh(budget)
        return True

    async def charge_challenge_budget(self, challenge_id: UUID, amount: int) -> bool:
        """Conditional allocation. False when it would exceed total_budget."""
        stmt = (
            update(ChallengePointsBudget)
            .where(
                ChallengePointsBudget.challenge_id == challenge_id,
                ChallengePointsBudget.allocated + amount <= ChallengePointsBudget.total_budget,
            )
            .values(
                allocated=ChallengePointsBudget.allocated + amount,
                updated_at=utc_now(),
            )
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            return False

        budget = await self.get_challenge_budget(challenge_id)
        if budget is not None:
            await self.session.refresh(budget)
        return True

    async def add_ledger_entry(self, entry: PointsLedgerEntry) -> PointsLedgerEntry:
        """Append an award to the ledger"""
        self.session.add(entry)
        await self.session.flush()
        return entry

    async def list_balances(self, workspace_id: UUID) -> List[PointsBalance]:
        """All balance rows of a workspace"""
        stmt = select(PointsBalance).where(PointsBalance.workspace_id == workspace_id)
        result = await self.session.exec(stmt)
        return list(result.all())
