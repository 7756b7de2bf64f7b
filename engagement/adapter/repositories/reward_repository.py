from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import func, or_, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from engagement.app.repositories.reward_repository import IRewardRepository
from engagement.domain.base import utc_now
from engagement.domain.entities import RewardIssuance, RewardStatus, RewardType


class RewardRepository(IRewardRepository):
    """RewardIssuance repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, issuance_id: UUID) -> Optional[RewardIssuance]:
        """Get issuance by ID"""
        stmt = select(RewardIssuance).where(RewardIssuance.id == issuance_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_in_workspace(self, issuance_id: UUID, workspace_id: UUID) -> Optional[RewardIssuance]:
        """Get issuance by ID, only if it belongs to the workspace"""
        stmt = select(RewardIssuance).where(
            RewardIssuance.id == issuance_id, RewardIssuance.workspace_id == workspace_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_provider_reference(
        self, workspace_id: UUID, reference: str
    ) -> Optional[RewardIssuance]:
        """Find an issuance by provider transaction or adjustment id"""
        stmt = select(RewardIssuance).where(
            RewardIssuance.workspace_id == workspace_id,
            or_(
                RewardIssuance.provider_transaction_id == reference,
                RewardIssuance.provider_adjustment_id == reference,
            ),
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def list_for_workspace(
        self,
        workspace_id: UUID,
        status: Optional[RewardStatus] = None,
        reward_type: Optional[RewardType] = None,
        user_id: Optional[UUID] = None,
    ) -> List[RewardIssuance]:
        """Issuances of a workspace, newest first"""
        stmt = select(RewardIssuance).where(RewardIssuance.workspace_id == workspace_id)
        if status is not None:
            stmt = stmt.where(RewardIssuance.status == status)
        if reward_type is not None:
            stmt = stmt.where(RewardIssuance.type == reward_type)
        if user_id is not None:
            stmt = stmt.where(RewardIssuance.user_id == user_id)
        stmt = stmt.order_by(RewardIssuance.created_at.desc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def count_by_status_and_type(self, workspace_id: UUID) -> Dict[str, Dict[str, int]]:
        """{status: {type: count}} for a workspace"""
        stmt = (
            select(RewardIssuance.status, RewardIssuance.type, func.count(RewardIssuance.id))
            .where(RewardIssuance.workspace_id == workspace_id)
            .group_by(RewardIssuance.status, RewardIssuance.type)
        )
        result = await self.session.exec(stmt)

        counts: Dict[str, Dict[str, int]] = {}
        for status, reward_type, count in result.all():
            status_key = status.value if isinstance(status, RewardStatus) else status
            type_key = reward_type.value if isinstance(reward_type, RewardType) else reward_type
            counts.setdefault(status_key, {})[type_key] = count
        return counts

    async def create(self, issuance: RewardIssuance) -> RewardIssuance:
        """Create a new issuance"""
        self.session.add(issuance)
        await self.session.flush()
        await self.session.refresh(issuance)
        return issuance

    async def update(self, issuance: RewardIssuance) -> RewardIssuance:
        """Update existing issuance"""
        issuance.updated_at = utc_now()
        self.session.add(issuance)
        await self.session.flush()
        await self.session.refresh(issuance)
        return issuance

    async def transition(
        self, issuance_id: UUID, from_statuses: List[RewardStatus], to_status: RewardStatus, **values
    ) -> bool:
        """Guarded status change. False when the row was in none of from_statuses."""
        stmt = (
            update(RewardIssuance)
            .where(RewardIssuance.id == issuance_id, RewardIssuance.status.in_(from_statuses))
            .values(status=to_status, updated_at=utc_now(), **values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            return False

        issuance = await self.session.get(RewardIssuance, issuance_id)
        if issuance is not None:
            await self.session.refresh(issuance)
        return True
