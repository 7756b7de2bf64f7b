from abc import ABC, abstractmethod
from typing import Dict, List, Optional
from uuid import UUID

from engagement.domain.entities import RewardIssuance, RewardStatus, RewardType


class IRewardRepository(ABC):
    """RewardIssuance repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, issuance_id: UUID) -> Optional[RewardIssuance]:
        """Get issuance by ID"""
        pass

    @abstractmethod
    async def get_in_workspace(self, issuance_id: UUID, workspace_id: UUID) -> Optional[RewardIssuance]:
        """Get issuance by ID, only if it belongs to the workspace"""
        pass

    @abstractmethod
    async def get_by_provider_reference(
        self, workspace_id: UUID, reference: str
    ) -> Optional[RewardIssuance]:
        """Find an issuance by provider transaction or adjustment id"""
        pass

    @abstractmethod
    async def list_for_workspace(
        self,
        workspace_id: UUID,
        status: Optional[RewardStatus] = None,
        reward_type: Optional[RewardType] = None,
        user_id: Optional[UUID] = None,
    ) -> List[RewardIssuance]:
        """Issuances of a workspace, newest first"""
        pass

    @abstractmethod
    async def count_by_status_and_type(self, workspace_id: UUID) -> Dict[str, Dict[str, int]]:
        """{status: {type: count}} for a workspace"""
        pass

    @abstractmethod
    async def create(self, issuance: RewardIssuance) -> RewardIssuance:
        """Create a new issuance"""
        pass

    @abstractmethod
    async def update(self, issuance: RewardIssuance) -> RewardIssuance:
        """Update existing issuance"""
        pass

    @abstractmethod
    async def transition(
        self, issuance_id: UUID, from_statuses: List[RewardStatus], to_status: RewardStatus, **values
    ) -> bool:
        """Guarded status change. False when the row was in none of from_statuses."""
        pass
