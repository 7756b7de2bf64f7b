from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from engagement.domain.entities import InviteCode, InviteRedemption


class IInviteRepository(ABC):
    """InviteCode repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, invite_id: UUID) -> Optional[InviteCode]:
        """Get invite by ID"""
        pass

    @abstractmethod
    async def get_by_code(self, code: str) -> Optional[InviteCode]:
        """Get invite by code"""
        pass

    @abstractmethod
    async def get_by_workspace_id(self, workspace_id: UUID) -> List[InviteCode]:
        """Get all invites for a workspace, newest first"""
        pass

    @abstractmethod
    async def create(self, invite: InviteCode) -> InviteCode:
        """Create a new invite"""
        pass

    @abstractmethod
    async def delete(self, invite: InviteCode) -> None:
        """Delete an invite together with its redemptions"""
        pass

    @abstractmethod
    async def try_consume(self, invite_id: UUID) -> bool:
        """Conditionally increment used_count. False when no use is left."""
        pass

    @abstractmethod
    async def get_redemption(self, invite_id: UUID, user_id: UUID) -> Optional[InviteRedemption]:
        """Get a user's redemption of an invite"""
        pass

    @abstractmethod
    async def create_redemption(self, redemption: InviteRedemption) -> InviteRedemption:
        """Record a redemption"""
        pass
