from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from engagement.domain.entities import Membership


class IMembershipRepository(ABC):
    """Membership repository interface - application layer"""

    @abstractmethod
    async def get_by_user_and_workspace(
        self, user_id: UUID, workspace_id: UUID
    ) -> Optional[Membership]:
        """Get membership by user and workspace"""
        pass

    @abstractmethod
    async def get_by_user_id(self, user_id: UUID) -> List[Membership]:
        """Get all memberships for a user, primary first then by join date"""
        pass

    @abstractmethod
    async def get_by_workspace_id(self, workspace_id: UUID) -> List[Membership]:
        """Get all memberships for a workspace"""
        pass

    @abstractmethod
    async def get_primary(self, user_id: UUID) -> Optional[Membership]:
        """Get the user's primary membership, if any"""
        pass

    @abstractmethod
    async def create(self, membership: Membership) -> Membership:
        """Create a new membership"""
        pass

    @abstractmethod
    async def update(self, membership: Membership) -> Membership:
        """Update existing membership"""
        pass

    @abstractmethod
    async def delete(self, membership: Membership) -> None:
        """Delete a membership"""
        pass

    @abstractmethod
    async def clear_primary(self, user_id: UUID) -> None:
        """Clear is_primary on every membership of the user"""
        pass

    @abstractmethod
    async def set_primary(self, user_id: UUID, workspace_id: UUID) -> int:
        """Clear the user's other primaries and flag this one. Returns rows flagged."""
        pass

    @abstractmethod
    async def set_owner(self, workspace_id: UUID, from_user_id: UUID, to_user_id: UUID) -> int:
        """Move is_owner between two memberships. Returns rows flagged."""
        pass
