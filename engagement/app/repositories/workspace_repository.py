from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from engagement.domain.entities import Workspace


class IWorkspaceRepository(ABC):
    """Workspace repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, workspace_id: UUID) -> Optional[Workspace]:
        """Get workspace by ID"""
        pass

    @abstractmethod
    async def get_by_slug(self, slug: str) -> Optional[Workspace]:
        """Get workspace by slug (active or not)"""
        pass

    @abstractmethod
    async def list_by_ids(self, workspace_ids: List[UUID]) -> List[Workspace]:
        """Get workspaces for a set of IDs"""
        pass

    @abstractmethod
    async def create(self, workspace: Workspace) -> Workspace:
        """Create a new workspace"""
        pass

    @abstractmethod
    async def update(self, workspace: Workspace) -> Workspace:
        """Update existing workspace"""
        pass
