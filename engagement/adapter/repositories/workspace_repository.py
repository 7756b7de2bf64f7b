from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from engagement.app.repositories.workspace_repository import IWorkspaceRepository
from engagement.domain.entities import Workspace


class WorkspaceRepository(IWorkspaceRepository):
    """Workspace repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, workspace_id: UUID) -> Optional[Workspace]:
        """Get workspace by ID"""
        stmt = select(Workspace).where(Workspace.id == workspace_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_slug(self, slug: str) -> Optional[Workspace]:
        """Get workspace by slug"""
        stmt = select(Workspace).where(Workspace.slug == slug)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_by_ids(self, workspace_ids: List[UUID]) -> List[Workspace]:
        """Get workspaces for a set of IDs"""
        if not workspace_ids:
            return []
        stmt = select(Workspace).where(Workspace.id.in_(workspace_ids))
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, workspace: Workspace) -> Workspace:
        """Create a new workspace"""
        self.session.add(workspace)
        await self.session.flush()
        await self.session.refresh(workspace)
        return workspace

    async def update(self, workspace: Workspace) -> Workspace:
        """Update existing workspace"""
        self.session.add(workspace)
        await self.session.flush()
        await self.session.refresh(workspace)
        return workspace
