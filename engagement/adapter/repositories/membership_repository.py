from typing import List, Optional
from uuid import UUID

from sqlalchemy import update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from engagement.app.repositories.membership_repository import IMembershipRepository
from engagement.domain.entities import Membership


class MembershipRepository(IMembershipRepository):
    """Membership repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_user_and_workspace(
        self, user_id: UUID, workspace_id: UUID
    ) -> Optional[Membership]:
        """Get membership by user and workspace"""
        stmt = select(Membership).where(
            Membership.user_id == user_id, Membership.workspace_id == workspace_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_user_id(self, user_id: UUID) -> List[Membership]:
        """Get all memberships for a user, primary first then by join date"""
        stmt = (
            select(Membership)
            .where(Membership.user_id == user_id)
            .order_by(Membership.is_primary.desc(), Membership.joined_at.asc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_by_workspace_id(self, workspace_id: UUID) -> List[Membership]:
        """Get all memberships for a workspace"""
        stmt = (
            select(Membership)
            .where(Membership.workspace_id == workspace_id)
            .order_by(Membership.joined_at.asc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def get_primary(self, user_id: UUID) -> Optional[Membership]:
        """Get the user's primary membership, if any"""
        stmt = select(Membership).where(
            Membership.user_id == user_id, Membership.is_primary == True  # noqa: E712
        )
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, membership: Membership) -> Membership:
        """Create a new membership"""
        self.session.add(membership)
        await self.session.flush()
        await self.session.refresh(membership)
        return membership

    async def update(self, membership: Membership) -> Membership:
        """Update existing membership"""
        self.session.add(membership)
        await self.session.flush()
        await self.session.refresh(membership)
        return membership

    async def delete(self, membership: Membership) -> None:
        """Delete a membership"""
        await self.session.delete(membership)
        await self.session.flush()

    async def clear_primary(self, user_id: UUID) -> None:
        """Clear is_primary on every membership of the user"""
        stmt = (
            update(Membership)
            .where(Membership.user_id == user_id, Membership.is_primary == True)  # noqa: E712
            .values(is_primary=False)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)
        await self._refresh_loaded(lambda m: m.user_id == user_id)

    async def set_primary(self, user_id: UUID, workspace_id: UUID) -> int:
        """
        Move the primary flag to (user_id, workspace_id).

        The clear runs before the set so the partial unique index never sees
        two primaries for the user.
        """
        clear_stmt = (
            update(Membership)
            .where(
                Membership.user_id == user_id,
                Membership.workspace_id != workspace_id,
                Membership.is_primary == True,  # noqa: E712
            )
            .values(is_primary=False)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(clear_stmt)

        set_stmt = (
            update(Membership)
            .where(Membership.user_id == user_id, Membership.workspace_id == workspace_id)
            .values(is_primary=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(set_stmt)
        await self._refresh_loaded(lambda m: m.user_id == user_id)
        return result.rowcount

    async def set_owner(self, workspace_id: UUID, from_user_id: UUID, to_user_id: UUID) -> int:
        """Move is_owner from one membership to another inside the current transaction"""
        clear_stmt = (
            update(Membership)
            .where(
                Membership.workspace_id == workspace_id,
                Membership.user_id == from_user_id,
                Membership.is_owner == True,  # noqa: E712
            )
            .values(is_owner=False)
            .execution_options(synchronize_session=False)
        )
        cleared = await self.session.execute(clear_stmt)
        if cleared.rowcount == 0:
            return 0

        set_stmt = (
            update(Membership)
            .where(Membership.workspace_id == workspace_id, Membership.user_id == to_user_id)
            .values(is_owner=True)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(set_stmt)
        await self._refresh_loaded(lambda m: m.workspace_id == workspace_id)
        return result.rowcount

    async def _refresh_loaded(self, predicate) -> None:
        # Bulk updates bypass the identity map; reload what the session holds
        for obj in list(self.session.identity_map.values()):
            if isinstance(obj, Membership) and predicate(obj):
                await self.session.refresh(obj)
