from typing import List, Optional
from uuid import UUID

from sqlalchemy import delete, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from engagement.app.repositories.invite_repository import IInviteRepository
from engagement.domain.entities import InviteCode, InviteRedemption


class InviteRepository(IInviteRepository):
    """InviteCode repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, invite_id: UUID) -> Optional[InviteCode]:
        """Get invite by ID"""
        stmt = select(InviteCode).where(InviteCode.id == invite_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_code(self, code: str) -> Optional[InviteCode]:
        """Get invite by code"""
        stmt = select(InviteCode).where(InviteCode.code == code)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_workspace_id(self, workspace_id: UUID) -> List[InviteCode]:
        """Get all invites for a workspace, newest first"""
        stmt = (
            select(InviteCode)
            .where(InviteCode.workspace_id == workspace_id)
            .order_by(InviteCode.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, invite: InviteCode) -> InviteCode:
        """Create a new invite"""
        self.session.add(invite)
        await self.session.flush()
        await self.session.refresh(invite)
        return invite

    async def delete(self, invite: InviteCode) -> None:
        """Delete an invite together with its redemptions"""
        await self.session.execute(
            delete(InviteRedemption).where(InviteRedemption.invite_id == invite.id)
        )
        await self.session.delete(invite)
        await self.session.flush()

    async def try_consume(self, invite_id: UUID) -> bool:
        """
        Conditionally increment used_count.

        The WHERE clause is the only capacity check that is safe under
        concurrent redemption; a zero rowcount means no use is left.
        """
        stmt = (
            update(InviteCode)
            .where(InviteCode.id == invite_id, InviteCode.used_count < InviteCode.max_uses)
            .values(used_count=InviteCode.used_count + 1)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            return False

        invite = await self.session.get(InviteCode, invite_id)
        if invite is not None:
            await self.session.refresh(invite)
        return True

    async def get_redemption(self, invite_id: UUID, user_id: UUID) -> Optional[InviteRedemption]:
        """Get a user's redemption of an invite"""
        stmt = select(InviteRedemption).where(
            InviteRedemption.invite_id == invite_id, InviteRedemption.user_id == user_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def create_redemption(self, redemption: InviteRedemption) -> InviteRedemption:
        """Record a redemption"""
        self.session.add(redemption)
        await self.session.flush()
        return redemption
