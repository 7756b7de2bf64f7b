from typing import Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from engagement.app.repositories.user_repository import IUserRepository
from engagement.domain.entities import User


class UserRepository(IUserRepository):
    """User repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        stmt = select(User).where(User.id == user_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_external_id(self, external_id: str) -> Optional[User]:
        """Get user by external identity reference"""
        stmt = select(User).where(User.external_id == external_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_reward_participant_id(self, participant_id: str) -> Optional[User]:
        """Get user by reward provider participant reference"""
        stmt = select(User).where(User.reward_participant_id == participant_id)
        result = await self.session.exec(stmt)
        return result.first()

    async def create(self, user: User) -> User:
        """Create a new user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user

    async def update(self, user: User) -> User:
        """Update existing user"""
        self.session.add(user)
        await self.session.flush()
        await self.session.refresh(user)
        return user
