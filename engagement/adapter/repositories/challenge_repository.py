from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from engagement.app.repositories.challenge_repository import (
    IActivityRepository,
    IChallengeRepository,
)
from engagement.domain.entities import Activity, Challenge


class ChallengeRepository(IChallengeRepository):
    """Challenge repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, challenge_id: UUID) -> Optional[Challenge]:
        """Get challenge by ID"""
        stmt = select(Challenge).where(Challenge.id == challenge_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_in_workspace(self, challenge_id: UUID, workspace_id: UUID) -> Optional[Challenge]:
        """Get challenge by ID, only if it belongs to the workspace"""
        stmt = select(Challenge).where(
            Challenge.id == challenge_id, Challenge.workspace_id == workspace_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_workspace_id(self, workspace_id: UUID) -> List[Challenge]:
        """Get all challenges for a workspace"""
        stmt = (
            select(Challenge)
            .where(Challenge.workspace_id == workspace_id)
            .order_by(Challenge.created_at.desc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, challenge: Challenge) -> Challenge:
        """Create a new challenge"""
        self.session.add(challenge)
        await self.session.flush()
        await self.session.refresh(challenge)
        return challenge


class ActivityRepository(IActivityRepository):
    """Activity repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, activity_id: UUID) -> Optional[Activity]:
        """Get activity by ID"""
        stmt = select(Activity).where(Activity.id == activity_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_in_workspace(self, activity_id: UUID, workspace_id: UUID) -> Optional[Activity]:
        """Get activity by ID, only if its challenge belongs to the workspace"""
        stmt = (
            select(Activity)
            .join(Challenge, Challenge.id == Activity.challenge_id)
            .where(Activity.id == activity_id, Challenge.workspace_id == workspace_id)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_challenge_id(self, challenge_id: UUID) -> List[Activity]:
        """Get all activities of a challenge"""
        stmt = (
            select(Activity)
            .where(Activity.challenge_id == challenge_id)
            .order_by(Activity.created_at.asc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, activity: Activity) -> Activity:
        """Create a new activity"""
        self.session.add(activity)
        await self.session.flush()
        await self.session.refresh(activity)
        return activity
