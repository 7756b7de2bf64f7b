from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from engagement.app.repositories.enrollment_repository import IEnrollmentRepository
from engagement.domain.entities import Enrollment, EnrollmentStatus


class EnrollmentRepository(IEnrollmentRepository):
    """Enrollment repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, enrollment_id: UUID) -> Optional[Enrollment]:
        """Get enrollment by ID"""
        stmt = select(Enrollment).where(Enrollment.id == enrollment_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_user_and_challenge(
        self, user_id: UUID, challenge_id: UUID
    ) -> Optional[Enrollment]:
        """Get enrollment by user and challenge"""
        stmt = select(Enrollment).where(
            Enrollment.user_id == user_id, Enrollment.challenge_id == challenge_id
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_challenge_id(
        self, challenge_id: UUID, status: Optional[EnrollmentStatus] = None
    ) -> List[Enrollment]:
        """Get enrollments of a challenge, optionally filtered by status"""
        stmt = select(Enrollment).where(Enrollment.challenge_id == challenge_id)
        if status is not None:
            stmt = stmt.where(Enrollment.status == status)
        stmt = stmt.order_by(Enrollment.created_at.asc())
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, enrollment: Enrollment) -> Enrollment:
        """Create a new enrollment"""
        self.session.add(enrollment)
        await self.session.flush()
        await self.session.refresh(enrollment)
        return enrollment

    async def create_many(self, enrollments: List[Enrollment]) -> List[Enrollment]:
        """Create several enrollments in one flush"""
        self.session.add_all(enrollments)
        await self.session.flush()
        return enrollments

    async def update(self, enrollment: Enrollment) -> Enrollment:
        """Update existing enrollment"""
        self.session.add(enrollment)
        await self.session.flush()
        await self.session.refresh(enrollment)
        return enrollment

    async def delete(self, enrollment: Enrollment) -> None:
        """Delete an enrollment"""
        await self.session.delete(enrollment)
        await self.session.flush()
