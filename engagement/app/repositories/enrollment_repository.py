from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from engagement.domain.entities import Enrollment, EnrollmentStatus


class IEnrollmentRepository(ABC):
    """Enrollment repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, enrollment_id: UUID) -> Optional[Enrollment]:
        """Get enrollment by ID"""
        pass

    @abstractmethod
    async def get_by_user_and_challenge(
        self, user_id: UUID, challenge_id: UUID
    ) -> Optional[Enrollment]:
        """Get enrollment by user and challenge"""
        pass

    @abstractmethod
    async def get_by_challenge_id(
        self, challenge_id: UUID, status: Optional[EnrollmentStatus] = None
    ) -> List[Enrollment]:
        """Get enrollments of a challenge, optionally filtered by status"""
        pass

    @abstractmethod
    async def create(self, enrollment: Enrollment) -> Enrollment:
        """Create a new enrollment"""
        pass

    @abstractmethod
    async def create_many(self, enrollments: List[Enrollment]) -> List[Enrollment]:
        """Create several enrollments in one flush"""
        pass

    @abstractmethod
    async def update(self, enrollment: Enrollment) -> Enrollment:
        """Update existing enrollment"""
        pass

    @abstractmethod
    async def delete(self, enrollment: Enrollment) -> None:
        """Delete an enrollment"""
        pass
