from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from engagement.domain.entities import Activity, Challenge


class IChallengeRepository(ABC):
    """Challenge repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, challenge_id: UUID) -> Optional[Challenge]:
        """Get challenge by ID"""
        pass

    @abstractmethod
    async def get_in_workspace(self, challenge_id: UUID, workspace_id: UUID) -> Optional[Challenge]:
        """Get challenge by ID, only if it belongs to the workspace"""
        pass

    @abstractmethod
    async def get_by_workspace_id(self, workspace_id: UUID) -> List[Challenge]:
        """Get all challenges for a workspace"""
        pass

    @abstractmethod
    async def create(self, challenge: Challenge) -> Challenge:
        """Create a new challenge"""
        pass


class IActivityRepository(ABC):
    """Activity repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, activity_id: UUID) -> Optional[Activity]:
        """Get activity by ID"""
        pass

    @abstractmethod
    async def get_in_workspace(self, activity_id: UUID, workspace_id: UUID) -> Optional[Activity]:
        """Get activity by ID, only if its challenge belongs to the workspace"""
        pass

    @abstractmethod
    async def get_by_challenge_id(self, challenge_id: UUID) -> List[Activity]:
        """Get all activities of a challenge"""
        pass

    @abstractmethod
    async def create(self, activity: Activity) -> Activity:
        """Create a new activity"""
        pass
