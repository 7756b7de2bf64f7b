from abc import ABC, abstractmethod
from typing import Optional
from uuid import UUID

from engagement.domain.entities import User


class IUserRepository(ABC):
    """User repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, user_id: UUID) -> Optional[User]:
        """Get user by ID"""
        pass

    @abstractmethod
    async def get_by_external_id(self, external_id: str) -> Optional[User]:
        """Get user by external identity reference"""
        pass

    @abstractmethod
    async def get_by_reward_participant_id(self, participant_id: str) -> Optional[User]:
        """Get user by reward provider participant reference"""
        pass

    @abstractmethod
    async def create(self, user: User) -> User:
        """Create a new user"""
        pass

    @abstractmethod
    async def update(self, user: User) -> User:
        """Update existing user"""
        pass
