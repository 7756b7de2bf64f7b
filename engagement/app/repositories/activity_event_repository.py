from abc import ABC, abstractmethod
from typing import List, Optional, Tuple
from uuid import UUID

from engagement.domain.entities import ActivityEvent, ActivityEventType


class IActivityEventRepository(ABC):
    """ActivityEvent repository interface - application layer"""

    @abstractmethod
    async def create(self, event: ActivityEvent) -> ActivityEvent:
        """Create a new activity event (immutable)"""
        pass

    @abstractmethod
    async def get_by_workspace_paginated(
        self,
        workspace_id: UUID,
        limit: int = 50,
        cursor: Optional[str] = None,
        event_type: Optional[ActivityEventType] = None,
    ) -> Tuple[List[ActivityEvent], Optional[str]]:
        """
        Get activity events for a workspace with cursor-based pagination.

        Returns:
            Tuple of (events, next_cursor)
        """
        pass
