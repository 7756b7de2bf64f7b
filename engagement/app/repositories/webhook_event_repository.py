from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from engagement.domain.entities import ProviderWebhookEvent


class IWebhookEventRepository(ABC):
    """ProviderWebhookEvent repository interface - application layer"""

    @abstractmethod
    async def get_by_event_id(self, workspace_id: UUID, event_id: str) -> Optional[ProviderWebhookEvent]:
        """Get a recorded delivery by provider event id"""
        pass

    @abstractmethod
    async def get_by_issuance_id(self, issuance_id: UUID) -> List[ProviderWebhookEvent]:
        """Deliveries that touched an issuance, oldest first"""
        pass

    @abstractmethod
    async def create(self, event: ProviderWebhookEvent) -> ProviderWebhookEvent:
        """Record a delivery"""
        pass

    @abstractmethod
    async def update(self, event: ProviderWebhookEvent) -> ProviderWebhookEvent:
        """Update a recorded delivery"""
        pass
