from typing import List, Optional
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from engagement.app.repositories.webhook_event_repository import IWebhookEventRepository
from engagement.domain.entities import ProviderWebhookEvent


class WebhookEventRepository(IWebhookEventRepository):
    """ProviderWebhookEvent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_event_id(self, workspace_id: UUID, event_id: str) -> Optional[ProviderWebhookEvent]:
        """Get a recorded delivery by provider event id"""
        stmt = select(ProviderWebhookEvent).where(
            ProviderWebhookEvent.workspace_id == workspace_id,
            ProviderWebhookEvent.event_id == event_id,
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_by_issuance_id(self, issuance_id: UUID) -> List[ProviderWebhookEvent]:
        """Deliveries that touched an issuance, oldest first"""
        stmt = (
            select(ProviderWebhookEvent)
            .where(ProviderWebhookEvent.reward_issuance_id == issuance_id)
            .order_by(ProviderWebhookEvent.created_at.asc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, event: ProviderWebhookEvent) -> ProviderWebhookEvent:
        """Record a delivery"""
        self.session.add(event)
        await self.session.flush()
        await self.session.refresh(event)
        return event

    async def update(self, event: ProviderWebhookEvent) -> ProviderWebhookEvent:
        """Update a recorded delivery"""
        self.session.add(event)
        await self.session.flush()
        await self.session.refresh(event)
        return event
