"""
ProviderWebhookEvent Entity

Durable idempotency ledger for inbound reward provider webhooks.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from engagement.domain.base import utc_now


class ProviderWebhookEvent(SQLModel, table=True):
    """
    ProviderWebhookEvent entity.

    Business Rules:
    - (workspace_id, event_id) is unique; a processed event is never re-applied
    - Failed processing keeps the row with processed=False so redelivery retries
    """

    __tablename__ = "provider_webhook_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    workspace_id: UUID = Field(foreign_key="workspaces.id", nullable=False)
    event_id: str = Field(max_length=255)
    event_type: str = Field(max_length=100)
    reward_issuance_id: Optional[UUID] = Field(default=None, index=True)

    payload: Optional[dict] = Field(default=None, sa_column=Column(JSON))
    processed: bool = Field(default=False)
    processed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))
    error: Optional[str] = Field(default=None)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_webhook_workspace_event", "workspace_id", "event_id", unique=True),
    )
