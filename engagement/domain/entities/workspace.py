"""
Workspace Entity

Tenant container isolating all challenge, membership and reward data.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from engagement.domain.base import utc_now


class Workspace(SQLModel, table=True):
    """
    Workspace entity - isolated tenant container.

    Business Rules:
    - Slug is unique and used for every lookup from the presentation layer
    - Never hard-deleted; deactivation sets active=False
    - reward_webhook_secret signs inbound reward provider webhooks
    """

    __tablename__ = "workspaces"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    slug: str = Field(unique=True, index=True, max_length=100)
    name: str = Field(max_length=255)
    tenant_id: str = Field(default="default", max_length=100)

    active: bool = Field(default=True)
    published: bool = Field(default=False)

    reward_provider_enabled: bool = Field(default=False)
    reward_webhook_secret: Optional[str] = Field(default=None, max_length=255)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_workspace_tenant", "tenant_id"),)
