"""
RewardIssuance Entity

Durable record of a points/SKU/monetary reward and its delivery state.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from engagement.domain.base import utc_now

from .enums import ProviderStatus, RewardStatus, RewardType

TERMINAL_REWARD_STATUSES = frozenset({RewardStatus.issued, RewardStatus.cancelled})


class RewardIssuance(SQLModel, table=True):
    """
    RewardIssuance entity.

    Business Rules:
    - Created PENDING at approval or manual-issue time
    - ISSUED and CANCELLED are terminal
    - FAILED only leaves through an explicit retry (back to PENDING)
    - Webhooks never move an ISSUED row anywhere else
    - external_response is an opaque provider payload
    """

    __tablename__ = "reward_issuances"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    workspace_id: UUID = Field(foreign_key="workspaces.id", nullable=False, index=True)
    challenge_id: Optional[UUID] = Field(default=None, foreign_key="challenges.id")
    submission_id: Optional[UUID] = Field(default=None)

    type: RewardType = Field(nullable=False)
    amount: Optional[int] = Field(default=None)
    currency: Optional[str] = Field(default=None, max_length=3)
    sku_id: Optional[str] = Field(default=None, max_length=255)

    status: RewardStatus = Field(default=RewardStatus.pending)

    provider: Optional[str] = Field(default=None, max_length=50)
    provider_transaction_id: Optional[str] = Field(default=None, index=True, max_length=255)
    provider_adjustment_id: Optional[str] = Field(default=None, index=True, max_length=255)
    provider_status: Optional[ProviderStatus] = Field(default=None)
    webhook_received: bool = Field(default=False)

    error_message: Optional[str] = Field(default=None)
    external_response: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    issued_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_reward_workspace_status", "workspace_id", "status"),)

    @property
    def is_terminal(self) -> bool:
        return self.status in TERMINAL_REWARD_STATUSES
