"""
Challenge and Activity Entities

Challenges group activities inside a workspace; activities carry the default
points a submission is worth.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from engagement.domain.base import utc_now

from .enums import RewardType


class Challenge(SQLModel, table=True):
    """
    Challenge entity.

    reward_config is opaque provider-facing configuration, e.g.
    {"sku_id": "GIFT-25"} or {"amount": 25, "currency": "USD"}.
    """

    __tablename__ = "challenges"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    workspace_id: UUID = Field(foreign_key="workspaces.id", nullable=False, index=True)

    title: str = Field(max_length=255)
    reward_type: Optional[RewardType] = Field(default=None)
    reward_config: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))


class Activity(SQLModel, table=True):
    """Activity entity - a unit of work participants submit against"""

    __tablename__ = "activities"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    challenge_id: UUID = Field(foreign_key="challenges.id", nullable=False, index=True)

    name: str = Field(max_length=255)
    points_value: int = Field(default=10)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_activity_challenge_created", "challenge_id", "created_at"),)
