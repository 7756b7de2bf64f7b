"""
ActivityEvent Entity

Append-only audit trail of every mutating step.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from engagement.domain.base import utc_now

from .enums import ActivityEventType


class ActivityEvent(SQLModel, table=True):
    """
    ActivityEvent entity - immutable log of workspace activity.

    Business Rules:
    - Never updated or deleted
    - Write failures never abort the triggering operation
    - Metadata stores additional context (submission id, points, etc.)
    """

    __tablename__ = "activity_events"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    workspace_id: UUID = Field(nullable=False, index=True)
    type: ActivityEventType = Field(nullable=False)

    challenge_id: Optional[UUID] = Field(default=None, index=True)
    enrollment_id: Optional[UUID] = Field(default=None)
    user_id: Optional[UUID] = Field(default=None)
    actor_user_id: Optional[UUID] = Field(default=None)

    event_metadata: Optional[dict] = Field(default=None, sa_column=Column(JSON))

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_activity_event_created_at", "created_at"),
        Index("idx_activity_event_workspace_type", "workspace_id", "type"),
    )
