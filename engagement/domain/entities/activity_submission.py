"""
ActivitySubmission Entity

Participant work awaiting (or past) review.
"""

from datetime import datetime
from typing import List, Optional
from uuid import UUID, uuid4

from sqlmodel import JSON, Column, DateTime, Field, Index, SQLModel

from engagement.domain.base import utc_now

from .enums import SubmissionStatus


class ActivitySubmission(SQLModel, table=True):
    """
    ActivitySubmission entity.

    Business Rules:
    - Created by an ENROLLED participant
    - PENDING -> APPROVED/REJECTED is terminal and carries the reviewer
    - The review transition is a guarded update on status = PENDING
    """

    __tablename__ = "activity_submissions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    activity_id: UUID = Field(foreign_key="activities.id", nullable=False, index=True)
    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    enrollment_id: UUID = Field(foreign_key="enrollments.id", nullable=False)

    status: SubmissionStatus = Field(default=SubmissionStatus.pending)

    text_content: Optional[str] = Field(default=None)
    link_url: Optional[str] = Field(default=None, max_length=2048)
    file_urls: List[str] = Field(default_factory=list, sa_column=Column(JSON))

    points_awarded: Optional[int] = Field(default=None)
    review_notes: Optional[str] = Field(default=None)
    reviewer_id: Optional[UUID] = Field(default=None, foreign_key="users.id")
    reviewed_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    reward_issuance_id: Optional[UUID] = Field(default=None)

    submitted_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_submission_status_submitted", "status", "submitted_at"),)
