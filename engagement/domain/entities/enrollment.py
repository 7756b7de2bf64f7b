"""
Enrollment Entity

A user's participation record in one challenge.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from engagement.domain.base import utc_now

from .enums import EnrollmentStatus

# Allowed status changes; re-joining after a withdrawal is permitted
ENROLLMENT_TRANSITIONS = {
    EnrollmentStatus.invited: {EnrollmentStatus.enrolled, EnrollmentStatus.withdrawn},
    EnrollmentStatus.enrolled: {EnrollmentStatus.withdrawn},
    EnrollmentStatus.withdrawn: {EnrollmentStatus.enrolled},
}


class Enrollment(SQLModel, table=True):
    """
    Enrollment entity.

    Business Rules:
    - (user_id, challenge_id) must be unique
    - The challenge's workspace must match the user's membership workspace
    - Status advances INVITED -> ENROLLED, or independently to WITHDRAWN
    """

    __tablename__ = "enrollments"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    challenge_id: UUID = Field(foreign_key="challenges.id", nullable=False, index=True)

    status: EnrollmentStatus = Field(default=EnrollmentStatus.enrolled)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_enrollment_user_challenge", "user_id", "challenge_id", unique=True),
        Index("idx_enrollment_status", "status"),
    )

    def can_transition_to(self, status: EnrollmentStatus) -> bool:
        return status in ENROLLMENT_TRANSITIONS.get(self.status, set())
