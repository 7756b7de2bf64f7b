"""
Enrollment DTOs (Data Transfer Objects)
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from engagement.domain.entities import Enrollment, EnrollmentStatus


class CreateEnrollmentCommand(BaseModel):
    """Omitting user_id enrolls the caller"""

    user_id: Optional[UUID] = None
    status: EnrollmentStatus = EnrollmentStatus.enrolled


class BatchCreateEnrollmentsCommand(BaseModel):
    user_ids: List[UUID] = Field(..., min_length=1)
    status: EnrollmentStatus = EnrollmentStatus.enrolled


class UpdateEnrollmentStatusCommand(BaseModel):
    status: EnrollmentStatus


class EnrollmentResponse(BaseModel):
    id: str
    user_id: str
    challenge_id: str
    status: str
    created_at: str
    updated_at: str

    @classmethod
    def from_entity(cls, enrollment: Enrollment) -> "EnrollmentResponse":
        return cls(
            id=str(enrollment.id),
            user_id=str(enrollment.user_id),
            challenge_id=str(enrollment.challenge_id),
            status=enrollment.status.value,
            created_at=enrollment.created_at.isoformat(),
            updated_at=enrollment.updated_at.isoformat(),
        )


class DeleteEnrollmentResponse(BaseModel):
    status: str = "deleted"
