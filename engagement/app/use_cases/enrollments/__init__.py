"""
Enrollment Use Cases
"""

from .batch_create_enrollments_use_case import BatchCreateEnrollmentsUseCase
from .create_enrollment_use_case import CreateEnrollmentUseCase
from .delete_enrollment_use_case import DeleteEnrollmentUseCase
from .dtos import (
    BatchCreateEnrollmentsCommand,
    CreateEnrollmentCommand,
    DeleteEnrollmentResponse,
    EnrollmentResponse,
    UpdateEnrollmentStatusCommand,
)
from .list_challenge_enrollments_use_case import ListChallengeEnrollmentsUseCase
from .update_enrollment_status_use_case import UpdateEnrollmentStatusUseCase

__all__ = [
    "BatchCreateEnrollmentsUseCase",
    "CreateEnrollmentUseCase",
    "DeleteEnrollmentUseCase",
    "ListChallengeEnrollmentsUseCase",
    "UpdateEnrollmentStatusUseCase",
    "BatchCreateEnrollmentsCommand",
    "CreateEnrollmentCommand",
    "DeleteEnrollmentResponse",
    "EnrollmentResponse",
    "UpdateEnrollmentStatusCommand",
]
