"""
Submission Review Use Cases
"""

from .create_submission_use_case import CreateSubmissionUseCase
from .dtos import (
    CreateSubmissionCommand,
    ReviewSubmissionCommand,
    ReviewSubmissionResponse,
    RewardOverride,
    SubmissionResponse,
)
from .list_pending_submissions_use_case import ListPendingSubmissionsUseCase
from .review_submission_use_case import ReviewSubmissionUseCase
from .submit_draft_use_case import SubmitDraftUseCase

__all__ = [
    "CreateSubmissionUseCase",
    "ListPendingSubmissionsUseCase",
    "ReviewSubmissionUseCase",
    "SubmitDraftUseCase",
    "CreateSubmissionCommand",
    "ReviewSubmissionCommand",
    "ReviewSubmissionResponse",
    "RewardOverride",
    "SubmissionResponse",
]
