"""
Submission Review DTOs (Data Transfer Objects)
"""

from typing import List, Optional

from pydantic import BaseModel, Field

from engagement.domain.entities import ActivitySubmission, RewardType, SubmissionStatus

from ..rewards.dtos import RewardIssuanceResponse


class CreateSubmissionCommand(BaseModel):
    text_content: Optional[str] = None
    link_url: Optional[str] = Field(None, max_length=2048)
    file_urls: List[str] = []
    draft: bool = False


class RewardOverride(BaseModel):
    """Reviewer-chosen external reward replacing the challenge's configuration"""

    type: RewardType
    amount: Optional[int] = Field(None, gt=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    sku_id: Optional[str] = None


class ReviewSubmissionCommand(BaseModel):
    status: SubmissionStatus
    review_notes: Optional[str] = None
    points_awarded: Optional[int] = None
    reward: Optional[RewardOverride] = None


class SubmissionResponse(BaseModel):
    id: str
    activity_id: str
    user_id: str
    enrollment_id: str
    status: str
    text_content: Optional[str] = None
    link_url: Optional[str] = None
    file_urls: List[str] = []
    points_awarded: Optional[int] = None
    review_notes: Optional[str] = None
    reviewer_id: Optional[str] = None
    reviewed_at: Optional[str] = None
    reward_issuance_id: Optional[str] = None
    submitted_at: str

    @classmethod
    def from_entity(cls, submission: ActivitySubmission) -> "SubmissionResponse":
        return cls(
            id=str(submission.id),
            activity_id=str(submission.activity_id),
            user_id=str(submission.user_id),
            enrollment_id=str(submission.enrollment_id),
            status=submission.status.value,
            text_content=submission.text_content,
            link_url=submission.link_url,
            file_urls=list(submission.file_urls or []),
            points_awarded=submission.points_awarded,
            review_notes=submission.review_notes,
            reviewer_id=str(submission.reviewer_id) if submission.reviewer_id else None,
            reviewed_at=submission.reviewed_at.isoformat() if submission.reviewed_at else None,
            reward_issuance_id=(
                str(submission.reward_issuance_id) if submission.reward_issuance_id else None
            ),
            submitted_at=submission.submitted_at.isoformat(),
        )


class ReviewSubmissionResponse(BaseModel):
    submission: SubmissionResponse
    points_awarded: int = 0
    balance: Optional[int] = None
    rewards: List[RewardIssuanceResponse] = []
