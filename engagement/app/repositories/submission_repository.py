from abc import ABC, abstractmethod
from typing import List, Optional
from uuid import UUID

from engagement.domain.entities import ActivitySubmission, SubmissionStatus


class ISubmissionRepository(ABC):
    """ActivitySubmission repository interface - application layer"""

    @abstractmethod
    async def get_by_id(self, submission_id: UUID) -> Optional[ActivitySubmission]:
        """Get submission by ID"""
        pass

    @abstractmethod
    async def get_in_workspace(
        self, submission_id: UUID, workspace_id: UUID
    ) -> Optional[ActivitySubmission]:
        """Get submission by ID, only if its activity belongs to the workspace"""
        pass

    @abstractmethod
    async def list_pending_for_workspace(self, workspace_id: UUID) -> List[ActivitySubmission]:
        """PENDING submissions of the workspace's challenges, oldest first"""
        pass

    @abstractmethod
    async def create(self, submission: ActivitySubmission) -> ActivitySubmission:
        """Create a new submission"""
        pass

    @abstractmethod
    async def update(self, submission: ActivitySubmission) -> ActivitySubmission:
        """Update existing submission"""
        pass

    @abstractmethod
    async def transition(
        self,
        submission_id: UUID,
        from_status: SubmissionStatus,
        to_status: SubmissionStatus,
        **values,
    ) -> bool:
        """Guarded status change. False when the row was not in from_status."""
        pass

    @abstractmethod
    async def set_reward_issuance(self, submission_id: UUID, issuance_id: UUID) -> None:
        """Link a submission to the issuance it produced"""
        pass

    @abstractmethod
    async def count_approved_activities(
        self, workspace_id: UUID, user_ids: List[UUID], challenge_id: Optional[UUID] = None
    ) -> dict:
        """Distinct APPROVED activities per user"""
        pass

    @abstractmethod
    async def sum_approved_points(self, challenge_id: UUID, user_ids: List[UUID]) -> dict:
        """Total points_awarded of APPROVED submissions per user in a challenge"""
        pass
