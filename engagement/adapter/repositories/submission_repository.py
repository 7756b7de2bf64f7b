from typing import Dict, List, Optional
from uuid import UUID

from sqlalchemy import distinct, func, update
from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from engagement.app.repositories.submission_repository import ISubmissionRepository
from engagement.domain.entities import Activity, ActivitySubmission, Challenge, SubmissionStatus


class SubmissionRepository(ISubmissionRepository):
    """ActivitySubmission repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_by_id(self, submission_id: UUID) -> Optional[ActivitySubmission]:
        """Get submission by ID"""
        stmt = select(ActivitySubmission).where(ActivitySubmission.id == submission_id)
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def get_in_workspace(
        self, submission_id: UUID, workspace_id: UUID
    ) -> Optional[ActivitySubmission]:
        """Get submission by ID, only if its activity belongs to the workspace"""
        stmt = (
            select(ActivitySubmission)
            .join(Activity, Activity.id == ActivitySubmission.activity_id)
            .join(Challenge, Challenge.id == Activity.challenge_id)
            .where(ActivitySubmission.id == submission_id, Challenge.workspace_id == workspace_id)
        )
        result = await self.session.exec(stmt)
        return result.one_or_none()

    async def list_pending_for_workspace(self, workspace_id: UUID) -> List[ActivitySubmission]:
        """PENDING submissions of the workspace's challenges, oldest first"""
        stmt = (
            select(ActivitySubmission)
            .join(Activity, Activity.id == ActivitySubmission.activity_id)
            .join(Challenge, Challenge.id == Activity.challenge_id)
            .where(
                Challenge.workspace_id == workspace_id,
                ActivitySubmission.status == SubmissionStatus.pending,
            )
            .order_by(ActivitySubmission.submitted_at.asc())
        )
        result = await self.session.exec(stmt)
        return list(result.all())

    async def create(self, submission: ActivitySubmission) -> ActivitySubmission:
        """Create a new submission"""
        self.session.add(submission)
        await self.session.flush()
        await self.session.refresh(submission)
        return submission

    async def update(self, submission: ActivitySubmission) -> ActivitySubmission:
        """Update existing submission"""
        self.session.add(submission)
        await self.session.flush()
        await self.session.refresh(submission)
        return submission

    async def transition(
        self,
        submission_id: UUID,
        from_status: SubmissionStatus,
        to_status: SubmissionStatus,
        **values,
    ) -> bool:
        """
        Guarded status change.

        Two reviewers racing on one submission both issue this UPDATE; the
        store lets exactly one of them match the from_status predicate.
        """
        stmt = (
            update(ActivitySubmission)
            .where(
                ActivitySubmission.id == submission_id,
                ActivitySubmission.status == from_status,
            )
            .values(status=to_status, **values)
            .execution_options(synchronize_session=False)
        )
        result = await self.session.execute(stmt)
        if result.rowcount == 0:
            return False

        submission = await self.session.get(ActivitySubmission, submission_id)
        if submission is not None:
            await self.session.refresh(submission)
        return True

    async def set_reward_issuance(self, submission_id: UUID, issuance_id: UUID) -> None:
        """Link a submission to the issuance it produced"""
        stmt = (
            update(ActivitySubmission)
            .where(ActivitySubmission.id == submission_id)
            .values(reward_issuance_id=issuance_id)
            .execution_options(synchronize_session=False)
        )
        await self.session.execute(stmt)

        submission = await self.session.get(ActivitySubmission, submission_id)
        if submission is not None:
            await self.session.refresh(submission)

    async def count_approved_activities(
        self, workspace_id: UUID, user_ids: List[UUID], challenge_id: Optional[UUID] = None
    ) -> Dict[UUID, int]:
        """Distinct APPROVED activities per user"""
        if not user_ids:
            return {}
        stmt = (
            select(ActivitySubmission.user_id, func.count(distinct(ActivitySubmission.activity_id)))
            .join(Activity, Activity.id == ActivitySubmission.activity_id)
            .join(Challenge, Challenge.id == Activity.challenge_id)
            .where(
                Challenge.workspace_id == workspace_id,
                ActivitySubmission.status == SubmissionStatus.approved,
                ActivitySubmission.user_id.in_(user_ids),
            )
            .group_by(ActivitySubmission.user_id)
        )
        if challenge_id is not None:
            stmt = stmt.where(Challenge.id == challenge_id)
        result = await self.session.exec(stmt)
        return {user_id: count for user_id, count in result.all()}

    async def sum_approved_points(self, challenge_id: UUID, user_ids: List[UUID]) -> Dict[UUID, int]:
        """Total points_awarded of APPROVED submissions per user in a challenge"""
        if not user_ids:
            return {}
        stmt = (
            select(
                ActivitySubmission.user_id,
                func.coalesce(func.sum(ActivitySubmission.points_awarded), 0),
            )
            .join(Activity, Activity.id == ActivitySubmission.activity_id)
            .where(
                Activity.challenge_id == challenge_id,
                ActivitySubmission.status == SubmissionStatus.approved,
                ActivitySubmission.user_id.in_(user_ids),
            )
            .group_by(ActivitySubmission.user_id)
        )
        result = await self.session.exec(stmt)
        return {user_id: int(total) for user_id, total in result.all()}
