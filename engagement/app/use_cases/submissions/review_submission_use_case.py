"""
Review Submission Use Case

Approves or rejects a PENDING submission, awards points against the budget,
and hands the approved reward to the issuance engine after commit.
"""

import logging
from typing import List, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError

from engagement.app.services.access import MANAGE_ROLES, get_active_workspace, require_role
from engagement.app.services.activity_log import record_activity_event
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.points_ledger import PointsLedger
from engagement.app.services.reward_issuance import (
    DEFAULT_PROVIDER_TIMEOUT_SECONDS,
    RewardIssuanceEngine,
)
from engagement.app.services.reward_provider import RewardProvider
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.base import utc_now
from engagement.domain.entities import (
    ActivityEventType,
    Challenge,
    RewardType,
    SubmissionStatus,
    Workspace,
)
from engagement.domain.errors import ConflictError, EngagementError, NotFoundError, ValidationError
from engagement.libs.result import Result, Return

from ..rewards.dtos import RewardIssuanceResponse
from .dtos import ReviewSubmissionCommand, ReviewSubmissionResponse, RewardOverride, SubmissionResponse

logger = logging.getLogger(__name__)

EXTERNAL_REWARD_TYPES = (RewardType.sku, RewardType.monetary)


class ReviewSubmissionUseCase:
    """
    Use case for reviewing an activity submission.

    Business Rules:
    - Reviewer must be ADMIN or MANAGER of the submission's workspace
    - Only PENDING submissions can be reviewed; the status guard makes a
      concurrent second review fail with CONFLICT
    - APPROVED awards the explicit points override, else the activity's
      points_value, charged against the budget in the same transaction
    - BUDGET_EXCEEDED rolls the whole review back
    - Reward issuances run after commit; their failures never undo the review
    """

    def __init__(
        self,
        uow: UnitOfWork,
        provider: Optional[RewardProvider] = None,
        provider_timeout_seconds: float = DEFAULT_PROVIDER_TIMEOUT_SECONDS,
    ):
        self.uow = uow
        self.provider = provider
        self.provider_timeout_seconds = provider_timeout_seconds

    @returns_result
    async def execute(
        self,
        reviewer_id: UUID,
        workspace_slug: str,
        submission_id: UUID,
        command: ReviewSubmissionCommand,
    ) -> Result[ReviewSubmissionResponse]:
        if command.status not in (SubmissionStatus.approved, SubmissionStatus.rejected):
            raise ValidationError("Review status must be APPROVED or REJECTED")
        if command.points_awarded is not None and command.points_awarded < 0:
            raise ValidationError("points_awarded cannot be negative")
        if command.reward is not None and command.reward.type not in EXTERNAL_REWARD_TYPES:
            raise ValidationError("A reward override must be a sku or monetary reward")

        approved = command.status == SubmissionStatus.approved

        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, reviewer_id, MANAGE_ROLES)

            submission = await self.uow.submissions.get_in_workspace(submission_id, workspace.id)
            if submission is None:
                raise NotFoundError("Submission", submission_id)

            if submission.status != SubmissionStatus.pending:
                raise ConflictError(
                    f"Submission has already been reviewed (status: {submission.status.value})"
                )

            activity = await self.uow.activities.get_by_id(submission.activity_id)
            challenge = await self.uow.challenges.get_by_id(activity.challenge_id)

            points = 0
            if approved:
                points = (
                    command.points_awarded
                    if command.points_awarded is not None
                    else activity.points_value
                )

            moved = await self.uow.submissions.transition(
                submission.id,
                SubmissionStatus.pending,
                command.status,
                reviewer_id=reviewer_id,
                reviewed_at=utc_now(),
                review_notes=command.review_notes,
                points_awarded=points if approved else None,
            )
            if not moved:
                raise ConflictError("Submission was reviewed concurrently")

            balance_total = None
            if approved and points > 0:
                balance = await PointsLedger(self.uow).award_with_budget(
                    workspace.id,
                    submission.user_id,
                    points,
                    challenge_id=challenge.id,
                    actor_user_id=reviewer_id,
                    submission_id=submission.id,
                    reason="submission_approved",
                )
                balance_total = balance.total_points

            await record_activity_event(
                self.uow,
                workspace.id,
                ActivityEventType.submission_approved if approved else ActivityEventType.submission_rejected,
                challenge_id=challenge.id,
                enrollment_id=submission.enrollment_id,
                user_id=submission.user_id,
                actor_user_id=reviewer_id,
                metadata={
                    "submission_id": str(submission.id),
                    "activity_id": str(activity.id),
                    "points_awarded": points,
                },
            )

            await self.uow.commit()
            logger.info(
                "Submission %s %s by %s", submission.id, command.status.value, reviewer_id
            )

            reward_ids: List[UUID] = []
            if approved:
                reward_ids = await self._issue_rewards(
                    workspace, challenge, submission.id, submission.user_id, points, reviewer_id, command.reward
                )

            # Re-read: a failed issuance rolls back and expires loaded rows
            submission = await self.uow.submissions.get_by_id(submission_id)
            rewards = [await self.uow.rewards.get_by_id(reward_id) for reward_id in reward_ids]

            return Return.ok(
                ReviewSubmissionResponse(
                    submission=SubmissionResponse.from_entity(submission),
                    points_awarded=points,
                    balance=balance_total,
                    rewards=[RewardIssuanceResponse.from_entity(r) for r in rewards],
                )
            )

    async def _issue_rewards(
        self,
        workspace: Workspace,
        challenge: Challenge,
        submission_id: UUID,
        user_id: UUID,
        points: int,
        reviewer_id: UUID,
        override: Optional[RewardOverride],
    ) -> List[UUID]:
        """Issue the points and external rewards; returns the ids that were created"""
        engine = RewardIssuanceEngine(self.uow, self.provider, self.provider_timeout_seconds)
        requests = []
        if points > 0:
            requests.append({"reward_type": RewardType.points, "amount": points})

        if override is not None:
            requests.append(
                {
                    "reward_type": override.type,
                    "amount": override.amount,
                    "currency": override.currency,
                    "sku_id": override.sku_id,
                }
            )
        elif challenge.reward_type in EXTERNAL_REWARD_TYPES:
            config = challenge.reward_config or {}
            requests.append(
                {
                    "reward_type": challenge.reward_type,
                    "amount": config.get("amount"),
                    "currency": config.get("currency"),
                    "sku_id": config.get("sku_id"),
                }
            )

        issued = []
        for request in requests:
            try:
                issuance = await engine.issue(
                    workspace,
                    user_id,
                    request.pop("reward_type"),
                    challenge_id=challenge.id,
                    submission_id=submission_id,
                    actor_user_id=reviewer_id,
                    **request,
                )
            except EngagementError as exc:
                logger.error(
                    "Reward issuance for submission %s was rejected: %s", submission_id, exc.message
                )
                continue
            except SQLAlchemyError as exc:
                await self.uow.rollback()
                logger.error(
                    "Reward issuance for submission %s could not be stored: %s", submission_id, exc
                )
                break
            issued.append(issuance.id)
        return issued
