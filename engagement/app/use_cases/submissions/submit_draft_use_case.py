from uuid import UUID

from engagement.app.services.access import get_active_workspace, require_role
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.base import utc_now
from engagement.domain.entities import SubmissionStatus
from engagement.domain.errors import ConflictError, NotFoundError
from engagement.libs.result import Result, Return

from .dtos import SubmissionResponse


class SubmitDraftUseCase:
    """Move the caller's own DRAFT submission into the review queue"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self, user_id: UUID, workspace_slug: str, submission_id: UUID
    ) -> Result[SubmissionResponse]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, user_id)

            submission = await self.uow.submissions.get_in_workspace(submission_id, workspace.id)
            if submission is None or submission.user_id != user_id:
                raise NotFoundError("Submission", submission_id)

            moved = await self.uow.submissions.transition(
                submission.id,
                SubmissionStatus.draft,
                SubmissionStatus.pending,
                submitted_at=utc_now(),
            )
            if not moved:
                raise ConflictError(
                    f"Only DRAFT submissions can be submitted (current status: {submission.status.value})"
                )

            await self.uow.commit()
            return Return.ok(SubmissionResponse.from_entity(submission))
