from uuid import UUID

from engagement.app.services.access import get_active_workspace, require_role
from engagement.app.services.activity_log import record_activity_event
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import (
    ActivityEventType,
    ActivitySubmission,
    EnrollmentStatus,
    SubmissionStatus,
)
from engagement.domain.errors import NotFoundError, ValidationError
from engagement.libs.result import Result, Return

from .dtos import CreateSubmissionCommand, SubmissionResponse


class CreateSubmissionUseCase:
    """
    Submit work for an activity.

    Business Rules:
    - The caller needs an ENROLLED enrollment in the activity's challenge
    - At least one of text, link or files must be present
    - draft=True stores a DRAFT the reviewer cannot see yet
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self,
        user_id: UUID,
        workspace_slug: str,
        activity_id: UUID,
        command: CreateSubmissionCommand,
    ) -> Result[SubmissionResponse]:
        if not (command.text_content or command.link_url or command.file_urls):
            raise ValidationError("A submission needs text, a link or at least one file")

        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, user_id)

            activity = await self.uow.activities.get_in_workspace(activity_id, workspace.id)
            if activity is None:
                raise NotFoundError("Activity", activity_id)

            enrollment = await self.uow.enrollments.get_by_user_and_challenge(
                user_id, activity.challenge_id
            )
            if enrollment is None or enrollment.status != EnrollmentStatus.enrolled:
                raise ValidationError("You must be enrolled in this challenge to submit")

            submission = await self.uow.submissions.create(
                ActivitySubmission(
                    activity_id=activity.id,
                    user_id=user_id,
                    enrollment_id=enrollment.id,
                    status=SubmissionStatus.draft if command.draft else SubmissionStatus.pending,
                    text_content=command.text_content,
                    link_url=command.link_url,
                    file_urls=command.file_urls,
                )
            )

            await record_activity_event(
                self.uow,
                workspace.id,
                ActivityEventType.submission_created,
                challenge_id=activity.challenge_id,
                enrollment_id=enrollment.id,
                user_id=user_id,
                actor_user_id=user_id,
                metadata={
                    "submission_id": str(submission.id),
                    "activity_id": str(activity.id),
                    "status": submission.status.value,
                },
            )

            await self.uow.commit()
            return Return.ok(SubmissionResponse.from_entity(submission))
