"""
Redeem Invite Use Case

Joins the caller to the invite's workspace (and challenge) in one transaction.
"""

from uuid import UUID

from engagement.app.services.activity_log import record_activity_event
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.membership_registry import add_membership
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.base import utc_now
from engagement.domain.entities import (
    ActivityEventType,
    Enrollment,
    EnrollmentStatus,
    InviteRedemption,
)
from engagement.domain.errors import (
    AuthorizationError,
    ExhaustedError,
    ExpiredError,
    NotFoundError,
)
from engagement.libs.result import Result, Return

from ..workspaces.dtos import WorkspaceResponse
from .dtos import ChallengeInfo, EnrollmentInfo, RedeemInviteResponse


class RedeemInviteUseCase:
    """
    Use case for redeeming an invite code.

    Business Rules:
    - Code must exist, be unexpired and have uses left
    - target_email, when set, must match the caller's email
    - used_count is consumed by a conditional UPDATE; losing the race for
      the last use rolls everything back with INVITE_EXHAUSTED
    - A user redeeming the same code again does not consume another use
    - Existing members keep their role; new members get the invite's role
    - A challenge invite enrolls the caller or promotes a non-ENROLLED row
    - Clears the caller's is_pending flag
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(self, code: str, user_id: UUID) -> Result[RedeemInviteResponse]:
        async with self.uow:
            invite = await self.uow.invites.get_by_code(code.strip())
            if invite is None:
                raise NotFoundError("Invite", code)

            workspace = await self.uow.workspaces.get_by_id(invite.workspace_id)
            if workspace is None or not workspace.active:
                raise NotFoundError("Workspace", invite.workspace_id)

            user = await self.uow.users.get_by_id(user_id)
            if user is None:
                raise NotFoundError("User", user_id)

            if invite.is_expired(utc_now()):
                raise ExpiredError("This invite code has expired")

            if invite.target_email and invite.target_email.lower() != user.email.lower():
                raise AuthorizationError("This invite was issued for a different email address")

            redemption = await self.uow.invites.get_redemption(invite.id, user.id)
            if redemption is None:
                if invite.is_exhausted():
                    raise ExhaustedError("This invite code has no uses left")

                if not await self.uow.invites.try_consume(invite.id):
                    raise ExhaustedError("This invite code has no uses left")

                await self.uow.invites.create_redemption(
                    InviteRedemption(invite_id=invite.id, user_id=user.id)
                )

            membership = await self.uow.memberships.get_by_user_and_workspace(user.id, workspace.id)
            is_existing_member = membership is not None
            if membership is None:
                membership = await add_membership(self.uow, user.id, workspace.id, invite.role)

            if user.is_pending:
                user.is_pending = False
                await self.uow.users.update(user)

            challenge_info = None
            enrollment_info = None
            enrollment_changed = False
            enrollment = None
            if invite.challenge_id is not None:
                challenge = await self.uow.challenges.get_in_workspace(invite.challenge_id, workspace.id)
                if challenge is None:
                    raise NotFoundError("Challenge", invite.challenge_id)
                challenge_info = ChallengeInfo(id=str(challenge.id), title=challenge.title)

                enrollment = await self.uow.enrollments.get_by_user_and_challenge(user.id, challenge.id)
                if enrollment is None:
                    enrollment = await self.uow.enrollments.create(
                        Enrollment(
                            user_id=user.id,
                            challenge_id=challenge.id,
                            status=EnrollmentStatus.enrolled,
                        )
                    )
                    enrollment_changed = True
                elif enrollment.status != EnrollmentStatus.enrolled:
                    enrollment.status = EnrollmentStatus.enrolled
                    enrollment.updated_at = utc_now()
                    enrollment = await self.uow.enrollments.update(enrollment)
                    enrollment_changed = True

                enrollment_info = EnrollmentInfo(id=str(enrollment.id), status=enrollment.status.value)

            await record_activity_event(
                self.uow,
                workspace.id,
                ActivityEventType.invite_redeemed,
                challenge_id=invite.challenge_id,
                user_id=user.id,
                actor_user_id=user.id,
                metadata={
                    "invite_id": str(invite.id),
                    "role": membership.role.value,
                    "is_existing_member": is_existing_member,
                    "repeat_redemption": redemption is not None,
                },
            )
            if enrollment_changed:
                await record_activity_event(
                    self.uow,
                    workspace.id,
                    ActivityEventType.enrolled,
                    challenge_id=invite.challenge_id,
                    enrollment_id=enrollment.id,
                    user_id=user.id,
                    actor_user_id=user.id,
                    metadata={"source": "invite", "invite_id": str(invite.id)},
                )

            await self.uow.commit()

            return Return.ok(
                RedeemInviteResponse(
                    workspace=WorkspaceResponse.from_entity(workspace),
                    challenge=challenge_info,
                    enrollment=enrollment_info,
                    role=membership.role.value,
                    is_existing_member=is_existing_member,
                )
            )
