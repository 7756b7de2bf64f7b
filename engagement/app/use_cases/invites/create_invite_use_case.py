"""
Create Invite Use Case

Issues a bounded-use invite code for a workspace (optionally a challenge).
"""

import secrets
from datetime import timedelta
from uuid import UUID

from engagement.app.services.access import ADMIN_ONLY, get_active_workspace, require_role
from engagement.app.services.activity_log import record_activity_event
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.base import utc_now
from engagement.domain.entities import ActivityEventType, InviteCode
from engagement.domain.errors import ConflictError, NotFoundError
from engagement.libs.result import Result, Return

from .dtos import CreateInviteCommand, InviteResponse

DEFAULT_EXPIRY_HOURS = 168
DEFAULT_CODE_LENGTH = 10
MAX_CODE_ATTEMPTS = 5


def generate_invite_code(length: int = DEFAULT_CODE_LENGTH) -> str:
    return secrets.token_urlsafe(length * 2)[:length]


class CreateInviteUseCase:
    """
    Use case for creating invite codes.

    Business Rules:
    - Only a workspace ADMIN may create invites
    - A referenced challenge must belong to the same workspace
    - expires_in_hours defaults to 168 (7 days), max_uses to 1
    - target_email, when set, restricts redemption to that address
    """

    def __init__(
        self,
        uow: UnitOfWork,
        default_expiry_hours: int = DEFAULT_EXPIRY_HOURS,
        code_length: int = DEFAULT_CODE_LENGTH,
    ):
        self.uow = uow
        self.default_expiry_hours = default_expiry_hours
        self.code_length = code_length

    @returns_result
    async def execute(
        self, actor_user_id: UUID, workspace_slug: str, command: CreateInviteCommand
    ) -> Result[InviteResponse]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id, ADMIN_ONLY)

            if command.challenge_id is not None:
                challenge = await self.uow.challenges.get_in_workspace(
                    command.challenge_id, workspace.id
                )
                if challenge is None:
                    raise NotFoundError("Challenge", command.challenge_id)

            code = await self._unique_code()
            hours = command.expires_in_hours or self.default_expiry_hours

            invite = await self.uow.invites.create(
                InviteCode(
                    code=code,
                    workspace_id=workspace.id,
                    challenge_id=command.challenge_id,
                    role=command.role,
                    max_uses=command.max_uses,
                    target_email=command.target_email.lower() if command.target_email else None,
                    created_by=actor_user_id,
                    expires_at=utc_now() + timedelta(hours=hours),
                )
            )

            await record_activity_event(
                self.uow,
                workspace.id,
                ActivityEventType.invite_sent,
                challenge_id=command.challenge_id,
                actor_user_id=actor_user_id,
                metadata={
                    "invite_id": str(invite.id),
                    "role": command.role.value,
                    "max_uses": command.max_uses,
                    "target_email": invite.target_email,
                },
            )

            await self.uow.commit()
            return Return.ok(InviteResponse.from_entity(invite))

    async def _unique_code(self) -> str:
        for _ in range(MAX_CODE_ATTEMPTS):
            code = generate_invite_code(self.code_length)
            if await self.uow.invites.get_by_code(code) is None:
                return code
        raise ConflictError("Could not allocate a unique invite code")
