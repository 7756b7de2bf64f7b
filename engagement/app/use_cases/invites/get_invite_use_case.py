from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.base import utc_now
from engagement.domain.errors import NotFoundError
from engagement.libs.result import Result, Return

from .dtos import InviteDetailsResponse


class GetInviteUseCase:
    """Public invite details shown before redemption; needs no membership"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(self, code: str) -> Result[InviteDetailsResponse]:
        async with self.uow:
            invite = await self.uow.invites.get_by_code(code.strip())
            if invite is None:
                raise NotFoundError("Invite", code)

            workspace = await self.uow.workspaces.get_by_id(invite.workspace_id)
            if workspace is None or not workspace.active:
                raise NotFoundError("Invite", code)

            challenge_title = None
            if invite.challenge_id is not None:
                challenge = await self.uow.challenges.get_by_id(invite.challenge_id)
                challenge_title = challenge.title if challenge else None

            return Return.ok(
                InviteDetailsResponse(
                    code=invite.code,
                    workspace_slug=workspace.slug,
                    workspace_name=workspace.name,
                    challenge_title=challenge_title,
                    role=invite.role.value,
                    expires_at=invite.expires_at.isoformat(),
                    is_expired=invite.is_expired(utc_now()),
                    is_exhausted=invite.is_exhausted(),
                    remaining_uses=max(invite.max_uses - invite.used_count, 0),
                    email_restricted=invite.target_email is not None,
                )
            )
