"""
Transfer Ownership Use Case

Moves the single is_owner flag of a workspace to another ADMIN.
"""

from uuid import UUID

from engagement.app.services.access import get_active_workspace
from engagement.app.services.activity_log import record_activity_event
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import ActivityEventType, MembershipRole
from engagement.domain.errors import (
    AuthorizationError,
    ConflictError,
    NotFoundError,
    ValidationError,
)
from engagement.libs.result import Result, Return

from .dtos import MembershipResponse, TransferOwnershipResponse


class TransferOwnershipUseCase:
    """
    Use case for transferring workspace ownership.

    Business Rules:
    - Caller must hold is_owner=True (FORBIDDEN otherwise)
    - Target must already be an ADMIN member (VALIDATION_ERROR otherwise)
    - Missing memberships are NOT_FOUND
    - Clear and set happen atomically; exactly one owner afterwards
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self, actor_user_id: UUID, workspace_slug: str, new_owner_user_id: UUID
    ) -> Result[TransferOwnershipResponse]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)

            current = await self.uow.memberships.get_by_user_and_workspace(actor_user_id, workspace.id)
            if current is None:
                raise NotFoundError("Membership", actor_user_id)

            target = await self.uow.memberships.get_by_user_and_workspace(
                new_owner_user_id, workspace.id
            )
            if target is None:
                raise NotFoundError("Membership", new_owner_user_id)

            if not current.is_owner:
                raise AuthorizationError("Only the current owner can transfer ownership")

            if target.role != MembershipRole.admin:
                raise ValidationError("Ownership can only be transferred to an ADMIN")

            if target.id == current.id:
                return Return.ok(
                    TransferOwnershipResponse(
                        previous_owner=MembershipResponse.from_entity(current, workspace.slug),
                        new_owner=MembershipResponse.from_entity(target, workspace.slug),
                    )
                )

            flagged = await self.uow.memberships.set_owner(
                workspace.id, actor_user_id, new_owner_user_id
            )
            if flagged != 1:
                # Someone else moved ownership first
                raise ConflictError("Ownership changed concurrently; reload and retry")

            await record_activity_event(
                self.uow,
                workspace.id,
                ActivityEventType.ownership_transferred,
                user_id=new_owner_user_id,
                actor_user_id=actor_user_id,
                metadata={
                    "from_user_id": str(actor_user_id),
                    "to_user_id": str(new_owner_user_id),
                },
            )

            await self.uow.commit()

            return Return.ok(
                TransferOwnershipResponse(
                    previous_owner=MembershipResponse.from_entity(current, workspace.slug),
                    new_owner=MembershipResponse.from_entity(target, workspace.slug),
                )
            )
