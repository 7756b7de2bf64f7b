from typing import Optional
from uuid import UUID

from engagement.app.services.access import MANAGE_ROLES, get_active_workspace, require_role
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.errors import AuthorizationError
from engagement.libs.result import Result, Return

from .dtos import BalanceResponse


class GetBalanceUseCase:
    """
    Points balance of a member. Members read their own; ADMIN/MANAGER read
    anyone's. A member without awards reads as zero.
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self, actor_user_id: UUID, workspace_slug: str, user_id: Optional[UUID] = None
    ) -> Result[BalanceResponse]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            actor_role = await require_role(self.uow, workspace, actor_user_id)

            target_user_id = user_id or actor_user_id
            if target_user_id != actor_user_id and actor_role not in MANAGE_ROLES:
                raise AuthorizationError("You can only view your own balance")

            balance = await self.uow.points.get_balance(target_user_id, workspace.id)
            if balance is None:
                return Return.ok(
                    BalanceResponse(
                        user_id=str(target_user_id),
                        workspace_id=str(workspace.id),
                        total_points=0,
                        available_points=0,
                    )
                )
            return Return.ok(BalanceResponse.from_entity(balance))
