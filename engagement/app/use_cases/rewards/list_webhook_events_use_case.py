from typing import List
from uuid import UUID

from engagement.app.services.access import MANAGE_ROLES, get_active_workspace, require_role
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.errors import NotFoundError
from engagement.libs.result import Result, Return

from .dtos import WebhookEventResponse


class ListWebhookEventsUseCase:
    """Provider webhook deliveries matched to one issuance. ADMIN/MANAGER only."""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self, actor_user_id: UUID, workspace_slug: str, issuance_id: UUID
    ) -> Result[List[WebhookEventResponse]]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id, MANAGE_ROLES)

            issuance = await self.uow.rewards.get_in_workspace(issuance_id, workspace.id)
            if issuance is None:
                raise NotFoundError("Reward issuance", issuance_id)

            events = await self.uow.webhook_events.get_by_issuance_id(issuance.id)
            return Return.ok([WebhookEventResponse.from_entity(e) for e in events])
