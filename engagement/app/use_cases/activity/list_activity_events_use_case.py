"""
List Activity Events Use Case

Retrieves the workspace activity log with cursor pagination.
"""

from typing import Any, Dict, Optional
from uuid import UUID

from engagement.app.services.access import MANAGE_ROLES, get_active_workspace, require_role
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import ActivityEventType
from engagement.domain.errors import ValidationError
from engagement.libs.result import Result, Return

MAX_PAGE_SIZE = 200


class ListActivityEventsUseCase:
    """
    Use case for reading a workspace's activity log.

    Business Rules:
    - Caller must be ADMIN or MANAGER of the workspace
    - Results are workspace-scoped and ordered newest first
    - Supports cursor-based pagination and filtering by event type
    - Each event includes the actor's email when the actor still exists
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self,
        user_id: UUID,
        workspace_slug: str,
        limit: int = 50,
        cursor: Optional[str] = None,
        event_type: Optional[ActivityEventType] = None,
    ) -> Result[Dict[str, Any]]:
        if limit < 1 or limit > MAX_PAGE_SIZE:
            raise ValidationError(f"limit must be between 1 and {MAX_PAGE_SIZE}")

        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, user_id, MANAGE_ROLES)

            events, next_cursor = await self.uow.activity_events.get_by_workspace_paginated(
                workspace.id, limit=limit, cursor=cursor, event_type=event_type
            )

            emails: Dict[UUID, Optional[str]] = {}
            events_list = []
            for event in events:
                actor_email = None
                if event.actor_user_id:
                    if event.actor_user_id not in emails:
                        actor = await self.uow.users.get_by_id(event.actor_user_id)
                        emails[event.actor_user_id] = actor.email if actor else None
                    actor_email = emails[event.actor_user_id]

                events_list.append(
                    {
                        "id": str(event.id),
                        "type": event.type.value,
                        "challenge_id": str(event.challenge_id) if event.challenge_id else None,
                        "enrollment_id": str(event.enrollment_id) if event.enrollment_id else None,
                        "user_id": str(event.user_id) if event.user_id else None,
                        "actor_user_id": str(event.actor_user_id) if event.actor_user_id else None,
                        "actor_email": actor_email,
                        "timestamp": event.created_at.isoformat() + "Z",
                        "metadata": event.event_metadata or {},
                    }
                )

            return Return.ok({"events": events_list, "next_cursor": next_cursor})
