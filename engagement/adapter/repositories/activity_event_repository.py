import base64
from datetime import datetime
from typing import List, Optional, Tuple
from uuid import UUID

from sqlmodel import select
from sqlmodel.ext.asyncio.session import AsyncSession

from engagement.app.repositories.activity_event_repository import IActivityEventRepository
from engagement.domain.entities import ActivityEvent, ActivityEventType


class ActivityEventRepository(IActivityEventRepository):
    """ActivityEvent repository implementation using SQLModel"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create(self, event: ActivityEvent) -> ActivityEvent:
        """Create a new activity event (immutable)"""
        self.session.add(event)
        await self.session.flush()
        return event

    async def get_by_workspace_paginated(
        self,
        workspace_id: UUID,
        limit: int = 50,
        cursor: Optional[str] = None,
        event_type: Optional[ActivityEventType] = None,
    ) -> Tuple[List[ActivityEvent], Optional[str]]:
        """
        Get activity events for a workspace with cursor-based pagination.

        Cursor format: base64-encoded ISO timestamp of created_at
        """
        stmt = select(ActivityEvent).where(ActivityEvent.workspace_id == workspace_id)
        if event_type is not None:
            stmt = stmt.where(ActivityEvent.type == event_type)

        if cursor:
            try:
                cursor_timestamp_str = base64.b64decode(cursor).decode("utf-8")
                cursor_timestamp = datetime.fromisoformat(cursor_timestamp_str)
                stmt = stmt.where(ActivityEvent.created_at < cursor_timestamp)
            except (ValueError, TypeError):
                # Invalid cursor, ignore and return from beginning
                pass

        # Newest first
        stmt = stmt.order_by(ActivityEvent.created_at.desc()).limit(limit + 1)

        result = await self.session.exec(stmt)
        events = list(result.all())

        has_more = len(events) > limit
        if has_more:
            events = events[:limit]

        next_cursor = None
        if has_more and events:
            cursor_timestamp_str = events[-1].created_at.isoformat()
            next_cursor = base64.b64encode(cursor_timestamp_str.encode("utf-8")).decode("utf-8")

        return events, next_cursor
