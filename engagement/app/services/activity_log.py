"""
Activity Event Log

Append-only audit trail. A failed write is logged and dropped so it can never
abort the operation that triggered it.
"""

import logging
from typing import Any, Dict, Optional
from uuid import UUID

from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import ActivityEvent, ActivityEventType

logger = logging.getLogger(__name__)


async def record_activity_event(
    uow: UnitOfWork,
    workspace_id: UUID,
    event_type: ActivityEventType,
    *,
    challenge_id: Optional[UUID] = None,
    enrollment_id: Optional[UUID] = None,
    user_id: Optional[UUID] = None,
    actor_user_id: Optional[UUID] = None,
    metadata: Optional[Dict[str, Any]] = None,
) -> Optional[ActivityEvent]:
    """
    Record an activity event inside a SAVEPOINT of the caller's transaction.

    Returns:
        The stored event, or None when the write failed
    """
    event = ActivityEvent(
        workspace_id=workspace_id,
        type=event_type,
        challenge_id=challenge_id,
        enrollment_id=enrollment_id,
        user_id=user_id,
        actor_user_id=actor_user_id,
        event_metadata=metadata,
    )
    try:
        async with uow.savepoint():
            await uow.activity_events.create(event)
    except Exception as exc:
        logger.warning(
            "Failed to record activity event %s for workspace %s: %s",
            event_type.value,
            workspace_id,
            exc,
        )
        return None
    return event
