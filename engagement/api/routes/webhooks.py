"""
Reward Provider Webhook Route

Unauthenticated by JWT; deliveries are authenticated by the workspace's
HMAC signature instead.
"""

from typing import Optional
from uuid import UUID

from fastapi import APIRouter, Depends, Header, Query, Request, status

from engagement.api.error import envelope
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.app.use_cases.rewards import ProcessRewardWebhookUseCase
from engagement.depends import get_unit_of_work

router = APIRouter(prefix="/webhooks", tags=["Webhooks"])


@router.post("/rewards", status_code=status.HTTP_200_OK)
async def reward_webhook(
    request: Request,
    workspace_id: UUID = Query(...),
    x_reward_signature: Optional[str] = Header(None),
    uow: UnitOfWork = Depends(get_unit_of_work),
):
    """
    Reward Provider Webhook

    Raises:
        - 403 Forbidden: bad signature
        - 404 Not Found: unknown workspace
        - 422 Unprocessable Entity: provider disabled, malformed body or
          unsupported event type
    """
    raw_body = await request.body()
    result = await ProcessRewardWebhookUseCase(uow).execute(workspace_id, raw_body, x_reward_signature)
    return envelope(result)
