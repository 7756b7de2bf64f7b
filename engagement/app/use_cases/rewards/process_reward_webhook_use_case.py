"""
Process Reward Webhook Use Case

Entry point for provider callbacks. Authenticates the delivery with the
workspace's shared secret and hands it to the issuance engine.
"""

import json
import logging
from typing import Optional
from uuid import UUID

from engagement.app.services.error_boundary import returns_result
from engagement.app.services.reward_issuance import RewardIssuanceEngine
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.app.services.webhook_signature import verify_webhook_signature
from engagement.domain.errors import AuthorizationError, NotFoundError, ValidationError
from engagement.libs.result import Result, Return

from .dtos import WebhookResultResponse

logger = logging.getLogger(__name__)


class ProcessRewardWebhookUseCase:
    """
    Use case for inbound reward provider webhooks.

    Business Rules:
    - The workspace must exist and have the reward provider enabled
    - With a webhook secret configured, X-Reward-Signature must be the
      HMAC-SHA256 hex digest of the raw body
    - Replays of an already processed event id are acknowledged, not applied
    """

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self, workspace_id: UUID, raw_body: bytes, signature: Optional[str]
    ) -> Result[WebhookResultResponse]:
        async with self.uow:
            workspace = await self.uow.workspaces.get_by_id(workspace_id)
            if workspace is None:
                raise NotFoundError("Workspace", workspace_id)

            if not workspace.reward_provider_enabled:
                raise ValidationError("Reward provider is not enabled for this workspace")

            if workspace.reward_webhook_secret:
                if not verify_webhook_signature(workspace.reward_webhook_secret, raw_body, signature):
                    logger.warning("Rejected webhook with bad signature for workspace %s", workspace_id)
                    raise AuthorizationError("Invalid webhook signature")

            try:
                event = json.loads(raw_body)
            except ValueError:
                raise ValidationError("Webhook body is not valid JSON") from None
            if not isinstance(event, dict):
                raise ValidationError("Webhook body must be a JSON object")

            outcome = await RewardIssuanceEngine(self.uow).apply_webhook(workspace, event)
            return Return.ok(WebhookResultResponse(**outcome))
