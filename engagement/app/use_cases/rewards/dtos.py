"""
Reward Issuance DTOs (Data Transfer Objects)
"""

from typing import Any, Dict, Optional
from uuid import UUID

from pydantic import BaseModel, Field

from engagement.app.services.reward_provider import REMEDIATION_HINTS, classify_error_message
from engagement.domain.entities import (
    ProviderWebhookEvent,
    RewardIssuance,
    RewardStatus,
    RewardType,
)


class IssueRewardCommand(BaseModel):
    user_id: UUID
    type: RewardType
    amount: Optional[int] = Field(None, gt=0)
    currency: Optional[str] = Field(None, min_length=3, max_length=3)
    sku_id: Optional[str] = Field(None, min_length=1, max_length=255)
    challenge_id: Optional[UUID] = None


class RewardFilter(BaseModel):
    status: Optional[RewardStatus] = None
    type: Optional[RewardType] = None
    user_id: Optional[UUID] = None


class RewardIssuanceResponse(BaseModel):
    id: str
    user_id: str
    challenge_id: Optional[str] = None
    submission_id: Optional[str] = None
    type: str
    amount: Optional[int] = None
    currency: Optional[str] = None
    sku_id: Optional[str] = None
    status: str
    provider: Optional[str] = None
    provider_transaction_id: Optional[str] = None
    provider_adjustment_id: Optional[str] = None
    provider_status: Optional[str] = None
    webhook_received: bool = False
    error_message: Optional[str] = None
    failure_category: Optional[str] = None
    remediation: Optional[str] = None
    external_response: Optional[Dict[str, Any]] = None
    created_at: str
    issued_at: Optional[str] = None

    @classmethod
    def from_entity(cls, issuance: RewardIssuance) -> "RewardIssuanceResponse":
        category = None
        if issuance.status == RewardStatus.failed and issuance.error_message:
            category = classify_error_message(issuance.error_message)

        return cls(
            id=str(issuance.id),
            user_id=str(issuance.user_id),
            challenge_id=str(issuance.challenge_id) if issuance.challenge_id else None,
            submission_id=str(issuance.submission_id) if issuance.submission_id else None,
            type=issuance.type.value,
            amount=issuance.amount,
            currency=issuance.currency,
            sku_id=issuance.sku_id,
            status=issuance.status.value,
            provider=issuance.provider,
            provider_transaction_id=issuance.provider_transaction_id,
            provider_adjustment_id=issuance.provider_adjustment_id,
            provider_status=issuance.provider_status.value if issuance.provider_status else None,
            webhook_received=issuance.webhook_received,
            error_message=issuance.error_message,
            failure_category=category.value if category else None,
            remediation=REMEDIATION_HINTS[category] if category else None,
            external_response=issuance.external_response,
            created_at=issuance.created_at.isoformat(),
            issued_at=issuance.issued_at.isoformat() if issuance.issued_at else None,
        )


class ReconcileRewardsResponse(BaseModel):
    """Issuance counts as {status: {type: count}}"""

    counts: Dict[str, Dict[str, int]]
    total: int
    pending: int
    failed: int


class WebhookEventResponse(BaseModel):
    id: str
    event_id: str
    event_type: str
    reward_issuance_id: Optional[str] = None
    processed: bool
    processed_at: Optional[str] = None
    error: Optional[str] = None
    created_at: str

    @classmethod
    def from_entity(cls, event: ProviderWebhookEvent) -> "WebhookEventResponse":
        return cls(
            id=str(event.id),
            event_id=event.event_id,
            event_type=event.event_type,
            reward_issuance_id=str(event.reward_issuance_id) if event.reward_issuance_id else None,
            processed=event.processed,
            processed_at=event.processed_at.isoformat() if event.processed_at else None,
            error=event.error,
            created_at=event.created_at.isoformat(),
        )


class WebhookResultResponse(BaseModel):
    status: str
    event_id: str
    reward_issuance_id: Optional[str] = None
    error: Optional[str] = None
