"""
Reward Provider contract

Only the provider's contract is modelled here; the HTTP implementation lives
in the adapter layer.
"""

from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Dict, Optional

from pydantic import BaseModel, Field

from engagement.domain.entities import ProviderStatus
from engagement.domain.errors import ProviderError


class ProviderResult(BaseModel):
    """Normalised provider response for a transaction or adjustment"""

    id: str
    status: ProviderStatus = ProviderStatus.pending
    raw: Dict[str, Any] = Field(default_factory=dict)


class RewardProvider(ABC):
    """External reward fulfilment service"""

    name: str = "reward_provider"

    @abstractmethod
    async def create_transaction(
        self,
        participant_id: str,
        sku_id: str,
        idempotency_key: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> ProviderResult:
        """Order a catalog item (SKU) for a participant"""
        pass

    @abstractmethod
    async def create_adjustment(
        self,
        participant_id: str,
        amount: int,
        currency: str,
        idempotency_key: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> ProviderResult:
        """Credit a monetary amount to a participant"""
        pass


class ProviderFailure(str, Enum):
    address_invalid = "address_invalid"
    participant_not_found = "participant_not_found"
    insufficient_balance = "insufficient_balance"
    unknown = "unknown"


REMEDIATION_HINTS = {
    ProviderFailure.address_invalid: "Ask the participant to complete their shipping address, then retry.",
    ProviderFailure.participant_not_found: "Sync the participant with the reward provider, then retry.",
    ProviderFailure.insufficient_balance: "Fund the reward program account, then retry.",
    ProviderFailure.unknown: "Inspect the provider response before retrying.",
}


def classify_provider_error(error: ProviderError) -> ProviderFailure:
    """
    Map a provider failure onto a remediation category.

    The category is a hint for operators; it never drives automatic retries.
    """
    text = (error.message or "").lower()
    if error.response:
        text = f"{text} {error.response}".lower()

    if "address" in text or "shipping" in text:
        return ProviderFailure.address_invalid
    if "insufficient" in text or "balance" in text or "funds" in text:
        return ProviderFailure.insufficient_balance
    if "participant" in text and ("not found" in text or error.status_code == 404):
        return ProviderFailure.participant_not_found
    return ProviderFailure.unknown


def classify_error_message(message: Optional[str]) -> ProviderFailure:
    """Classify a stored error message (e.g. RewardIssuance.error_message)"""
    if not message:
        return ProviderFailure.unknown
    return classify_provider_error(ProviderError(message))
