"""
HTTP reward provider client (httpx)
"""

import logging
from typing import Any, Dict, Optional

import httpx

from engagement.app.services.reward_provider import ProviderResult, RewardProvider
from engagement.domain.entities import ProviderStatus
from engagement.domain.errors import ProviderError

logger = logging.getLogger(__name__)


class HttpRewardProvider(RewardProvider):
    """
    Reward provider reached over HTTPS.

    Every call carries an Idempotency-Key so a retried issuance can never be
    fulfilled twice on the provider side.
    """

    name = "rewardstack"

    def __init__(
        self,
        base_url: str,
        api_key: str,
        program_id: str,
        timeout_seconds: float = 10.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._api_key = api_key
        self._program_id = program_id
        self._timeout_seconds = timeout_seconds
        self._transport = transport

    async def create_transaction(
        self,
        participant_id: str,
        sku_id: str,
        idempotency_key: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> ProviderResult:
        payload = {"products": [{"sku": sku_id, "quantity": 1}]}
        if metadata:
            payload["meta"] = metadata
        return await self._post(
            f"/api/program/{self._program_id}/participant/{participant_id}/transaction",
            payload,
            idempotency_key,
        )

    async def create_adjustment(
        self,
        participant_id: str,
        amount: int,
        currency: str,
        idempotency_key: str,
        metadata: Optional[Dict[str, Any]] = None,
    ) -> ProviderResult:
        payload = {"amount": amount, "currency": currency, "type": "credit"}
        if metadata:
            payload["meta"] = metadata
        return await self._post(
            f"/api/program/{self._program_id}/participant/{participant_id}/adjustment",
            payload,
            idempotency_key,
        )

    async def _post(self, path: str, payload: Dict[str, Any], idempotency_key: str) -> ProviderResult:
        headers = {
            "Authorization": f"Bearer {self._api_key}",
            "Idempotency-Key": idempotency_key,
        }
        try:
            async with httpx.AsyncClient(
                base_url=self._base_url,
                timeout=httpx.Timeout(self._timeout_seconds),
                transport=self._transport,
            ) as client:
                response = await client.post(path, json=payload, headers=headers)
        except httpx.TimeoutException as exc:
            raise ProviderError(
                f"Reward provider timed out after {self._timeout_seconds}s"
            ) from exc
        except httpx.HTTPError as exc:
            raise ProviderError(f"Reward provider request failed: {exc}") from exc

        body = self._parse_body(response)

        if response.is_error:
            message = body.get("message") or body.get("error") or f"HTTP {response.status_code}"
            logger.warning(
                "Reward provider rejected %s (%s): %s", path, response.status_code, message
            )
            raise ProviderError(str(message), status_code=response.status_code, response=body)

        if not body.get("id"):
            raise ProviderError(
                "Reward provider response did not include an id",
                status_code=response.status_code,
                response=body,
            )

        return ProviderResult(
            id=str(body["id"]), status=self._parse_status(body.get("status")), raw=body
        )

    @staticmethod
    def _parse_body(response: httpx.Response) -> Dict[str, Any]:
        try:
            body = response.json()
        except ValueError:
            return {"text": response.text}
        return body if isinstance(body, dict) else {"data": body}

    @staticmethod
    def _parse_status(value: Any) -> ProviderStatus:
        try:
            return ProviderStatus(str(value).upper())
        except ValueError:
            return ProviderStatus.pending
