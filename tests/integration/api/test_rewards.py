import json

import httpx
import pytest
from httpx import AsyncClient

from engagement.adapter.services.reward_provider import HttpRewardProvider
from engagement.app.services.webhook_signature import sign_webhook_payload
from engagement.depends import get_reward_provider

WEBHOOK_SECRET = "whsec_test_secret"


class ProviderStub:
    """Scripted responses for the provider's HTTP API"""

    def __init__(self, *responses):
        self.responses = list(responses)
        self.requests = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        status_code, body = self.responses.pop(0)
        return httpx.Response(status_code, json=body)


@pytest.fixture
def provider_stub(app):
    stub = ProviderStub()
    app.dependency_overrides[get_reward_provider] = lambda: HttpRewardProvider(
        base_url="https://rewards.test",
        api_key="test-key",
        program_id="prog_1",
        transport=httpx.MockTransport(stub),
    )
    return stub


async def issue(client, acme, **payload):
    participant_id, _ = acme["participant"]
    _, admin_headers = acme["admin"]
    return await client.post(
        "/workspaces/acme/rewards",
        json={"user_id": participant_id, **payload},
        headers=admin_headers,
    )


async def deliver_webhook(client, workspace_id, event, secret=WEBHOOK_SECRET):
    body = json.dumps(event).encode()
    return await client.post(
        f"/webhooks/rewards?workspace_id={workspace_id}",
        content=body,
        headers={
            "Content-Type": "application/json",
            "X-Reward-Signature": sign_webhook_payload(secret, body),
        },
    )


@pytest.mark.asyncio
async def test_sku_reward_issued(client: AsyncClient, acme, provider_stub):
    provider_stub.responses.append((201, {"id": "tx_100", "status": "processing"}))

    response = await issue(client, acme, type="sku", sku_id="GIFT-25")

    assert response.status_code == 201
    data = response.json()["data"]
    assert data["status"] == "ISSUED"
    assert data["provider_transaction_id"] == "tx_100"
    assert data["provider_status"] == "PROCESSING"

    request = provider_stub.requests[0]
    assert request.url.path.endswith("/participant/" + acme["participant"][0] + "/transaction")
    assert request.headers["Idempotency-Key"] == f"engagement-transaction-{data['id']}"


@pytest.mark.asyncio
async def test_insufficient_balance_then_retry(client: AsyncClient, acme, provider_stub):
    """Given the provider rejects a monetary reward for lack of funds
    When an admin retries after funding
    Then the same issuance is ISSUED with the same idempotency key
    """
    _, admin_headers = acme["admin"]
    provider_stub.responses.extend(
        [
            (402, {"message": "Insufficient balance in program account"}),
            (201, {"id": "adj_7", "status": "completed"}),
        ]
    )

    response = await issue(client, acme, type="monetary", amount=2500, currency="usd")
    failed = response.json()["data"]
    assert failed["status"] == "FAILED"
    assert failed["currency"] == "USD"
    assert failed["failure_category"] == "insufficient_balance"
    assert failed["remediation"]

    response = await client.get("/workspaces/acme/rewards/reconcile", headers=admin_headers)
    assert response.json()["data"]["failed"] == 1

    response = await client.post(f"/workspaces/acme/rewards/{failed['id']}/retry", headers=admin_headers)
    assert response.status_code == 200
    retried = response.json()["data"]
    assert retried["id"] == failed["id"]
    assert retried["status"] == "ISSUED"
    assert retried["error_message"] is None
    assert retried["provider_adjustment_id"] == "adj_7"

    keys = {r.headers["Idempotency-Key"] for r in provider_stub.requests}
    assert keys == {f"engagement-adjustment-{failed['id']}"}

    # ISSUED is terminal
    response = await client.post(f"/workspaces/acme/rewards/{failed['id']}/retry", headers=admin_headers)
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_reward_without_provider_fails(client: AsyncClient, acme):
    response = await issue(client, acme, type="sku", sku_id="GIFT-25")

    data = response.json()["data"]
    assert data["status"] == "FAILED"
    assert "not enabled" in data["error_message"]


@pytest.mark.asyncio
async def test_cancel_failed_reward(client: AsyncClient, acme):
    _, admin_headers = acme["admin"]
    failed = (await issue(client, acme, type="sku", sku_id="GIFT-25")).json()["data"]

    response = await client.post(f"/workspaces/acme/rewards/{failed['id']}/cancel", headers=admin_headers)
    assert response.json()["data"]["status"] == "CANCELLED"

    response = await client.post(f"/workspaces/acme/rewards/{failed['id']}/retry", headers=admin_headers)
    assert response.status_code == 409


@pytest.mark.asyncio
async def test_participants_only_list_their_rewards(client: AsyncClient, acme):
    manager_id, _ = acme["manager"]
    _, admin_headers = acme["admin"]
    _, participant_headers = acme["participant"]
    await issue(client, acme, type="points", amount=10)
    await client.post(
        "/workspaces/acme/rewards",
        json={"user_id": manager_id, "type": "points", "amount": 10},
        headers=admin_headers,
    )

    response = await client.get(
        f"/workspaces/acme/rewards?user_id={manager_id}", headers=participant_headers
    )
    rewards = response.json()["data"]
    assert len(rewards) == 1
    assert rewards[0]["user_id"] == acme["participant"][0]

    response = await client.get("/workspaces/acme/rewards?type=points", headers=admin_headers)
    assert len(response.json()["data"]) == 2


@pytest.mark.asyncio
async def test_webhook_completes_and_replay_is_ignored(client: AsyncClient, acme, provider_stub):
    _, admin_headers = acme["admin"]
    workspace_id = acme["workspace"]["id"]
    provider_stub.responses.append((201, {"id": "tx_200", "status": "pending"}))
    reward = (await issue(client, acme, type="sku", sku_id="GIFT-25")).json()["data"]

    event = {
        "id": "evt_1",
        "type": "transaction.completed",
        "data": {"id": "tx_200", "status": "completed"},
    }
    response = await deliver_webhook(client, workspace_id, event)
    assert response.status_code == 200
    assert response.json()["data"] == {
        "status": "processed",
        "event_id": "evt_1",
        "reward_issuance_id": reward["id"],
        "error": None,
    }

    replay = await deliver_webhook(client, workspace_id, event)
    assert replay.json()["data"]["status"] == "duplicate"

    response = await client.get(
        f"/workspaces/acme/rewards/{reward['id']}/webhooks", headers=admin_headers
    )
    events = response.json()["data"]
    assert len(events) == 1
    assert events[0]["processed"] is True

    response = await client.get("/workspaces/acme/rewards", headers=admin_headers)
    stored = response.json()["data"][0]
    assert stored["webhook_received"] is True
    assert stored["provider_status"] == "COMPLETED"


@pytest.mark.asyncio
async def test_failure_webhook_never_reverts_issued(client: AsyncClient, acme, provider_stub):
    workspace_id = acme["workspace"]["id"]
    _, admin_headers = acme["admin"]
    provider_stub.responses.append((201, {"id": "tx_300", "status": "completed"}))
    reward = (await issue(client, acme, type="sku", sku_id="GIFT-25")).json()["data"]

    event = {"id": "evt_2", "type": "transaction.failed", "data": {"id": "tx_300"}}
    response = await deliver_webhook(client, workspace_id, event)
    assert response.status_code == 200

    response = await client.get("/workspaces/acme/rewards", headers=admin_headers)
    stored = response.json()["data"][0]
    assert stored["id"] == reward["id"]
    assert stored["status"] == "ISSUED"
    assert stored["external_response"]["inconsistencies"][0]["event"] == "transaction.failed"


@pytest.mark.asyncio
async def test_webhook_signature_checked(client: AsyncClient, acme):
    workspace_id = acme["workspace"]["id"]
    event = {"id": "evt_3", "type": "transaction.completed", "data": {"id": "tx_x"}}

    response = await deliver_webhook(client, workspace_id, event, secret="forged")

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_unmatched_webhook_stored_for_redelivery(client: AsyncClient, acme):
    workspace_id = acme["workspace"]["id"]
    event = {"id": "evt_4", "type": "adjustment.completed", "data": {"id": "adj_unknown"}}

    first = await deliver_webhook(client, workspace_id, event)
    second = await deliver_webhook(client, workspace_id, event)

    assert first.json()["data"]["status"] == "unmatched"
    assert second.json()["data"]["status"] == "unmatched"


@pytest.mark.asyncio
async def test_malformed_webhook(client: AsyncClient, acme):
    workspace_id = acme["workspace"]["id"]
    body = b"not json"

    response = await client.post(
        f"/webhooks/rewards?workspace_id={workspace_id}",
        content=body,
        headers={"X-Reward-Signature": sign_webhook_payload(WEBHOOK_SECRET, body)},
    )

    assert response.status_code == 422
