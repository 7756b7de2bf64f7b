import asyncio
from uuid import uuid4

import pytest
from sqlalchemy.exc import IntegrityError

from engagement.app.services.reward_issuance import RewardIssuanceEngine, idempotency_key
from engagement.app.services.reward_provider import ProviderResult, RewardProvider
from engagement.domain.entities import (
    ActivityEventType,
    ProviderStatus,
    ProviderSyncStatus,
    ProviderWebhookEvent,
    RewardIssuance,
    RewardStatus,
    RewardType,
)
from engagement.domain.errors import ConflictError, ProviderError, ValidationError


class StubProvider(RewardProvider):
    """In-memory provider recording every call"""

    name = "stub"

    def __init__(self, error=None, delay=0.0):
        self.error = error
        self.delay = delay
        self.calls = []

    async def create_transaction(self, participant_id, sku_id, idempotency_key, metadata=None):
        return await self._answer("transaction", participant_id, idempotency_key)

    async def create_adjustment(
        self, participant_id, amount, currency, idempotency_key, metadata=None
    ):
        return await self._answer("adjustment", participant_id, idempotency_key)

    async def _answer(self, kind, participant_id, key):
        self.calls.append((kind, participant_id, key))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return ProviderResult(id=f"{kind}_1", status=ProviderStatus.completed, raw={"id": f"{kind}_1"})


@pytest.fixture
def engine_uow(mock_uow, participant_user):
    mock_uow.users.get_by_id.return_value = participant_user
    mock_uow.rewards.create.side_effect = lambda issuance: issuance
    mock_uow.rewards.update.side_effect = lambda issuance: issuance
    mock_uow.rewards.transition.return_value = True
    mock_uow.webhook_events.create.side_effect = lambda event: event
    return mock_uow


def transitions_to(uow):
    return [call.args[2] for call in uow.rewards.transition.await_args_list]


def recorded_events(uow):
    return [call.args[0].type for call in uow.activity_events.create.await_args_list]


@pytest.mark.asyncio
async def test_points_reward_issued_without_provider(engine_uow, workspace, participant_user):
    engine = RewardIssuanceEngine(engine_uow)

    issuance = await engine.issue(workspace, participant_user.id, RewardType.points, amount=20)

    assert issuance.provider is None
    assert transitions_to(engine_uow) == [RewardStatus.issued]
    assert recorded_events(engine_uow) == [ActivityEventType.reward_issued]
    # PENDING row committed before fulfilment, then the ISSUED move
    assert engine_uow.commit.await_count == 2


@pytest.mark.asyncio
async def test_sku_reward_calls_provider_with_idempotency_key(engine_uow, workspace, participant_user):
    provider = StubProvider()
    participant_user.reward_participant_id = "par_123"
    engine = RewardIssuanceEngine(engine_uow, provider)

    issuance = await engine.issue(workspace, participant_user.id, RewardType.sku, sku_id="SKU-1")

    assert provider.calls == [("transaction", "par_123", idempotency_key(issuance))]
    assert idempotency_key(issuance) == f"engagement-transaction-{issuance.id}"
    values = engine_uow.rewards.transition.await_args.kwargs
    assert engine_uow.rewards.transition.await_args.args[2] == RewardStatus.issued
    assert values["provider_transaction_id"] == "transaction_1"
    assert values["provider_status"] == ProviderStatus.completed


@pytest.mark.asyncio
async def test_provider_disabled_marks_failed(engine_uow, workspace, participant_user):
    workspace.reward_provider_enabled = False
    provider = StubProvider()
    engine = RewardIssuanceEngine(engine_uow, provider)

    await engine.issue(
        workspace, participant_user.id, RewardType.monetary, amount=500, currency="usd"
    )

    assert provider.calls == []
    assert transitions_to(engine_uow) == [RewardStatus.failed]
    assert recorded_events(engine_uow) == [ActivityEventType.reward_failed]


@pytest.mark.asyncio
async def test_provider_timeout_marks_failed(engine_uow, workspace, participant_user):
    engine = RewardIssuanceEngine(engine_uow, StubProvider(delay=1.0), timeout_seconds=0.01)

    await engine.issue(workspace, participant_user.id, RewardType.sku, sku_id="SKU-1")

    values = engine_uow.rewards.transition.await_args.kwargs
    assert transitions_to(engine_uow) == [RewardStatus.failed]
    assert "timed out" in values["error_message"]


@pytest.mark.asyncio
async def test_provider_error_is_classified(engine_uow, workspace, participant_user):
    error = ProviderError("Insufficient balance", status_code=402, response={"error": "funds"})
    engine = RewardIssuanceEngine(engine_uow, StubProvider(error=error))

    await engine.issue(
        workspace, participant_user.id, RewardType.monetary, amount=100, currency="EUR"
    )

    values = engine_uow.rewards.transition.await_args.kwargs
    assert values["error_message"] == "Insufficient balance"
    assert values["external_response"]["failure_category"] == "insufficient_balance"
    event = engine_uow.activity_events.create.await_args.args[0]
    assert event.event_metadata["failure_category"] == "insufficient_balance"


@pytest.mark.asyncio
async def test_invalid_reward_rejected_before_any_write(engine_uow, workspace, participant_user):
    engine = RewardIssuanceEngine(engine_uow, StubProvider())

    with pytest.raises(ValidationError):
        await engine.issue(workspace, participant_user.id, RewardType.sku)

    engine_uow.rewards.create.assert_not_called()


@pytest.mark.asyncio
@pytest.mark.parametrize("status", [RewardStatus.pending, RewardStatus.issued, RewardStatus.cancelled])
async def test_retry_only_from_failed(engine_uow, workspace, participant_user, status):
    engine_uow.rewards.get_in_workspace.return_value = RewardIssuance(
        user_id=participant_user.id,
        workspace_id=workspace.id,
        type=RewardType.sku,
        sku_id="SKU-1",
        status=status,
    )

    with pytest.raises(ConflictError):
        await RewardIssuanceEngine(engine_uow, StubProvider()).retry(workspace, uuid4())

    engine_uow.rewards.transition.assert_not_called()


@pytest.mark.asyncio
async def test_retry_failed_reward_issues_it(engine_uow, workspace, participant_user):
    issuance = RewardIssuance(
        user_id=participant_user.id,
        workspace_id=workspace.id,
        type=RewardType.sku,
        sku_id="SKU-1",
        status=RewardStatus.failed,
        error_message="Insufficient balance",
    )
    engine_uow.rewards.get_in_workspace.return_value = issuance
    provider = StubProvider()

    await RewardIssuanceEngine(engine_uow, provider).retry(workspace, issuance.id)

    assert transitions_to(engine_uow) == [RewardStatus.pending, RewardStatus.issued]
    assert recorded_events(engine_uow) == [
        ActivityEventType.reward_retried,
        ActivityEventType.reward_issued,
    ]
    assert provider.calls[0][2] == idempotency_key(issuance)


@pytest.mark.asyncio
async def test_cancel_terminal_reward_conflicts(engine_uow, workspace, participant_user):
    engine_uow.rewards.get_in_workspace.return_value = RewardIssuance(
        user_id=participant_user.id,
        workspace_id=workspace.id,
        type=RewardType.points,
        amount=10,
        status=RewardStatus.issued,
    )
    engine_uow.rewards.transition.return_value = False

    with pytest.raises(ConflictError):
        await RewardIssuanceEngine(engine_uow).cancel(workspace, uuid4())


def webhook(event_type, data, event_id="evt_1"):
    return {"id": event_id, "type": event_type, "data": data}


@pytest.mark.asyncio
async def test_duplicate_webhook_ignored(engine_uow, workspace):
    engine_uow.webhook_events.get_by_event_id.return_value = ProviderWebhookEvent(
        workspace_id=workspace.id, event_id="evt_1", event_type="transaction.completed", processed=True
    )

    outcome = await RewardIssuanceEngine(engine_uow).apply_webhook(
        workspace, webhook("transaction.completed", {"id": "tx_1"})
    )

    assert outcome == {"status": "duplicate", "event_id": "evt_1"}
    engine_uow.rewards.get_by_provider_reference.assert_not_called()
    engine_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_webhook_stored_concurrently_is_acknowledged_as_duplicate(engine_uow, workspace):
    """Given another delivery of the same event id inserted its row first
    When this delivery's insert hits the unique index
    Then it is acknowledged as a duplicate without touching any issuance
    """
    engine_uow.webhook_events.get_by_event_id.return_value = None
    engine_uow.webhook_events.create.side_effect = IntegrityError(
        "INSERT INTO provider_webhook_events", {}, Exception("UNIQUE constraint failed")
    )

    outcome = await RewardIssuanceEngine(engine_uow).apply_webhook(
        workspace, webhook("transaction.completed", {"id": "tx_1"})
    )

    assert outcome == {"status": "duplicate", "event_id": "evt_1"}
    engine_uow.rollback.assert_awaited_once()
    engine_uow.rewards.get_by_provider_reference.assert_not_called()
    engine_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_unmatched_webhook_stored_unprocessed(engine_uow, workspace):
    engine_uow.webhook_events.get_by_event_id.return_value = None
    engine_uow.rewards.get_by_provider_reference.return_value = None

    outcome = await RewardIssuanceEngine(engine_uow).apply_webhook(
        workspace, webhook("transaction.completed", {"id": "tx_missing"})
    )

    assert outcome["status"] == "unmatched"
    stored = engine_uow.webhook_events.update.await_args.args[0]
    assert stored.processed is False
    assert "tx_missing" in stored.error


@pytest.mark.asyncio
async def test_completed_webhook_issues_pending_reward(engine_uow, workspace, participant_user):
    issuance = RewardIssuance(
        user_id=participant_user.id,
        workspace_id=workspace.id,
        type=RewardType.sku,
        sku_id="SKU-1",
        status=RewardStatus.pending,
        provider_transaction_id="tx_1",
    )
    engine_uow.webhook_events.get_by_event_id.return_value = None
    engine_uow.rewards.get_by_provider_reference.return_value = issuance

    outcome = await RewardIssuanceEngine(engine_uow).apply_webhook(
        workspace, webhook("transaction.completed", {"id": "tx_1", "status": "completed"})
    )

    assert outcome["status"] == "processed"
    assert outcome["reward_issuance_id"] == str(issuance.id)
    call = engine_uow.rewards.transition.await_args
    assert call.args[2] == RewardStatus.issued
    assert call.kwargs["webhook_received"] is True
    assert call.kwargs["external_response"]["webhooks"][0]["type"] == "transaction.completed"


@pytest.mark.asyncio
async def test_failed_webhook_on_issued_reward_is_noted_not_applied(
    engine_uow, workspace, participant_user
):
    """ISSUED is terminal: a contradicting failure is recorded as an inconsistency"""
    issuance = RewardIssuance(
        user_id=participant_user.id,
        workspace_id=workspace.id,
        type=RewardType.monetary,
        amount=100,
        currency="USD",
        status=RewardStatus.issued,
        provider_adjustment_id="adj_1",
    )
    engine_uow.webhook_events.get_by_event_id.return_value = None
    engine_uow.rewards.get_by_provider_reference.return_value = issuance

    await RewardIssuanceEngine(engine_uow).apply_webhook(
        workspace, webhook("adjustment.failed", {"id": "adj_1"})
    )

    engine_uow.rewards.transition.assert_not_called()
    assert issuance.status == RewardStatus.issued
    assert issuance.external_response["inconsistencies"][0]["event"] == "adjustment.failed"


@pytest.mark.asyncio
async def test_participant_webhook_syncs_user(engine_uow, workspace, participant_user):
    engine_uow.webhook_events.get_by_event_id.return_value = None
    engine_uow.users.get_by_reward_participant_id.return_value = None

    outcome = await RewardIssuanceEngine(engine_uow).apply_webhook(
        workspace,
        webhook("participant.created", {"id": "par_9", "unique_id": str(participant_user.id)}),
    )

    assert outcome["status"] == "processed"
    assert participant_user.reward_participant_id == "par_9"
    assert participant_user.reward_sync_status == ProviderSyncStatus.synced


@pytest.mark.asyncio
async def test_unknown_webhook_type_rejected(engine_uow, workspace):
    with pytest.raises(ValidationError):
        await RewardIssuanceEngine(engine_uow).apply_webhook(
            workspace, webhook("invoice.paid", {"id": "x"})
        )
