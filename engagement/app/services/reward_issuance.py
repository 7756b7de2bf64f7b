"""
Reward Issuance Engine

State machine for reward delivery:

    PENDING -> ISSUED        provider success, points, or a *.completed webhook
    PENDING -> FAILED        provider error, timeout, or a *.failed webhook
    FAILED  -> PENDING       explicit retry only
    PENDING/FAILED -> CANCELLED

ISSUED and CANCELLED are terminal. Provider calls are only made after the
PENDING row has been committed, never while a transaction is open.
"""

import asyncio
import logging
from typing import Any, Dict, Optional
from uuid import UUID

from sqlalchemy.exc import IntegrityError

from engagement.app.services.activity_log import record_activity_event
from engagement.app.services.reward_provider import (
    REMEDIATION_HINTS,
    ProviderResult,
    RewardProvider,
    classify_provider_error,
)
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.base import utc_now
from engagement.domain.entities import (
    ActivityEventType,
    ProviderStatus,
    ProviderSyncStatus,
    ProviderWebhookEvent,
    RewardIssuance,
    RewardStatus,
    RewardType,
    Workspace,
)
from engagement.domain.errors import ConflictError, NotFoundError, ProviderError, ValidationError

logger = logging.getLogger(__name__)

DEFAULT_PROVIDER_TIMEOUT_SECONDS = 10.0

ISSUANCE_EVENT_CATEGORIES = ("transaction", "adjustment")
ISSUANCE_EVENT_ACTIONS = ("created", "updated", "completed", "failed")
PARTICIPANT_EVENT_ACTIONS = ("created", "updated", "deleted")


def idempotency_key(issuance: RewardIssuance) -> str:
    kind = "transaction" if issuance.type == RewardType.sku else "adjustment"
    return f"engagement-{kind}-{issuance.id}"


def validate_reward(
    reward_type: RewardType,
    amount: Optional[int],
    currency: Optional[str],
    sku_id: Optional[str],
) -> None:
    if reward_type == RewardType.points:
        if amount is None or amount <= 0:
            raise ValidationError("Points rewards require a positive amount")
    elif reward_type == RewardType.monetary:
        if amount is None or amount <= 0:
            raise ValidationError("Monetary rewards require a positive amount")
        if not currency:
            raise ValidationError("Monetary rewards require a currency")
    elif reward_type == RewardType.sku:
        if not sku_id:
            raise ValidationError("SKU rewards require a sku_id")


class RewardIssuanceEngine:
    """
    Issues, retries, cancels and reconciles reward issuances.

    Each public method commits its own transactions through the unit of work;
    callers should not hold uncommitted work when invoking it.
    """

    def __init__(
        self,
        uow: UnitOfWork,
        provider: Optional[RewardProvider] = None,
        timeout_seconds: float = DEFAULT_PROVIDER_TIMEOUT_SECONDS,
    ):
        self.uow = uow
        self.provider = provider
        self.timeout_seconds = timeout_seconds

    async def issue(
        self,
        workspace: Workspace,
        user_id: UUID,
        reward_type: RewardType,
        *,
        amount: Optional[int] = None,
        currency: Optional[str] = None,
        sku_id: Optional[str] = None,
        challenge_id: Optional[UUID] = None,
        submission_id: Optional[UUID] = None,
        actor_user_id: Optional[UUID] = None,
    ) -> RewardIssuance:
        """Persist a PENDING issuance, commit, then fulfil it"""
        validate_reward(reward_type, amount, currency, sku_id)

        user = await self.uow.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User", user_id)

        issuance = RewardIssuance(
            user_id=user_id,
            workspace_id=workspace.id,
            challenge_id=challenge_id,
            submission_id=submission_id,
            type=reward_type,
            amount=amount,
            currency=currency.upper() if currency else None,
            sku_id=sku_id,
            status=RewardStatus.pending,
            provider=None if reward_type == RewardType.points else self._provider_name(),
        )
        issuance = await self.uow.rewards.create(issuance)

        if submission_id is not None:
            await self.uow.submissions.set_reward_issuance(submission_id, issuance.id)

        participant_id = user.reward_participant_id or str(user.id)
        await self.uow.commit()

        return await self._fulfil(workspace, issuance, participant_id, actor_user_id)

    async def retry(
        self, workspace: Workspace, issuance_id: UUID, actor_user_id: Optional[UUID] = None
    ) -> RewardIssuance:
        """Re-attempt a FAILED issuance. Any other state is a CONFLICT."""
        issuance = await self.uow.rewards.get_in_workspace(issuance_id, workspace.id)
        if issuance is None:
            raise NotFoundError("Reward issuance", issuance_id)

        if issuance.status != RewardStatus.failed:
            raise ConflictError(
                f"Only FAILED rewards can be retried (current status: {issuance.status.value})"
            )

        moved = await self.uow.rewards.transition(
            issuance.id, [RewardStatus.failed], RewardStatus.pending, error_message=None
        )
        if not moved:
            raise ConflictError("Reward issuance changed state while retrying")

        user = await self.uow.users.get_by_id(issuance.user_id)
        participant_id = (user.reward_participant_id if user else None) or str(issuance.user_id)

        await record_activity_event(
            self.uow,
            workspace.id,
            ActivityEventType.reward_retried,
            challenge_id=issuance.challenge_id,
            user_id=issuance.user_id,
            actor_user_id=actor_user_id,
            metadata={"reward_issuance_id": str(issuance.id), "type": issuance.type.value},
        )
        await self.uow.commit()

        return await self._fulfil(workspace, issuance, participant_id, actor_user_id)

    async def cancel(
        self, workspace: Workspace, issuance_id: UUID, actor_user_id: Optional[UUID] = None
    ) -> RewardIssuance:
        """Cancel a PENDING or FAILED issuance"""
        issuance = await self.uow.rewards.get_in_workspace(issuance_id, workspace.id)
        if issuance is None:
            raise NotFoundError("Reward issuance", issuance_id)

        moved = await self.uow.rewards.transition(
            issuance.id, [RewardStatus.pending, RewardStatus.failed], RewardStatus.cancelled
        )
        if not moved:
            raise ConflictError(
                f"Reward in status {issuance.status.value} cannot be cancelled"
            )

        await record_activity_event(
            self.uow,
            workspace.id,
            ActivityEventType.reward_cancelled,
            challenge_id=issuance.challenge_id,
            user_id=issuance.user_id,
            actor_user_id=actor_user_id,
            metadata={"reward_issuance_id": str(issuance.id)},
        )
        await self.uow.commit()
        return issuance

    async def apply_webhook(self, workspace: Workspace, event: Dict[str, Any]) -> Dict[str, Any]:
        """
        Apply one provider webhook delivery.

        Deliveries are deduplicated on (workspace, event id). A delivery whose
        target cannot be found is stored unprocessed so a redelivery retries it.
        """
        event_id = event.get("id")
        event_type = event.get("type")
        data = event.get("data") or {}
        if not event_id or not event_type or not isinstance(data, dict):
            raise ValidationError("Webhook payload requires id, type and data")

        category, _, action = str(event_type).partition(".")
        if not self._is_supported(category, action):
            raise ValidationError(f"Unsupported webhook event type: {event_type}")

        record = await self.uow.webhook_events.get_by_event_id(workspace.id, str(event_id))
        if record is not None and record.processed:
            logger.info("Duplicate webhook %s for workspace %s ignored", event_id, workspace.id)
            return {"status": "duplicate", "event_id": str(event_id)}

        if record is None:
            record = await self._store_delivery(workspace, str(event_id), str(event_type), event)
            if record is None:
                return {"status": "duplicate", "event_id": str(event_id)}
        else:
            record.error = None

        if category in ISSUANCE_EVENT_CATEGORIES:
            issuance = await self._apply_issuance_event(workspace, category, action, data)
            if issuance is None:
                record.error = f"No reward issuance matches provider reference {data.get('id')}"
            else:
                record.reward_issuance_id = issuance.id
        else:
            matched = await self._apply_participant_event(action, data)
            if not matched:
                record.error = f"No user matches participant {data.get('id')}"

        if record.error is None:
            record.processed = True
            record.processed_at = utc_now()
        await self.uow.webhook_events.update(record)
        await self.uow.commit()

        if not record.processed:
            logger.warning("Webhook %s stored unprocessed: %s", event_id, record.error)
            return {"status": "unmatched", "event_id": str(event_id), "error": record.error}
        return {
            "status": "processed",
            "event_id": str(event_id),
            "reward_issuance_id": str(record.reward_issuance_id) if record.reward_issuance_id else None,
        }

    async def _store_delivery(
        self, workspace: Workspace, event_id: str, event_type: str, event: Dict[str, Any]
    ) -> Optional[ProviderWebhookEvent]:
        """
        Insert the delivery row as the first write of the transaction.

        A concurrent delivery of the same event id holds the row until it
        commits; this insert then fails on the unique index and the delivery
        is a duplicate. Returns None in that case.
        """
        workspace_id = workspace.id
        try:
            return await self.uow.webhook_events.create(
                ProviderWebhookEvent(
                    workspace_id=workspace_id,
                    event_id=event_id,
                    event_type=event_type,
                    payload=event,
                )
            )
        except IntegrityError:
            # Only reads precede the insert
            await self.uow.rollback()
            logger.info(
                "Webhook %s for workspace %s was stored by a concurrent delivery", event_id, workspace_id
            )
            return None

    async def _fulfil(
        self,
        workspace: Workspace,
        issuance: RewardIssuance,
        participant_id: str,
        actor_user_id: Optional[UUID],
    ) -> RewardIssuance:
        if issuance.type == RewardType.points:
            await self.uow.rewards.transition(
                issuance.id, [RewardStatus.pending], RewardStatus.issued, issued_at=utc_now()
            )
            await self._record(workspace, issuance, ActivityEventType.reward_issued, actor_user_id)
            await self.uow.commit()
            return issuance

        if self.provider is None or not workspace.reward_provider_enabled:
            return await self._mark_failed(
                workspace,
                issuance,
                ProviderError("Reward provider is not enabled for this workspace"),
                actor_user_id,
            )

        try:
            result = await asyncio.wait_for(
                self._call_provider(issuance, participant_id), timeout=self.timeout_seconds
            )
        except asyncio.TimeoutError:
            error = ProviderError(f"Reward provider timed out after {self.timeout_seconds}s")
            return await self._mark_failed(workspace, issuance, error, actor_user_id)
        except ProviderError as exc:
            return await self._mark_failed(workspace, issuance, exc, actor_user_id)

        return await self._mark_issued(workspace, issuance, result, actor_user_id)

    async def _call_provider(self, issuance: RewardIssuance, participant_id: str) -> ProviderResult:
        metadata = {"reward_issuance_id": str(issuance.id)}
        if issuance.type == RewardType.sku:
            return await self.provider.create_transaction(
                participant_id, issuance.sku_id, idempotency_key(issuance), metadata
            )
        return await self.provider.create_adjustment(
            participant_id, issuance.amount, issuance.currency, idempotency_key(issuance), metadata
        )

    async def _mark_issued(
        self,
        workspace: Workspace,
        issuance: RewardIssuance,
        result: ProviderResult,
        actor_user_id: Optional[UUID],
    ) -> RewardIssuance:
        response = dict(issuance.external_response or {})
        response["provider"] = result.raw

        values = {
            "provider_status": result.status,
            "external_response": response,
            "error_message": None,
            "issued_at": utc_now(),
        }
        if issuance.type == RewardType.sku:
            values["provider_transaction_id"] = result.id
        else:
            values["provider_adjustment_id"] = result.id

        moved = await self.uow.rewards.transition(
            issuance.id, [RewardStatus.pending], RewardStatus.issued, **values
        )
        if not moved:
            logger.warning(
                "Reward issuance %s left PENDING before the provider answered", issuance.id
            )
        else:
            await self._record(workspace, issuance, ActivityEventType.reward_issued, actor_user_id)
        await self.uow.commit()
        return issuance

    async def _mark_failed(
        self,
        workspace: Workspace,
        issuance: RewardIssuance,
        error: ProviderError,
        actor_user_id: Optional[UUID],
    ) -> RewardIssuance:
        category = classify_provider_error(error)
        response = dict(issuance.external_response or {})
        if error.response:
            response["provider"] = error.response
        response["failure_category"] = category.value

        logger.warning(
            "Reward issuance %s failed (%s): %s", issuance.id, category.value, error.message
        )
        moved = await self.uow.rewards.transition(
            issuance.id,
            [RewardStatus.pending],
            RewardStatus.failed,
            error_message=error.message,
            provider_status=ProviderStatus.failed,
            external_response=response,
        )
        if moved:
            await self._record(
                workspace,
                issuance,
                ActivityEventType.reward_failed,
                actor_user_id,
                {
                    "error": error.message,
                    "failure_category": category.value,
                    "remediation": REMEDIATION_HINTS[category],
                },
            )
        await self.uow.commit()
        return issuance

    async def _apply_issuance_event(
        self, workspace: Workspace, category: str, action: str, data: Dict[str, Any]
    ) -> Optional[RewardIssuance]:
        reference = data.get("id")
        if not reference:
            return None
        issuance = await self.uow.rewards.get_by_provider_reference(workspace.id, str(reference))
        if issuance is None:
            return None

        response = dict(issuance.external_response or {})
        response["webhooks"] = list(response.get("webhooks", [])) + [
            {
                "type": f"{category}.{action}",
                "status": data.get("status"),
                "received_at": utc_now().isoformat(),
            }
        ]

        values: Dict[str, Any] = {"webhook_received": True}
        target: Optional[RewardStatus] = None
        event_type: Optional[ActivityEventType] = None
        extra: Dict[str, Any] = {"source": "webhook"}

        if action in ("created", "updated"):
            if issuance.status == RewardStatus.pending:
                values["provider_status"] = self._provider_status(data.get("status"))
        elif action == "completed":
            if issuance.status == RewardStatus.pending:
                target, event_type = RewardStatus.issued, ActivityEventType.reward_issued
                values["provider_status"] = ProviderStatus.completed
                values["issued_at"] = issuance.issued_at or utc_now()
            elif issuance.status == RewardStatus.issued:
                values["provider_status"] = ProviderStatus.completed
            else:
                self._note_inconsistency(response, issuance, category, action)
        elif action == "failed":
            if issuance.status == RewardStatus.pending:
                message = str(data.get("error") or data.get("message") or "Provider reported failure")
                target, event_type = RewardStatus.failed, ActivityEventType.reward_failed
                values["provider_status"] = ProviderStatus.failed
                values["error_message"] = message
                extra["error"] = message
            elif issuance.status == RewardStatus.issued:
                self._note_inconsistency(response, issuance, category, action)

        values["external_response"] = response

        if target is not None:
            moved = await self.uow.rewards.transition(
                issuance.id, [RewardStatus.pending], target, **values
            )
            if moved:
                await self._record(workspace, issuance, event_type, None, extra)
                return issuance
            logger.warning(
                "Reward issuance %s left PENDING before webhook %s.%s applied",
                issuance.id,
                category,
                action,
            )
            values = {
                "webhook_received": True,
                "external_response": response,
            }

        for key, value in values.items():
            setattr(issuance, key, value)
        return await self.uow.rewards.update(issuance)

    async def _apply_participant_event(self, action: str, data: Dict[str, Any]) -> bool:
        participant_id = data.get("id")
        if not participant_id:
            return False

        user = await self.uow.users.get_by_reward_participant_id(str(participant_id))
        if user is None and data.get("unique_id"):
            try:
                user = await self.uow.users.get_by_id(UUID(str(data["unique_id"])))
            except ValueError:
                user = None
        if user is None:
            return False

        if action == "deleted":
            user.reward_participant_id = None
            user.reward_sync_status = ProviderSyncStatus.not_synced
        else:
            user.reward_participant_id = str(participant_id)
            user.reward_sync_status = ProviderSyncStatus.synced
        user.reward_last_sync_at = utc_now()
        await self.uow.users.update(user)
        return True

    async def _record(
        self,
        workspace: Workspace,
        issuance: RewardIssuance,
        event_type: ActivityEventType,
        actor_user_id: Optional[UUID],
        extra: Optional[Dict[str, Any]] = None,
    ) -> None:
        metadata = {
            "reward_issuance_id": str(issuance.id),
            "type": issuance.type.value,
            "amount": issuance.amount,
            "sku_id": issuance.sku_id,
        }
        if issuance.submission_id is not None:
            metadata["submission_id"] = str(issuance.submission_id)
        if extra:
            metadata.update(extra)
        await record_activity_event(
            self.uow,
            workspace.id,
            event_type,
            challenge_id=issuance.challenge_id,
            user_id=issuance.user_id,
            actor_user_id=actor_user_id,
            metadata=metadata,
        )

    @staticmethod
    def _note_inconsistency(
        response: Dict[str, Any], issuance: RewardIssuance, category: str, action: str
    ) -> None:
        logger.warning(
            "Webhook %s.%s contradicts %s issuance %s",
            category,
            action,
            issuance.status.value,
            issuance.id,
        )
        response["inconsistencies"] = list(response.get("inconsistencies", [])) + [
            {
                "event": f"{category}.{action}",
                "local_status": issuance.status.value,
                "recorded_at": utc_now().isoformat(),
            }
        ]

    @staticmethod
    def _provider_status(value: Any) -> ProviderStatus:
        try:
            return ProviderStatus(str(value).upper())
        except ValueError:
            return ProviderStatus.processing

    @staticmethod
    def _is_supported(category: str, action: str) -> bool:
        if category in ISSUANCE_EVENT_CATEGORIES:
            return action in ISSUANCE_EVENT_ACTIONS
        if category == "participant":
            return action in PARTICIPANT_EVENT_ACTIONS
        return False

    def _provider_name(self) -> Optional[str]:
        return self.provider.name if self.provider is not None else None
