"""
Reward Issuance Use Cases
"""

from .cancel_reward_use_case import CancelRewardUseCase
from .dtos import (
    IssueRewardCommand,
    ReconcileRewardsResponse,
    RewardFilter,
    RewardIssuanceResponse,
    WebhookEventResponse,
    WebhookResultResponse,
)
from .issue_reward_use_case import IssueRewardUseCase
from .list_rewards_use_case import ListRewardsUseCase
from .list_webhook_events_use_case import ListWebhookEventsUseCase
from .process_reward_webhook_use_case import ProcessRewardWebhookUseCase
from .reconcile_rewards_use_case import ReconcileRewardsUseCase
from .retry_reward_use_case import RetryRewardUseCase

__all__ = [
    "CancelRewardUseCase",
    "IssueRewardUseCase",
    "ListRewardsUseCase",
    "ListWebhookEventsUseCase",
    "ProcessRewardWebhookUseCase",
    "ReconcileRewardsUseCase",
    "RetryRewardUseCase",
    "IssueRewardCommand",
    "ReconcileRewardsResponse",
    "RewardFilter",
    "RewardIssuanceResponse",
    "WebhookEventResponse",
    "WebhookResultResponse",
]
