"""
Engagement Domain Entities

All domain entities organized by model.
Each entity in its own file for better maintainability.
"""

# Export all enums
from .enums import (
    ActivityEventType,
    EnrollmentStatus,
    MembershipRole,
    ProviderStatus,
    ProviderSyncStatus,
    RewardStatus,
    RewardType,
    SubmissionStatus,
)

# Export all entities
from .workspace import Workspace
from .user import User
from .membership import Membership
from .challenge import Activity, Challenge
from .invite_code import InviteCode, InviteRedemption
from .enrollment import Enrollment
from .activity_submission import ActivitySubmission
from .points import (
    ChallengePointsBudget,
    PointsBalance,
    PointsLedgerEntry,
    WorkspacePointsBudget,
)
from .reward_issuance import RewardIssuance
from .provider_webhook_event import ProviderWebhookEvent
from .activity_event import ActivityEvent

__all__ = [
    # Enums
    "ActivityEventType",
    "EnrollmentStatus",
    "MembershipRole",
    "ProviderStatus",
    "ProviderSyncStatus",
    "RewardStatus",
    "RewardType",
    "SubmissionStatus",
    # Entities
    "Workspace",
    "User",
    "Membership",
    "Challenge",
    "Activity",
    "InviteCode",
    "InviteRedemption",
    "Enrollment",
    "ActivitySubmission",
    "PointsBalance",
    "WorkspacePointsBudget",
    "ChallengePointsBudget",
    "PointsLedgerEntry",
    "RewardIssuance",
    "ProviderWebhookEvent",
    "ActivityEvent",
]
