"""
Engagement Domain Enums

All enumeration types used across domain entities.
"""

from enum import Enum


class MembershipRole(str, Enum):
    """User role within a workspace"""

    admin = "ADMIN"
    manager = "MANAGER"
    participant = "PARTICIPANT"


class EnrollmentStatus(str, Enum):
    """Participation status in a challenge"""

    invited = "INVITED"
    enrolled = "ENROLLED"
    withdrawn = "WITHDRAWN"


class SubmissionStatus(str, Enum):
    """Activity submission review status"""

    draft = "DRAFT"
    pending = "PENDING"
    approved = "APPROVED"
    rejected = "REJECTED"


class RewardType(str, Enum):
    """Kind of reward a challenge pays out"""

    points = "points"
    sku = "sku"
    monetary = "monetary"


class RewardStatus(str, Enum):
    """Reward issuance lifecycle"""

    pending = "PENDING"
    issued = "ISSUED"
    failed = "FAILED"
    cancelled = "CANCELLED"


class ProviderStatus(str, Enum):
    """Status as last reported by the reward provider"""

    pending = "PENDING"
    processing = "PROCESSING"
    completed = "COMPLETED"
    failed = "FAILED"


class ProviderSyncStatus(str, Enum):
    """Participant sync state with the reward provider"""

    not_synced = "NOT_SYNCED"
    synced = "SYNCED"


class ActivityEventType(str, Enum):
    """Activity event log types"""

    workspace_created = "WORKSPACE_CREATED"
    workspace_updated = "WORKSPACE_UPDATED"
    membership_created = "MEMBERSHIP_CREATED"
    membership_removed = "MEMBERSHIP_REMOVED"
    primary_workspace_changed = "PRIMARY_WORKSPACE_CHANGED"
    ownership_transferred = "OWNERSHIP_TRANSFERRED"
    rbac_role_changed = "RBAC_ROLE_CHANGED"
    invite_sent = "INVITE_SENT"
    invite_redeemed = "INVITE_REDEEMED"
    invite_deleted = "INVITE_DELETED"
    challenge_created = "CHALLENGE_CREATED"
    activity_created = "ACTIVITY_CREATED"
    enrolled = "ENROLLED"
    unenrolled = "UNENROLLED"
    enrollment_updated = "ENROLLMENT_UPDATED"
    submission_created = "SUBMISSION_CREATED"
    submission_approved = "SUBMISSION_APPROVED"
    submission_rejected = "SUBMISSION_REJECTED"
    points_awarded = "POINTS_AWARDED"
    budget_updated = "BUDGET_UPDATED"
    reward_issued = "REWARD_ISSUED"
    reward_failed = "REWARD_FAILED"
    reward_retried = "REWARD_RETRIED"
    reward_cancelled = "REWARD_CANCELLED"
