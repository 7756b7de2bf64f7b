from abc import ABC, abstractmethod

from engagement.app.repositories.activity_event_repository import IActivityEventRepository
from engagement.app.repositories.challenge_repository import (
    IActivityRepository,
    IChallengeRepository,
)
from engagement.app.repositories.enrollment_repository import IEnrollmentRepository
from engagement.app.repositories.invite_repository import IInviteRepository
from engagement.app.repositories.membership_repository import IMembershipRepository
from engagement.app.repositories.points_repository import IPointsRepository
from engagement.app.repositories.reward_repository import IRewardRepository
from engagement.app.repositories.submission_repository import ISubmissionRepository
from engagement.app.repositories.user_repository import IUserRepository
from engagement.app.repositories.webhook_event_repository import IWebhookEventRepository
from engagement.app.repositories.workspace_repository import IWorkspaceRepository


class UnitOfWork(ABC):
    """Abstract UnitOfWork - defines repository access and transaction management"""

    # Repository properties (initialized in __aenter__)
    users: IUserRepository
    workspaces: IWorkspaceRepository
    memberships: IMembershipRepository
    invites: IInviteRepository
    challenges: IChallengeRepository
    activities: IActivityRepository
    enrollments: IEnrollmentRepository
    submissions: ISubmissionRepository
    points: IPointsRepository
    rewards: IRewardRepository
    webhook_events: IWebhookEventRepository
    activity_events: IActivityEventRepository

    @abstractmethod
    async def __aenter__(self):
        pass

    @abstractmethod
    async def __aexit__(self, *args):
        pass

    @abstractmethod
    async def commit(self):
        pass

    @abstractmethod
    async def rollback(self):
        pass

    @abstractmethod
    def savepoint(self):
        """Async context manager scoping a nested transaction"""
        pass
