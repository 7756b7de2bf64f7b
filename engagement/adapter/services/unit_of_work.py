from sqlmodel.ext.asyncio.session import AsyncSession

from engagement.adapter.repositories.activity_event_repository import ActivityEventRepository
from engagement.adapter.repositories.challenge_repository import (
    ActivityRepository,
    ChallengeRepository,
)
from engagement.adapter.repositories.enrollment_repository import EnrollmentRepository
from engagement.adapter.repositories.invite_repository import InviteRepository
from engagement.adapter.repositories.membership_repository import MembershipRepository
from engagement.adapter.repositories.points_repository import PointsRepository
from engagement.adapter.repositories.reward_repository import RewardRepository
from engagement.adapter.repositories.submission_repository import SubmissionRepository
from engagement.adapter.repositories.user_repository import UserRepository
from engagement.adapter.repositories.webhook_event_repository import WebhookEventRepository
from engagement.adapter.repositories.workspace_repository import WorkspaceRepository
from engagement.app.services.unit_of_work import UnitOfWork


class SqlAlchemyUnitOfWork(UnitOfWork):
    """SQLAlchemy implementation of UnitOfWork pattern"""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def __aenter__(self):
        # Initialize all repositories with the session
        self.users = UserRepository(self.session)
        self.workspaces = WorkspaceRepository(self.session)
        self.memberships = MembershipRepository(self.session)
        self.invites = InviteRepository(self.session)
        self.challenges = ChallengeRepository(self.session)
        self.activities = ActivityRepository(self.session)
        self.enrollments = EnrollmentRepository(self.session)
        self.submissions = SubmissionRepository(self.session)
        self.points = PointsRepository(self.session)
        self.rewards = RewardRepository(self.session)
        self.webhook_events = WebhookEventRepository(self.session)
        self.activity_events = ActivityEventRepository(self.session)
        return self

    async def __aexit__(self, *args):
        await self.rollback()

    async def commit(self):
        await self.session.commit()

    async def rollback(self):
        await self.session.rollback()

    def savepoint(self):
        return self.session.begin_nested()
