"""
Leaderboard Use Cases

Ranking: total points desc, then distinct approved activities desc, then
user id asc.
"""

from uuid import UUID

from engagement.app.services.access import get_active_workspace, require_role
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.points_ledger import rank_leaderboard
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.domain.entities import EnrollmentStatus
from engagement.domain.errors import NotFoundError
from engagement.libs.result import Result, Return

from .dtos import LeaderboardEntry, LeaderboardResponse

DEFAULT_LEADERBOARD_LIMIT = 10


class GetWorkspaceLeaderboardUseCase:
    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self, actor_user_id: UUID, workspace_slug: str, limit: int = DEFAULT_LEADERBOARD_LIMIT
    ) -> Result[LeaderboardResponse]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id)

            balances = await self.uow.points.list_balances(workspace.id)
            totals = {b.user_id: b.total_points for b in balances}
            approved = await self.uow.submissions.count_approved_activities(
                workspace.id, list(totals.keys())
            )

            entries = rank_leaderboard(totals, approved, limit)
            return Return.ok(LeaderboardResponse(entries=[LeaderboardEntry(**e) for e in entries]))


class GetChallengeLeaderboardUseCase:
    """Ranks ENROLLED participants by points earned from the challenge's approved submissions"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(
        self,
        actor_user_id: UUID,
        workspace_slug: str,
        challenge_id: UUID,
        limit: int = DEFAULT_LEADERBOARD_LIMIT,
    ) -> Result[LeaderboardResponse]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id)

            challenge = await self.uow.challenges.get_in_workspace(challenge_id, workspace.id)
            if challenge is None:
                raise NotFoundError("Challenge", challenge_id)

            enrollments = await self.uow.enrollments.get_by_challenge_id(
                challenge.id, EnrollmentStatus.enrolled
            )
            user_ids = [e.user_id for e in enrollments]

            points = await self.uow.submissions.sum_approved_points(challenge.id, user_ids)
            totals = {user_id: points.get(user_id, 0) for user_id in user_ids}
            approved = await self.uow.submissions.count_approved_activities(
                workspace.id, user_ids, challenge.id
            )

            entries = rank_leaderboard(totals, approved, limit)
            return Return.ok(
                LeaderboardResponse(
                    challenge_id=str(challenge.id),
                    entries=[LeaderboardEntry(**e) for e in entries],
                )
            )
