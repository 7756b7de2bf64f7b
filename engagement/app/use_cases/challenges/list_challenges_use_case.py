from typing import List
from uuid import UUID

from engagement.app.services.access import get_active_workspace, require_role
from engagement.app.services.error_boundary import returns_result
from engagement.app.services.unit_of_work import UnitOfWork
from engagement.libs.result import Result, Return

from .dtos import ChallengeResponse


class ListChallengesUseCase:
    """Challenges of a workspace with their activities; any member may list"""

    def __init__(self, uow: UnitOfWork):
        self.uow = uow

    @returns_result
    async def execute(self, actor_user_id: UUID, workspace_slug: str) -> Result[List[ChallengeResponse]]:
        async with self.uow:
            workspace = await get_active_workspace(self.uow, workspace_slug)
            await require_role(self.uow, workspace, actor_user_id)

            challenges = await self.uow.challenges.get_by_workspace_id(workspace.id)
            response = []
            for challenge in challenges:
                activities = await self.uow.activities.get_by_challenge_id(challenge.id)
                response.append(ChallengeResponse.from_entity(challenge, activities))
            return Return.ok(response)
