"""
User Use Case DTOs (Data Transfer Objects)
"""

from typing import List, Optional
from uuid import UUID

from pydantic import BaseModel

from engagement.domain.entities import Membership, User, Workspace


class CurrentUser(BaseModel):
    """The authenticated caller, resolved from a verified identity"""

    id: UUID
    external_id: str
    email: str


class UserResponse(BaseModel):
    """User details in response"""

    id: str
    external_id: str
    email: str
    is_pending: bool
    reward_participant_id: Optional[str] = None
    reward_sync_status: str

    @classmethod
    def from_entity(cls, user: User) -> "UserResponse":
        return cls(
            id=str(user.id),
            external_id=user.external_id,
            email=user.email,
            is_pending=user.is_pending,
            reward_participant_id=user.reward_participant_id,
            reward_sync_status=user.reward_sync_status.value,
        )


class WorkspaceContext(BaseModel):
    """One workspace the user belongs to"""

    id: str
    slug: str
    name: str
    role: str
    is_primary: bool
    is_owner: bool

    @classmethod
    def from_entities(cls, membership: Membership, workspace: Workspace) -> "WorkspaceContext":
        return cls(
            id=str(workspace.id),
            slug=workspace.slug,
            name=workspace.name,
            role=membership.role.value,
            is_primary=membership.is_primary,
            is_owner=membership.is_owner,
        )


class UserContextResponse(BaseModel):
    """GET /me payload"""

    user: UserResponse
    workspaces: List[WorkspaceContext]
