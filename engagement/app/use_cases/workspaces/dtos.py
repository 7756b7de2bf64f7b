"""
Workspace Use Case DTOs (Data Transfer Objects)
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel

from engagement.domain.entities import Workspace


class WorkspaceResponse(BaseModel):
    """Public view of a workspace"""

    id: str
    slug: str
    name: str
    tenant_id: str
    active: bool
    published: bool
    reward_provider_enabled: bool
    created_at: str

    @classmethod
    def from_entity(cls, workspace: Workspace) -> "WorkspaceResponse":
        return cls(
            id=str(workspace.id),
            slug=workspace.slug,
            name=workspace.name,
            tenant_id=workspace.tenant_id,
            active=workspace.active,
            published=workspace.published,
            reward_provider_enabled=workspace.reward_provider_enabled,
            created_at=workspace.created_at.isoformat(),
        )


class CreateWorkspaceCommand(BaseModel):
    """Input for workspace creation"""

    slug: str
    name: str
    tenant_id: str = "default"
    owner_user_id: Optional[UUID] = None
    reward_provider_enabled: bool = False
    reward_webhook_secret: Optional[str] = None


class UpdateWorkspaceCommand(BaseModel):
    """Partial workspace update; None leaves a field unchanged"""

    name: Optional[str] = None
    active: Optional[bool] = None
    published: Optional[bool] = None
    reward_provider_enabled: Optional[bool] = None
    reward_webhook_secret: Optional[str] = None
