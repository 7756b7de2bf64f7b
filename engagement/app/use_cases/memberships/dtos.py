"""
Membership Use Case DTOs (Data Transfer Objects)
"""

from typing import Optional

from pydantic import BaseModel

from engagement.domain.entities import Membership, MembershipRole


class MembershipResponse(BaseModel):
    """Membership as returned by the registry"""

    id: str
    user_id: str
    workspace_id: str
    workspace_slug: Optional[str] = None
    role: str
    is_primary: bool
    is_owner: bool
    joined_at: str

    @classmethod
    def from_entity(cls, membership: Membership, workspace_slug: Optional[str] = None) -> "MembershipResponse":
        return cls(
            id=str(membership.id),
            user_id=str(membership.user_id),
            workspace_id=str(membership.workspace_id),
            workspace_slug=workspace_slug,
            role=membership.role.value,
            is_primary=membership.is_primary,
            is_owner=membership.is_owner,
            joined_at=membership.joined_at.isoformat(),
        )


class CreateMembershipCommand(BaseModel):
    """Direct add of an existing user to a workspace"""

    role: MembershipRole = MembershipRole.participant
    is_primary: bool = False


class TransferOwnershipResponse(BaseModel):
    """Both sides of an ownership transfer"""

    previous_owner: MembershipResponse
    new_owner: MembershipResponse


class RemoveMembershipResponse(BaseModel):
    """Response for remove membership use case"""

    status: str
    new_primary_workspace_id: Optional[str] = None
