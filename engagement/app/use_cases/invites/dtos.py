"""
Invite Use Case DTOs (Data Transfer Objects)
"""

from typing import Optional
from uuid import UUID

from pydantic import BaseModel, EmailStr, Field

from engagement.domain.entities import InviteCode, MembershipRole

from ..workspaces.dtos import WorkspaceResponse


class CreateInviteCommand(BaseModel):
    """Input for invite creation"""

    role: MembershipRole = MembershipRole.participant
    challenge_id: Optional[UUID] = None
    expires_in_hours: Optional[int] = Field(None, gt=0)
    max_uses: int = Field(1, ge=1)
    target_email: Optional[EmailStr] = None


class InviteResponse(BaseModel):
    """Invite as seen by workspace admins"""

    id: str
    code: str
    workspace_id: str
    challenge_id: Optional[str] = None
    role: str
    max_uses: int
    used_count: int
    target_email: Optional[str] = None
    expires_at: str
    created_at: str

    @classmethod
    def from_entity(cls, invite: InviteCode) -> "InviteResponse":
        return cls(
            id=str(invite.id),
            code=invite.code,
            workspace_id=str(invite.workspace_id),
            challenge_id=str(invite.challenge_id) if invite.challenge_id else None,
            role=invite.role.value,
            max_uses=invite.max_uses,
            used_count=invite.used_count,
            target_email=invite.target_email,
            expires_at=invite.expires_at.isoformat(),
            created_at=invite.created_at.isoformat(),
        )


class InviteDetailsResponse(BaseModel):
    """Public view of an invite code, shown before redemption"""

    code: str
    workspace_slug: str
    workspace_name: str
    challenge_title: Optional[str] = None
    role: str
    expires_at: str
    is_expired: bool
    is_exhausted: bool
    remaining_uses: int
    email_restricted: bool


class ChallengeInfo(BaseModel):
    """Challenge joined through an invite"""

    id: str
    title: str


class EnrollmentInfo(BaseModel):
    """Enrollment created or promoted by an invite"""

    id: str
    status: str


class RedeemInviteResponse(BaseModel):
    """Response for redeem invite use case"""

    workspace: WorkspaceResponse
    challenge: Optional[ChallengeInfo] = None
    enrollment: Optional[EnrollmentInfo] = None
    role: str
    is_existing_member: bool
