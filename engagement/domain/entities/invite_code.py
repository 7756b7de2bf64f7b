"""
InviteCode Entity

Time-limited, use-limited codes granting workspace membership.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from engagement.domain.base import utc_now

from .enums import MembershipRole


class InviteCode(SQLModel, table=True):
    """
    InviteCode entity - bounded-use token granting membership.

    Business Rules:
    - Created by a workspace ADMIN only
    - Terminal once used_count == max_uses or expires_at has passed
    - used_count only changes through a conditional increment
    - Optional challenge_id enrolls the redeemer into that challenge
    - Optional target_email binds the code to one address
    """

    __tablename__ = "invite_codes"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    code: str = Field(unique=True, index=True, max_length=64)

    workspace_id: UUID = Field(foreign_key="workspaces.id", nullable=False, index=True)
    challenge_id: Optional[UUID] = Field(default=None, foreign_key="challenges.id")

    role: MembershipRole = Field(default=MembershipRole.participant)
    max_uses: int = Field(default=1)
    used_count: int = Field(default=0)
    target_email: Optional[str] = Field(default=None, max_length=255)

    created_by: UUID = Field(foreign_key="users.id", nullable=False)

    expires_at: datetime = Field(sa_column=Column(DateTime, nullable=False))
    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (Index("idx_invite_expires_at", "expires_at"),)

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at

    def is_exhausted(self) -> bool:
        return self.used_count >= self.max_uses


class InviteRedemption(SQLModel, table=True):
    """
    InviteRedemption entity - one row per (invite, user).

    A user redeeming the same code again does not consume another use.
    """

    __tablename__ = "invite_redemptions"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    invite_id: UUID = Field(foreign_key="invite_codes.id", nullable=False)
    user_id: UUID = Field(foreign_key="users.id", nullable=False)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_invite_redemption_invite_user", "invite_id", "user_id", unique=True),
    )
