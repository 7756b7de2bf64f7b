"""
User Entity

Represents a person, identified by an already-verified external identity.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, SQLModel

from engagement.domain.base import utc_now

from .enums import MembershipRole, ProviderSyncStatus


class User(SQLModel, table=True):
    """
    User entity - a person who can belong to multiple workspaces.

    Business Rules:
    - external_id is the opaque identity handed over by the identity provider
    - legacy_role/legacy_workspace_id are compatibility fields only; the
      membership table always wins (see resolve_workspace_role)
    - is_pending is cleared when the user redeems an invite
    """

    __tablename__ = "users"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    external_id: str = Field(unique=True, index=True, max_length=255)
    email: str = Field(index=True, max_length=255)

    is_pending: bool = Field(default=False)

    # Pre-membership single-workspace fields
    legacy_role: Optional[MembershipRole] = Field(default=None)
    legacy_workspace_id: Optional[UUID] = Field(default=None, foreign_key="workspaces.id")

    reward_participant_id: Optional[str] = Field(default=None, index=True, max_length=255)
    reward_sync_status: ProviderSyncStatus = Field(default=ProviderSyncStatus.not_synced)
    reward_last_sync_at: Optional[datetime] = Field(default=None, sa_column=Column(DateTime))

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
