"""
Membership Entity

Links User to Workspace with a role.
"""

from datetime import datetime
from uuid import UUID, uuid4

from sqlalchemy import text
from sqlmodel import Column, DateTime, Field, Index, SQLModel

from engagement.domain.base import utc_now

from .enums import MembershipRole


class Membership(SQLModel, table=True):
    """
    Membership entity - links User to Workspace with a role.

    Business Rules:
    - (user_id, workspace_id) must be unique
    - At most one is_primary membership per user
    - At most one is_owner membership per workspace
    - The owner membership cannot be removed without a transfer
    """

    __tablename__ = "memberships"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False, index=True)
    workspace_id: UUID = Field(foreign_key="workspaces.id", nullable=False, index=True)

    role: MembershipRole = Field(nullable=False)
    is_primary: bool = Field(default=False)
    is_owner: bool = Field(default=False)

    joined_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_membership_user_workspace", "user_id", "workspace_id", unique=True),
        Index(
            "uq_membership_primary_per_user",
            "user_id",
            unique=True,
            sqlite_where=text("is_primary = 1"),
            postgresql_where=text("is_primary"),
        ),
        Index(
            "uq_membership_owner_per_workspace",
            "workspace_id",
            unique=True,
            sqlite_where=text("is_owner = 1"),
            postgresql_where=text("is_owner"),
        ),
    )
