"""
Points Entities

Balances, budgets and the append-only award ledger.
"""

from datetime import datetime
from typing import Optional
from uuid import UUID, uuid4

from sqlmodel import Column, DateTime, Field, Index, SQLModel

from engagement.domain.base import utc_now


class PointsBalance(SQLModel, table=True):
    """
    PointsBalance entity - per (user, workspace) running totals.

    Business Rules:
    - Upserted with zero defaults
    - Only incremented, always with an arithmetic UPDATE
    """

    __tablename__ = "points_balances"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    user_id: UUID = Field(foreign_key="users.id", nullable=False)
    workspace_id: UUID = Field(foreign_key="workspaces.id", nullable=False, index=True)

    total_points: int = Field(default=0)
    available_points: int = Field(default=0)

    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_points_balance_user_workspace", "user_id", "workspace_id", unique=True),
    )


class WorkspacePointsBudget(SQLModel, table=True):
    """Ceiling on points awardable in a workspace (used when a challenge has none)"""

    __tablename__ = "workspace_points_budgets"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    workspace_id: UUID = Field(foreign_key="workspaces.id", unique=True, nullable=False)

    total_budget: int = Field(default=0)
    allocated: int = Field(default=0)
    updated_by: Optional[UUID] = Field(default=None, foreign_key="users.id")

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))


class ChallengePointsBudget(SQLModel, table=True):
    """Ceiling on points awardable in one challenge"""

    __tablename__ = "challenge_points_budgets"

    id: UUID = Field(default_factory=uuid4, primary_key=True)
    challenge_id: UUID = Field(foreign_key="challenges.id", unique=True, nullable=False)
    workspace_id: UUID = Field(foreign_key="workspaces.id", nullable=False, index=True)

    total_budget: int = Field(default=0)
    allocated: int = Field(default=0)
    updated_by: Optional[UUID] = Field(default=None, foreign_key="users.id")

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))
    updated_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))


class PointsLedgerEntry(SQLModel, table=True):
    """Immutable record of one points award"""

    __tablename__ = "points_ledger"

    id: UUID = Field(default_factory=uuid4, primary_key=True)

    workspace_id: UUID = Field(foreign_key="workspaces.id", nullable=False)
    challenge_id: Optional[UUID] = Field(default=None, foreign_key="challenges.id")
    to_user_id: UUID = Field(foreign_key="users.id", nullable=False)
    actor_user_id: Optional[UUID] = Field(default=None, foreign_key="users.id")
    submission_id: Optional[UUID] = Field(default=None)

    amount: int
    reason: Optional[str] = Field(default=None, max_length=100)

    created_at: datetime = Field(default_factory=utc_now, sa_column=Column(DateTime))

    __table_args__ = (
        Index("idx_points_ledger_workspace_created", "workspace_id", "created_at"),
        Index("idx_points_ledger_challenge_created", "challenge_id", "created_at"),
    )
