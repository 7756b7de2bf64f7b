from contextlib import asynccontextmanager
from unittest.mock import AsyncMock, MagicMock
from uuid import uuid4

import pytest

from engagement.domain.entities import Membership, MembershipRole, User, Workspace

REPOSITORIES = (
    "users",
    "workspaces",
    "memberships",
    "invites",
    "challenges",
    "activities",
    "enrollments",
    "submissions",
    "points",
    "rewards",
    "webhook_events",
    "activity_events",
)


@asynccontextmanager
async def _savepoint():
    yield


@pytest.fixture
def mock_uow():
    """Mock UnitOfWork; every repository method is an AsyncMock"""
    uow = MagicMock()
    uow.__aenter__ = AsyncMock(return_value=uow)
    uow.__aexit__ = AsyncMock(return_value=False)  # Must return False to not suppress exceptions
    uow.commit = AsyncMock()
    uow.rollback = AsyncMock()
    uow.savepoint = MagicMock(side_effect=lambda: _savepoint())
    for name in REPOSITORIES:
        setattr(uow, name, AsyncMock())
    return uow


@pytest.fixture
def workspace():
    return Workspace(id=uuid4(), slug="acme", name="Acme", reward_provider_enabled=True)


@pytest.fixture
def admin_user():
    return User(id=uuid4(), external_id="ext-admin", email="admin@acme.com")


@pytest.fixture
def participant_user():
    return User(id=uuid4(), external_id="ext-participant", email="member@acme.com")


@pytest.fixture
def make_membership():
    def _make(user, workspace, role=MembershipRole.participant, **kwargs):
        return Membership(
            id=uuid4(), user_id=user.id, workspace_id=workspace.id, role=role, **kwargs
        )

    return _make
