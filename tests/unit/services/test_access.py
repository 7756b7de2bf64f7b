from uuid import uuid4

import pytest

from engagement.app.services.access import ADMIN_ONLY, require_role, resolve_workspace_role
from engagement.domain.entities import MembershipRole, User, Workspace
from engagement.domain.errors import AuthorizationError


def test_membership_row_wins_over_legacy_role(make_membership):
    workspace_id = uuid4()
    user = User(
        id=uuid4(),
        external_id="ext",
        email="a@b.com",
        legacy_role=MembershipRole.admin,
        legacy_workspace_id=workspace_id,
    )
    workspace = Workspace(id=workspace_id, slug="w", name="W")
    membership = make_membership(user, workspace, MembershipRole.participant)

    assert resolve_workspace_role(membership, user, workspace_id) == MembershipRole.participant


def test_legacy_role_used_only_for_matching_workspace():
    workspace_id = uuid4()
    user = User(
        id=uuid4(),
        external_id="ext",
        email="a@b.com",
        legacy_role=MembershipRole.manager,
        legacy_workspace_id=workspace_id,
    )

    assert resolve_workspace_role(None, user, workspace_id) == MembershipRole.manager
    assert resolve_workspace_role(None, user, uuid4()) is None


def test_no_membership_and_no_legacy_role():
    user = User(id=uuid4(), external_id="ext", email="a@b.com")
    assert resolve_workspace_role(None, user, uuid4()) is None
    assert resolve_workspace_role(None, None, uuid4()) is None


@pytest.mark.asyncio
async def test_require_role_rejects_non_member(mock_uow, workspace):
    mock_uow.memberships.get_by_user_and_workspace.return_value = None
    mock_uow.users.get_by_id.return_value = None

    with pytest.raises(AuthorizationError):
        await require_role(mock_uow, workspace, uuid4())


@pytest.mark.asyncio
async def test_require_role_rejects_insufficient_role(
    mock_uow, workspace, participant_user, make_membership
):
    mock_uow.memberships.get_by_user_and_workspace.return_value = make_membership(
        participant_user, workspace, MembershipRole.manager
    )

    with pytest.raises(AuthorizationError) as exc_info:
        await require_role(mock_uow, workspace, participant_user.id, ADMIN_ONLY)
    assert "ADMIN" in exc_info.value.message
