import pytest

from engagement.app.use_cases.memberships import ChangeRoleUseCase, TransferOwnershipUseCase
from engagement.domain.entities import ActivityEventType, MembershipRole


@pytest.fixture
def members(mock_uow, workspace, admin_user, participant_user, make_membership):
    """Workspace with an owning admin and a participant"""
    rows = {
        admin_user.id: make_membership(
            admin_user, workspace, MembershipRole.admin, is_owner=True, is_primary=True
        ),
        participant_user.id: make_membership(participant_user, workspace),
    }
    mock_uow.workspaces.get_by_slug.return_value = workspace
    mock_uow.memberships.get_by_user_and_workspace.side_effect = (
        lambda user_id, workspace_id: rows.get(user_id)
    )
    mock_uow.memberships.update.side_effect = lambda membership: membership
    mock_uow.memberships.set_owner.return_value = 1
    return rows


@pytest.mark.asyncio
async def test_transfer_requires_admin_target(mock_uow, members, admin_user, participant_user):
    result = await TransferOwnershipUseCase(mock_uow).execute(
        admin_user.id, "acme", participant_user.id
    )

    assert result.error.code == "VALIDATION_ERROR"
    mock_uow.memberships.set_owner.assert_not_called()


@pytest.mark.asyncio
async def test_transfer_by_non_owner_forbidden(mock_uow, members, admin_user, participant_user):
    members[participant_user.id].role = MembershipRole.admin

    result = await TransferOwnershipUseCase(mock_uow).execute(
        participant_user.id, "acme", admin_user.id
    )

    assert result.error.code == "FORBIDDEN"


@pytest.mark.asyncio
async def test_transfer_to_admin(mock_uow, members, admin_user, participant_user):
    """Given an owner and another ADMIN, When transferring, Then both flags move atomically"""
    members[participant_user.id].role = MembershipRole.admin

    result = await TransferOwnershipUseCase(mock_uow).execute(
        admin_user.id, "acme", participant_user.id
    )

    assert result.is_ok()
    mock_uow.memberships.set_owner.assert_awaited_once_with(
        members[admin_user.id].workspace_id, admin_user.id, participant_user.id
    )
    event = mock_uow.activity_events.create.await_args.args[0]
    assert event.type == ActivityEventType.ownership_transferred
    mock_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_transfer_lost_to_concurrent_change(mock_uow, members, admin_user, participant_user):
    members[participant_user.id].role = MembershipRole.admin
    mock_uow.memberships.set_owner.return_value = 0

    result = await TransferOwnershipUseCase(mock_uow).execute(
        admin_user.id, "acme", participant_user.id
    )

    assert result.error.code == "CONFLICT"
    mock_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_change_role(mock_uow, members, admin_user, participant_user):
    result = await ChangeRoleUseCase(mock_uow).execute(
        admin_user.id, "acme", participant_user.id, "manager"
    )

    assert result.is_ok()
    assert result.value.role == "MANAGER"
    event = mock_uow.activity_events.create.await_args.args[0]
    assert event.type == ActivityEventType.rbac_role_changed
    assert event.event_metadata == {"old_role": "PARTICIPANT", "new_role": "MANAGER"}


@pytest.mark.asyncio
async def test_owner_must_stay_admin(mock_uow, members, admin_user):
    result = await ChangeRoleUseCase(mock_uow).execute(
        admin_user.id, "acme", admin_user.id, "PARTICIPANT"
    )

    assert result.error.code == "CONFLICT"
    mock_uow.memberships.update.assert_not_called()


@pytest.mark.asyncio
async def test_change_role_rejects_unknown_role(mock_uow, members, admin_user, participant_user):
    result = await ChangeRoleUseCase(mock_uow).execute(
        admin_user.id, "acme", participant_user.id, "OWNER"
    )

    assert result.error.code == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_participant_cannot_change_roles(mock_uow, members, admin_user, participant_user):
    result = await ChangeRoleUseCase(mock_uow).execute(
        participant_user.id, "acme", admin_user.id, "MANAGER"
    )

    assert result.error.code == "FORBIDDEN"
