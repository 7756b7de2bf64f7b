from datetime import timedelta
from uuid import uuid4

import pytest

from engagement.app.use_cases.invites import RedeemInviteUseCase
from engagement.domain.base import utc_now
from engagement.domain.entities import (
    ActivityEventType,
    Challenge,
    Enrollment,
    EnrollmentStatus,
    InviteCode,
    InviteRedemption,
    MembershipRole,
)


@pytest.fixture
def invite(workspace, admin_user):
    return InviteCode(
        code="JOINACME01",
        workspace_id=workspace.id,
        role=MembershipRole.participant,
        max_uses=1,
        created_by=admin_user.id,
        expires_at=utc_now() + timedelta(days=7),
    )


@pytest.fixture
def redeem_uow(mock_uow, workspace, participant_user, invite):
    mock_uow.invites.get_by_code.return_value = invite
    mock_uow.workspaces.get_by_id.return_value = workspace
    mock_uow.users.get_by_id.return_value = participant_user
    mock_uow.invites.get_redemption.return_value = None
    mock_uow.invites.try_consume.return_value = True
    mock_uow.memberships.get_by_user_and_workspace.return_value = None
    mock_uow.memberships.get_primary.return_value = None
    mock_uow.memberships.create.side_effect = lambda membership: membership
    return mock_uow


@pytest.mark.asyncio
async def test_redeem_creates_membership(redeem_uow, participant_user):
    """Redeeming a fresh code consumes one use and joins with the invite's role"""
    # Act
    result = await RedeemInviteUseCase(redeem_uow).execute("JOINACME01", participant_user.id)

    # Assert
    assert result.is_ok()
    assert result.value.role == "PARTICIPANT"
    assert result.value.is_existing_member is False
    redeem_uow.invites.try_consume.assert_awaited_once()
    redeem_uow.invites.create_redemption.assert_awaited_once()
    membership = redeem_uow.memberships.create.await_args.args[0]
    assert membership.is_primary is True
    redeem_uow.commit.assert_awaited_once()


@pytest.mark.asyncio
async def test_expired_invite(redeem_uow, invite, participant_user):
    invite.expires_at = utc_now() - timedelta(minutes=1)

    result = await RedeemInviteUseCase(redeem_uow).execute("JOINACME01", participant_user.id)

    assert result.is_err()
    assert result.error.code == "INVITE_EXPIRED"
    redeem_uow.invites.try_consume.assert_not_called()


@pytest.mark.asyncio
async def test_exhausted_invite(redeem_uow, invite, participant_user):
    invite.used_count = 1

    result = await RedeemInviteUseCase(redeem_uow).execute("JOINACME01", participant_user.id)

    assert result.error.code == "INVITE_EXHAUSTED"
    redeem_uow.memberships.create.assert_not_called()


@pytest.mark.asyncio
async def test_lost_race_for_last_use(redeem_uow, participant_user):
    """Conditional consume matched no row: another redeemer took the last use"""
    redeem_uow.invites.try_consume.return_value = False

    result = await RedeemInviteUseCase(redeem_uow).execute("JOINACME01", participant_user.id)

    assert result.error.code == "INVITE_EXHAUSTED"
    redeem_uow.invites.create_redemption.assert_not_called()
    redeem_uow.commit.assert_not_called()


@pytest.mark.asyncio
async def test_target_email_mismatch(redeem_uow, invite, participant_user):
    invite.target_email = "someone.else@acme.com"

    result = await RedeemInviteUseCase(redeem_uow).execute("JOINACME01", participant_user.id)

    assert result.error.code == "FORBIDDEN"


@pytest.mark.asyncio
async def test_repeat_redemption_consumes_nothing(
    redeem_uow, invite, workspace, participant_user, make_membership
):
    invite.used_count = 1
    redeem_uow.invites.get_redemption.return_value = InviteRedemption(
        invite_id=invite.id, user_id=participant_user.id
    )
    redeem_uow.memberships.get_by_user_and_workspace.return_value = make_membership(
        participant_user, workspace, MembershipRole.manager
    )

    result = await RedeemInviteUseCase(redeem_uow).execute("JOINACME01", participant_user.id)

    assert result.is_ok()
    assert result.value.is_existing_member is True
    assert result.value.role == "MANAGER"
    redeem_uow.invites.try_consume.assert_not_called()
    redeem_uow.memberships.create.assert_not_called()


@pytest.mark.asyncio
async def test_challenge_invite_promotes_withdrawn_enrollment(
    redeem_uow, invite, workspace, participant_user
):
    challenge = Challenge(workspace_id=workspace.id, title="Step Challenge")
    invite.challenge_id = challenge.id
    enrollment = Enrollment(
        user_id=participant_user.id, challenge_id=challenge.id, status=EnrollmentStatus.withdrawn
    )
    redeem_uow.challenges.get_in_workspace.return_value = challenge
    redeem_uow.enrollments.get_by_user_and_challenge.return_value = enrollment
    redeem_uow.enrollments.update.side_effect = lambda e: e

    result = await RedeemInviteUseCase(redeem_uow).execute("JOINACME01", participant_user.id)

    assert result.value.enrollment.status == "ENROLLED"
    assert result.value.challenge.title == "Step Challenge"
    event_types = [c.args[0].type for c in redeem_uow.activity_events.create.await_args_list]
    assert event_types == [ActivityEventType.invite_redeemed, ActivityEventType.enrolled]


@pytest.mark.asyncio
async def test_unknown_code(redeem_uow):
    redeem_uow.invites.get_by_code.return_value = None

    result = await RedeemInviteUseCase(redeem_uow).execute("NOPE", uuid4())

    assert result.error.code == "NOT_FOUND"
