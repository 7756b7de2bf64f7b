from uuid import uuid4

import pytest

from engagement.app.use_cases.submissions import ReviewSubmissionCommand, ReviewSubmissionUseCase
from engagement.domain.entities import (
    Activity,
    ActivityEventType,
    ActivitySubmission,
    Challenge,
    ChallengePointsBudget,
    MembershipRole,
    PointsBalance,
    RewardStatus,
    RewardType,
    SubmissionStatus,
)


@pytest.fixture
def review_setup(mock_uow, workspace, admin_user, participant_user, make_membership):
    """PENDING submission for a 15-point activity in a points challenge"""
    challenge = Challenge(workspace_id=workspace.id, title="Steps", reward_type=RewardType.points)
    activity = Activity(challenge_id=challenge.id, name="Walk 10k", points_value=15)
    submission = ActivitySubmission(
        activity_id=activity.id,
        user_id=participant_user.id,
        enrollment_id=uuid4(),
        status=SubmissionStatus.pending,
        text_content="Done",
    )
    rewards = {}

    mock_uow.workspaces.get_by_slug.return_value = workspace
    mock_uow.memberships.get_by_user_and_workspace.return_value = make_membership(
        admin_user, workspace, MembershipRole.admin
    )
    mock_uow.submissions.get_in_workspace.return_value = submission
    mock_uow.submissions.get_by_id.return_value = submission
    mock_uow.submissions.transition.return_value = True
    mock_uow.activities.get_by_id.return_value = activity
    mock_uow.challenges.get_by_id.return_value = challenge
    mock_uow.points.get_challenge_budget.return_value = None
    mock_uow.points.get_workspace_budget.return_value = None
    mock_uow.points.get_balance.return_value = PointsBalance(
        user_id=participant_user.id, workspace_id=workspace.id, total_points=15, available_points=15
    )
    mock_uow.users.get_by_id.return_value = participant_user
    mock_uow.rewards.create.side_effect = lambda issuance: rewards.setdefault(issuance.id, issuance)
    mock_uow.rewards.get_by_id.side_effect = lambda issuance_id: rewards[issuance_id]
    mock_uow.rewards.transition.return_value = True
    return submission, challenge


@pytest.mark.asyncio
async def test_approve_awards_activity_points(mock_uow, review_setup, admin_user):
    """Given a PENDING submission, When approved, Then points, ledger and issuance follow"""
    submission, challenge = review_setup

    # Act
    result = await ReviewSubmissionUseCase(mock_uow).execute(
        admin_user.id,
        "acme",
        submission.id,
        ReviewSubmissionCommand(status=SubmissionStatus.approved, review_notes="Nice"),
    )

    # Assert
    assert result.is_ok()
    assert result.value.points_awarded == 15
    assert result.value.balance == 15
    assert [r.type for r in result.value.rewards] == ["points"]

    transition = mock_uow.submissions.transition.await_args
    assert transition.args[1:] == (SubmissionStatus.pending, SubmissionStatus.approved)
    assert transition.kwargs["points_awarded"] == 15
    entry = mock_uow.points.add_ledger_entry.await_args.args[0]
    assert entry.challenge_id == challenge.id
    assert entry.reason == "submission_approved"

    event_types = [c.args[0].type for c in mock_uow.activity_events.create.await_args_list]
    assert event_types == [ActivityEventType.submission_approved, ActivityEventType.reward_issued]
    assert mock_uow.rewards.transition.await_args.args[2] == RewardStatus.issued


@pytest.mark.asyncio
async def test_points_override(mock_uow, review_setup, admin_user):
    submission, _ = review_setup

    result = await ReviewSubmissionUseCase(mock_uow).execute(
        admin_user.id,
        "acme",
        submission.id,
        ReviewSubmissionCommand(status=SubmissionStatus.approved, points_awarded=40),
    )

    assert result.value.points_awarded == 40
    mock_uow.points.increment_balance.assert_awaited_once()
    assert mock_uow.points.increment_balance.await_args.args[2] == 40


@pytest.mark.asyncio
async def test_reject_awards_nothing(mock_uow, review_setup, admin_user):
    submission, _ = review_setup

    result = await ReviewSubmissionUseCase(mock_uow).execute(
        admin_user.id,
        "acme",
        submission.id,
        ReviewSubmissionCommand(status=SubmissionStatus.rejected, review_notes="Blurry photo"),
    )

    assert result.is_ok()
    assert result.value.rewards == []
    mock_uow.points.add_ledger_entry.assert_not_called()
    mock_uow.rewards.create.assert_not_called()


@pytest.mark.asyncio
async def test_budget_exceeded_aborts_review(mock_uow, review_setup, workspace, admin_user):
    submission, challenge = review_setup
    mock_uow.points.get_challenge_budget.return_value = ChallengePointsBudget(
        challenge_id=challenge.id, workspace_id=workspace.id, total_budget=10, allocated=5
    )
    mock_uow.points.charge_challenge_budget.return_value = False

    result = await ReviewSubmissionUseCase(mock_uow).execute(
        admin_user.id,
        "acme",
        submission.id,
        ReviewSubmissionCommand(status=SubmissionStatus.approved),
    )

    assert result.error.code == "BUDGET_EXCEEDED"
    mock_uow.commit.assert_not_called()
    mock_uow.rewards.create.assert_not_called()


@pytest.mark.asyncio
async def test_already_reviewed(mock_uow, review_setup, admin_user):
    submission, _ = review_setup
    submission.status = SubmissionStatus.approved

    result = await ReviewSubmissionUseCase(mock_uow).execute(
        admin_user.id,
        "acme",
        submission.id,
        ReviewSubmissionCommand(status=SubmissionStatus.rejected),
    )

    assert result.error.code == "CONFLICT"
    mock_uow.submissions.transition.assert_not_called()


@pytest.mark.asyncio
async def test_concurrent_review_loses_guard(mock_uow, review_setup, admin_user):
    """Status guard matched no row: a concurrent reviewer won"""
    submission, _ = review_setup
    mock_uow.submissions.transition.return_value = False

    result = await ReviewSubmissionUseCase(mock_uow).execute(
        admin_user.id,
        "acme",
        submission.id,
        ReviewSubmissionCommand(status=SubmissionStatus.approved),
    )

    assert result.error.code == "CONFLICT"
    mock_uow.points.add_ledger_entry.assert_not_called()


@pytest.mark.asyncio
async def test_review_status_must_be_terminal(mock_uow, admin_user):
    result = await ReviewSubmissionUseCase(mock_uow).execute(
        admin_user.id,
        "acme",
        uuid4(),
        ReviewSubmissionCommand(status=SubmissionStatus.pending),
    )

    assert result.error.code == "VALIDATION_ERROR"
