"""
Races resolved by the store: each test runs use cases on independent
sessions at once, the way concurrent requests would.
"""

import asyncio
import json
from uuid import UUID

import pytest
from sqlmodel import select

from engagement.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from engagement.app.services.webhook_signature import sign_webhook_payload
from engagement.app.use_cases.invites import RedeemInviteUseCase
from engagement.app.use_cases.points import AwardPointsCommand, AwardPointsUseCase
from engagement.app.use_cases.rewards import ProcessRewardWebhookUseCase
from engagement.app.use_cases.submissions import ReviewSubmissionCommand, ReviewSubmissionUseCase
from engagement.domain.entities import (
    InviteCode,
    Membership,
    PointsBalance,
    PointsLedgerEntry,
    ProviderWebhookEvent,
    SubmissionStatus,
)


@pytest.mark.asyncio
async def test_last_invite_use_goes_to_one_redeemer(
    client, acme, make_user, session_factory
):
    _, admin_headers = acme["admin"]
    response = await client.post("/workspaces/acme/invites", json={"max_uses": 1}, headers=admin_headers)
    code = response.json()["data"]["code"]
    first_id, _ = await make_user("idp|racer-1", "racer1@acme.com")
    second_id, _ = await make_user("idp|racer-2", "racer2@acme.com")

    async def redeem(user_id):
        async with session_factory() as session:
            return await RedeemInviteUseCase(SqlAlchemyUnitOfWork(session)).execute(
                code, UUID(user_id)
            )

    results = await asyncio.gather(redeem(first_id), redeem(second_id))

    assert sorted(r.is_ok() for r in results) == [False, True]
    loser = next(r for r in results if r.is_err())
    assert loser.error.code == "INVITE_EXHAUSTED"

    async with session_factory() as session:
        invite = (await session.exec(select(InviteCode).where(InviteCode.code == code))).one()
        assert invite.used_count == 1
        joined = (
            await session.exec(
                select(Membership).where(
                    Membership.user_id.in_([UUID(first_id), UUID(second_id)])
                )
            )
        ).all()
        assert len(joined) == 1


@pytest.mark.asyncio
async def test_concurrent_reviews_award_once(client, acme, steps_challenge, session_factory):
    _, participant_headers = acme["participant"]
    admin_id, _ = acme["admin"]
    manager_id, _ = acme["manager"]
    response = await client.post(
        f"/workspaces/acme/activities/{steps_challenge['activity']['id']}/submissions",
        json={"text_content": "Done"},
        headers=participant_headers,
    )
    submission_id = UUID(response.json()["data"]["id"])

    async def review(reviewer_id):
        async with session_factory() as session:
            return await ReviewSubmissionUseCase(SqlAlchemyUnitOfWork(session)).execute(
                UUID(reviewer_id),
                "acme",
                submission_id,
                ReviewSubmissionCommand(status=SubmissionStatus.approved),
            )

    results = await asyncio.gather(review(admin_id), review(manager_id))

    assert sorted(r.is_ok() for r in results) == [False, True]
    loser = next(r for r in results if r.is_err())
    assert loser.error.code == "CONFLICT"

    async with session_factory() as session:
        entries = (await session.exec(select(PointsLedgerEntry))).all()
        assert [e.amount for e in entries] == [15]


@pytest.mark.asyncio
async def test_concurrent_awards_lose_no_points(client, acme, session_factory):
    """Given a member holding 10 points
    When four awards of 10 run at once
    Then every award lands and the balance is 50
    """
    admin_id, admin_headers = acme["admin"]
    participant_id, _ = acme["participant"]
    response = await client.post(
        "/workspaces/acme/points/award",
        json={"user_id": participant_id, "amount": 10},
        headers=admin_headers,
    )
    assert response.status_code == 200

    async def award():
        async with session_factory() as session:
            return await AwardPointsUseCase(SqlAlchemyUnitOfWork(session)).execute(
                UUID(admin_id),
                "acme",
                AwardPointsCommand(user_id=UUID(participant_id), amount=10),
            )

    results = await asyncio.gather(*(award() for _ in range(4)))

    assert all(r.is_ok() for r in results)
    async with session_factory() as session:
        balance = (
            await session.exec(
                select(PointsBalance).where(PointsBalance.user_id == UUID(participant_id))
            )
        ).one()
        assert balance.total_points == 50
        assert balance.available_points == 50
        entries = (await session.exec(select(PointsLedgerEntry))).all()
        assert len(entries) == 5


@pytest.mark.asyncio
async def test_simultaneous_webhook_redelivery_acknowledged_once(client, acme, session_factory):
    """Given the provider delivers the same event twice at the same moment
    When both deliveries are handled concurrently
    Then one applies it and the other is acknowledged as a duplicate
    """
    participant_id, _ = acme["participant"]
    workspace_id = UUID(acme["workspace"]["id"])
    body = json.dumps(
        {
            "id": "evt-1",
            "type": "participant.created",
            "timestamp": "2026-01-01T00:00:00Z",
            "data": {"id": "par_1", "unique_id": participant_id},
        }
    ).encode()
    signature = sign_webhook_payload("whsec_test_secret", body)

    async def deliver():
        async with session_factory() as session:
            return await ProcessRewardWebhookUseCase(SqlAlchemyUnitOfWork(session)).execute(
                workspace_id, body, signature
            )

    results = await asyncio.gather(deliver(), deliver())

    assert all(r.is_ok() for r in results)
    assert sorted(r.value.status for r in results) == ["duplicate", "processed"]
    async with session_factory() as session:
        stored = (
            await session.exec(
                select(ProviderWebhookEvent).where(ProviderWebhookEvent.event_id == "evt-1")
            )
        ).all()
        assert len(stored) == 1
        assert stored[0].processed is True
