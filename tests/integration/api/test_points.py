from uuid import UUID

import pytest
from httpx import AsyncClient
from sqlmodel import select

from engagement.domain.entities import ActivitySubmission, SubmissionStatus


async def approve_new_submission(client, acme, activity_id):
    _, participant_headers = acme["participant"]
    _, admin_headers = acme["admin"]
    response = await client.post(
        f"/workspaces/acme/activities/{activity_id}/submissions",
        json={"link_url": "https://example.com/proof"},
        headers=participant_headers,
    )
    submission_id = response.json()["data"]["id"]
    response = await client.post(
        f"/workspaces/acme/submissions/{submission_id}/review",
        json={"status": "APPROVED"},
        headers=admin_headers,
    )
    return submission_id, response


@pytest.mark.asyncio
async def test_manual_award_and_balance(client: AsyncClient, acme):
    participant_id, participant_headers = acme["participant"]
    _, admin_headers = acme["admin"]
    _, manager_headers = acme["manager"]

    response = await client.post(
        "/workspaces/acme/points/award",
        json={"user_id": participant_id, "amount": 30, "reason": "kudos"},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["total_points"] == 30

    response = await client.get(
        f"/workspaces/acme/points/balance?user_id={participant_id}", headers=manager_headers
    )
    assert response.json()["data"]["total_points"] == 30

    # Participants only see their own balance
    admin_id, _ = acme["admin"]
    response = await client.get(
        f"/workspaces/acme/points/balance?user_id={admin_id}", headers=participant_headers
    )
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_repeated_awards_accumulate(client: AsyncClient, acme):
    """Given a member with no points
    When the same amount is awarded twice
    Then the balance grows by exactly twice that amount
    """
    participant_id, participant_headers = acme["participant"]
    _, admin_headers = acme["admin"]

    for expected in (25, 50):
        response = await client.post(
            "/workspaces/acme/points/award",
            json={"user_id": participant_id, "amount": 25},
            headers=admin_headers,
        )
        assert response.status_code == 200
        assert response.json()["data"]["total_points"] == expected

    response = await client.get("/workspaces/acme/points/balance", headers=participant_headers)
    data = response.json()["data"]
    assert data["total_points"] == 50
    assert data["available_points"] == 50


@pytest.mark.asyncio
async def test_manager_cannot_award(client: AsyncClient, acme):
    participant_id, _ = acme["participant"]
    _, manager_headers = acme["manager"]

    response = await client.post(
        "/workspaces/acme/points/award",
        json={"user_id": participant_id, "amount": 5},
        headers=manager_headers,
    )

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_challenge_budget_caps_approvals(client: AsyncClient, acme, steps_challenge, db_session):
    """Given a challenge budget of 20 and a 15-point activity
    When two submissions are approved
    Then the second fails with BUDGET_EXCEEDED and stays PENDING
    """
    _, admin_headers = acme["admin"]
    challenge_id = steps_challenge["challenge"]["id"]
    activity_id = steps_challenge["activity"]["id"]

    response = await client.put(
        f"/workspaces/acme/challenges/{challenge_id}/budget",
        json={"total_budget": 20},
        headers=admin_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["remaining"] == 20

    _, first = await approve_new_submission(client, acme, activity_id)
    assert first.status_code == 200

    second_id, second = await approve_new_submission(client, acme, activity_id)
    assert second.status_code == 409
    assert second.json()["error"]["code"] == "BUDGET_EXCEEDED"
    assert second.json()["error"]["details"]["requested"] == 15

    stmt = select(ActivitySubmission).where(ActivitySubmission.id == UUID(second_id))
    submission = (await db_session.exec(stmt)).one()
    assert submission.status == SubmissionStatus.pending

    response = await client.get("/workspaces/acme/budgets", headers=admin_headers)
    budgets = response.json()["data"]
    assert budgets["workspace"] is None
    assert budgets["challenges"] == [
        {"total_budget": 20, "allocated": 15, "remaining": 5, "challenge_id": challenge_id}
    ]

    # Budget can not shrink below what is already allocated
    response = await client.put(
        f"/workspaces/acme/challenges/{challenge_id}/budget",
        json={"total_budget": 10},
        headers=admin_headers,
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_workspace_budget_applies_without_challenge_budget(client: AsyncClient, acme):
    participant_id, _ = acme["participant"]
    _, admin_headers = acme["admin"]

    response = await client.put(
        "/workspaces/acme/budget", json={"total_budget": 50}, headers=admin_headers
    )
    assert response.status_code == 200

    award = {"user_id": participant_id, "amount": 40}
    response = await client.post("/workspaces/acme/points/award", json=award, headers=admin_headers)
    assert response.status_code == 200

    response = await client.post("/workspaces/acme/points/award", json=award, headers=admin_headers)
    assert response.status_code == 409

    response = await client.get("/workspaces/acme/budgets", headers=admin_headers)
    assert response.json()["data"]["workspace"]["allocated"] == 40


@pytest.mark.asyncio
async def test_leaderboards(client: AsyncClient, acme, steps_challenge):
    participant_id, participant_headers = acme["participant"]
    manager_id, _ = acme["manager"]
    _, admin_headers = acme["admin"]
    challenge_id = steps_challenge["challenge"]["id"]

    await approve_new_submission(client, acme, steps_challenge["activity"]["id"])
    await client.post(
        "/workspaces/acme/points/award",
        json={"user_id": manager_id, "amount": 5},
        headers=admin_headers,
    )

    response = await client.get("/workspaces/acme/leaderboard", headers=participant_headers)
    entries = response.json()["data"]["entries"]
    assert [(e["rank"], e["user_id"], e["total_points"]) for e in entries] == [
        (1, participant_id, 15),
        (2, manager_id, 5),
    ]
    assert entries[0]["approved_activities"] == 1

    response = await client.get(
        f"/workspaces/acme/challenges/{challenge_id}/leaderboard", headers=participant_headers
    )
    data = response.json()["data"]
    assert data["challenge_id"] == challenge_id
    assert [(e["user_id"], e["total_points"]) for e in data["entries"]] == [(participant_id, 15)]
