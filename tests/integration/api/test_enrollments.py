import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_self_enrollment_and_duplicate(client: AsyncClient, acme, steps_challenge):
    """Given an enrolled participant
    When they enroll again
    Then the request conflicts
    """
    _, participant_headers = acme["participant"]
    challenge_id = steps_challenge["challenge"]["id"]

    response = await client.post(
        f"/workspaces/acme/challenges/{challenge_id}/enrollments", json={}, headers=participant_headers
    )

    assert response.status_code == 409
    assert steps_challenge["enrollment"]["status"] == "ENROLLED"


@pytest.mark.asyncio
async def test_batch_enrollment(client: AsyncClient, acme, steps_challenge):
    _, manager_headers = acme["manager"]
    admin_id, _ = acme["admin"]
    manager_id, _ = acme["manager"]
    participant_id, _ = acme["participant"]
    challenge_id = steps_challenge["challenge"]["id"]

    response = await client.post(
        f"/workspaces/acme/challenges/{challenge_id}/enrollments/batch",
        json={"user_ids": [admin_id, manager_id, participant_id, admin_id]},
        headers=manager_headers,
    )

    assert response.status_code == 201
    created = {e["user_id"] for e in response.json()["data"]}
    assert created == {admin_id, manager_id}

    response = await client.get(
        f"/workspaces/acme/challenges/{challenge_id}/enrollments?status=ENROLLED",
        headers=manager_headers,
    )
    assert len(response.json()["data"]) == 3


@pytest.mark.asyncio
async def test_batch_rejects_non_members(
    client: AsyncClient, acme, steps_challenge, make_user, test_data
):
    _, admin_headers = acme["admin"]
    outsider_id, _ = await make_user(**test_data.identity("outsider"))
    challenge_id = steps_challenge["challenge"]["id"]

    response = await client.post(
        f"/workspaces/acme/challenges/{challenge_id}/enrollments/batch",
        json={"user_ids": [outsider_id]},
        headers=admin_headers,
    )

    assert response.status_code == 403
    assert response.json()["error"]["details"] == {"user_id": outsider_id}


@pytest.mark.asyncio
async def test_withdraw_and_rejoin(client: AsyncClient, acme, steps_challenge):
    _, participant_headers = acme["participant"]
    enrollment_id = steps_challenge["enrollment"]["id"]

    response = await client.patch(
        f"/workspaces/acme/enrollments/{enrollment_id}",
        json={"status": "WITHDRAWN"},
        headers=participant_headers,
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "WITHDRAWN"

    response = await client.patch(
        f"/workspaces/acme/enrollments/{enrollment_id}",
        json={"status": "INVITED"},
        headers=participant_headers,
    )
    assert response.status_code == 422

    response = await client.patch(
        f"/workspaces/acme/enrollments/{enrollment_id}",
        json={"status": "ENROLLED"},
        headers=participant_headers,
    )
    assert response.json()["data"]["status"] == "ENROLLED"


@pytest.mark.asyncio
async def test_participant_cannot_touch_other_enrollments(client: AsyncClient, acme, steps_challenge):
    _, manager_headers = acme["manager"]
    manager_id, _ = acme["manager"]
    _, participant_headers = acme["participant"]
    challenge_id = steps_challenge["challenge"]["id"]

    response = await client.post(
        f"/workspaces/acme/challenges/{challenge_id}/enrollments", json={}, headers=manager_headers
    )
    manager_enrollment = response.json()["data"]["id"]

    response = await client.delete(
        f"/workspaces/acme/enrollments/{manager_enrollment}", headers=participant_headers
    )
    assert response.status_code == 403

    response = await client.delete(
        f"/workspaces/acme/enrollments/{manager_enrollment}", headers=manager_headers
    )
    assert response.status_code == 200
    assert response.json()["data"]["status"] == "deleted"


@pytest.mark.asyncio
async def test_challenge_from_other_workspace_is_not_found(
    client: AsyncClient, acme, steps_challenge, make_workspace
):
    admin_id, admin_headers = acme["admin"]
    await make_workspace("globex", "Globex", owner_user_id=admin_id)
    challenge_id = steps_challenge["challenge"]["id"]

    response = await client.post(
        f"/workspaces/globex/challenges/{challenge_id}/enrollments", json={}, headers=admin_headers
    )

    assert response.status_code == 404
