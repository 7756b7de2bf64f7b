import pytest
from httpx import AsyncClient


@pytest.mark.asyncio
async def test_activity_feed(client: AsyncClient, acme, steps_challenge):
    """Given a workspace with a challenge and an enrolled participant
    When a manager reads the activity feed
    Then events are listed newest first with actor details
    """
    _, manager_headers = acme["manager"]
    participant_id, _ = acme["participant"]

    response = await client.get("/workspaces/acme/activity", headers=manager_headers)

    assert response.status_code == 200
    events = response.json()["data"]["events"]
    types = [e["type"] for e in events]
    assert types[0] == "ENROLLED"
    assert {"WORKSPACE_CREATED", "CHALLENGE_CREATED", "ACTIVITY_CREATED"} <= set(types)
    assert events[0]["user_id"] == participant_id
    assert events[0]["actor_email"] == "participant@acme.com"
    assert events[0]["challenge_id"] == steps_challenge["challenge"]["id"]
    assert events[0]["timestamp"].endswith("Z")


@pytest.mark.asyncio
async def test_activity_feed_filter_and_pagination(client: AsyncClient, acme, steps_challenge):
    _, admin_headers = acme["admin"]

    response = await client.get("/workspaces/acme/activity?type=ENROLLED", headers=admin_headers)
    assert [e["type"] for e in response.json()["data"]["events"]] == ["ENROLLED"]

    response = await client.get("/workspaces/acme/activity?limit=2", headers=admin_headers)
    first_page = response.json()["data"]
    assert len(first_page["events"]) == 2
    assert first_page["next_cursor"] is not None

    response = await client.get(
        "/workspaces/acme/activity",
        params={"limit": 2, "cursor": first_page["next_cursor"]},
        headers=admin_headers,
    )
    second_ids = {e["id"] for e in response.json()["data"]["events"]}
    assert second_ids.isdisjoint({e["id"] for e in first_page["events"]})


@pytest.mark.asyncio
async def test_activity_feed_requires_manager(client: AsyncClient, acme):
    _, participant_headers = acme["participant"]

    response = await client.get("/workspaces/acme/activity", headers=participant_headers)

    assert response.status_code == 403


@pytest.mark.asyncio
async def test_activity_feed_limit_bounds(client: AsyncClient, acme):
    _, admin_headers = acme["admin"]

    response = await client.get("/workspaces/acme/activity?limit=0", headers=admin_headers)

    assert response.status_code == 422
