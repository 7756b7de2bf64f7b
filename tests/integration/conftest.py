import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine
from sqlalchemy.orm import sessionmaker
from sqlmodel import SQLModel
from sqlmodel.ext.asyncio.session import AsyncSession

from config import ApplicationConfig
from engagement.adapter.services.unit_of_work import SqlAlchemyUnitOfWork
from engagement.api.utils.jwt import generate_jwt
from engagement.depends import get_session, get_unit_of_work
from tests.fixtures.json_loader import TestDataLoader

ADMIN_HEADERS = {"X-Admin-API-Key": ApplicationConfig.ADMIN_API_KEY}


@pytest_asyncio.fixture
def test_data():
    return TestDataLoader()


@pytest_asyncio.fixture
async def engine():
    engine = create_async_engine("sqlite+aiosqlite:///./test.db")
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
        await conn.run_sync(SQLModel.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
def session_factory(engine):
    return sessionmaker(engine, class_=AsyncSession, expire_on_commit=False, autoflush=False)


@pytest_asyncio.fixture
async def db_session(session_factory):
    async with session_factory() as session:
        yield session


@pytest_asyncio.fixture
async def app(db_session):
    from engagement.api.app import create_app

    app = create_app(ApplicationConfig)

    async def override_get_unit_of_work():
        yield SqlAlchemyUnitOfWork(db_session)

    async def override_get_session():
        yield db_session

    app.dependency_overrides[get_unit_of_work] = override_get_unit_of_work
    app.dependency_overrides[get_session] = override_get_session
    return app


@pytest_asyncio.fixture
async def client(app):
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


def auth_headers(external_id: str, email: str) -> dict:
    return {"Authorization": f"Bearer {generate_jwt(external_id, email)}"}


@pytest_asyncio.fixture
def make_user(client):
    """Create (or resolve) a user through GET /me; returns (user_id, headers)"""

    async def _make(external_id: str, email: str):
        headers = auth_headers(external_id, email)
        response = await client.get("/me", headers=headers)
        assert response.status_code == 200, response.text
        return response.json()["data"]["user"]["id"], headers

    return _make


@pytest_asyncio.fixture
def make_workspace(client):
    """Provision a workspace through the admin API"""

    async def _make(slug: str, name: str, owner_user_id: str = None, **fields):
        payload = {"slug": slug, "name": name, **fields}
        if owner_user_id is not None:
            payload["owner_user_id"] = owner_user_id
        response = await client.post("/admin/workspaces", json=payload, headers=ADMIN_HEADERS)
        assert response.status_code == 201, response.text
        return response.json()["data"]

    return _make


@pytest_asyncio.fixture
async def acme(client, test_data, make_user, make_workspace):
    """Workspace 'acme' with an owning admin, a manager and a participant"""
    admin_id, admin_headers = await make_user(**test_data.identity("admin"))
    manager_id, manager_headers = await make_user(**test_data.identity("manager"))
    participant_id, participant_headers = await make_user(**test_data.identity("participant"))

    workspace = await make_workspace(owner_user_id=admin_id, **test_data.get_copy("workspace"))
    for user_id, role in ((manager_id, "MANAGER"), (participant_id, "PARTICIPANT")):
        response = await client.put(
            f"/workspaces/{workspace['slug']}/members/{user_id}",
            json={"role": role},
            headers=admin_headers,
        )
        assert response.status_code == 201, response.text

    return {
        "slug": workspace["slug"],
        "workspace": workspace,
        "admin": (admin_id, admin_headers),
        "manager": (manager_id, manager_headers),
        "participant": (participant_id, participant_headers),
    }


@pytest_asyncio.fixture
async def steps_challenge(client, acme, test_data):
    """Points challenge with one activity; the participant is enrolled"""
    slug = acme["slug"]
    _, admin_headers = acme["admin"]
    _, participant_headers = acme["participant"]

    response = await client.post(
        f"/workspaces/{slug}/challenges", json=test_data.get_copy("challenge"), headers=admin_headers
    )
    assert response.status_code == 201, response.text
    challenge = response.json()["data"]

    response = await client.post(
        f"/workspaces/{slug}/challenges/{challenge['id']}/activities",
        json=test_data.get_copy("activity"),
        headers=admin_headers,
    )
    assert response.status_code == 201, response.text
    activity = response.json()["data"]

    response = await client.post(
        f"/workspaces/{slug}/challenges/{challenge['id']}/enrollments",
        json={},
        headers=participant_headers,
    )
    assert response.status_code == 201, response.text

    return {"challenge": challenge, "activity": activity, "enrollment": response.json()["data"]}
