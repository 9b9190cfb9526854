"""HTTP tests for the review workflow endpoints."""

import uuid

import pytest
import pytest_asyncio
from alembic.util import CommandError
from httpx import ASGITransport, AsyncClient

from review_workflows.core.config import settings
from review_workflows.db.session import get_db
from review_workflows.main import app
from review_workflows.routers import health

PREFIX = settings.API_PREFIX


@pytest_asyncio.fixture
async def client(session_maker):
    async def _get_db():
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db] = _get_db
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client
    app.dependency_overrides.clear()


@pytest.mark.asyncio
async def test_list_and_get_workflow(client, seeded):
    response = await client.get(f"{PREFIX}/workflows")
    assert response.status_code == 200
    workflows = response.json()
    assert len(workflows) == 1
    assert [s["name"] for s in workflows[0]["stages"]] == ["S1", "S2", "S3"]

    response = await client.get(f"{PREFIX}/workflows/{seeded.workflow_id}")
    assert response.status_code == 200
    assert response.json()["is_default"] is True


@pytest.mark.asyncio
async def test_get_missing_workflow_returns_structured_404(client, seeded):
    response = await client.get(f"{PREFIX}/workflows/{uuid.uuid4()}")
    assert response.status_code == 404
    assert response.json()["error"]["code"] == "not_found"


@pytest.mark.asyncio
async def test_list_and_get_stages(client, seeded):
    response = await client.get(f"{PREFIX}/workflows/{seeded.workflow_id}/stages")
    assert response.status_code == 200
    assert [s["position"] for s in response.json()] == [0, 1, 2]

    response = await client.get(f"{PREFIX}/workflows/{seeded.workflow_id}/stages/{seeded.s3}")
    assert response.status_code == 200
    assert response.json()["name"] == "S3"

    response = await client.get(f"{PREFIX}/workflows/{seeded.workflow_id}/stages/{uuid.uuid4()}")
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_replace_stages(client, seeded):
    response = await client.put(
        f"{PREFIX}/workflows/{seeded.workflow_id}/stages",
        json={
            "stages": [
                {"id": str(seeded.s1), "name": "S1"},
                {"name": "Legal"},
                {"id": str(seeded.s3), "name": "S3"},
            ],
            "expected_revision": 0,
        },
    )
    assert response.status_code == 200
    body = response.json()
    assert [s["name"] for s in body["stages"]] == ["S1", "Legal", "S3"]
    assert body["revision"] == 1
    assert str(seeded.s2) not in {s["id"] for s in body["stages"]}


@pytest.mark.asyncio
async def test_replace_with_no_stages_is_400(client, seeded):
    response = await client.put(f"{PREFIX}/workflows/{seeded.workflow_id}/stages", json={"stages": []})
    assert response.status_code == 400
    assert response.json()["error"]["code"] == "validation_error"

    response = await client.get(f"{PREFIX}/workflows/{seeded.workflow_id}/stages")
    assert len(response.json()) == 3


@pytest.mark.asyncio
async def test_replace_with_stale_revision_is_409(client, seeded):
    response = await client.put(
        f"{PREFIX}/workflows/{seeded.workflow_id}/stages",
        json={"stages": [{"id": str(seeded.s1), "name": "S1"}], "expected_revision": 7},
    )
    assert response.status_code == 409
    assert response.json()["error"]["details"]["revision"] == 0


@pytest.mark.asyncio
async def test_replace_rejects_blank_stage_name(client, seeded):
    response = await client.put(
        f"{PREFIX}/workflows/{seeded.workflow_id}/stages",
        json={"stages": [{"name": ""}]},
    )
    assert response.status_code == 422


@pytest.mark.asyncio
async def test_move_content_to_stage(client, seeded):
    response = await client.put(
        f"{PREFIX}/content/page/{seeded.page_id}/stage",
        json={"stage_id": str(seeded.s1)},
    )
    assert response.status_code == 200
    assert response.json() == {"type": "page", "id": str(seeded.page_id), "review_stage_id": str(seeded.s1)}

    response = await client.put(
        f"{PREFIX}/content/video/{seeded.page_id}/stage",
        json={"stage_id": str(seeded.s1)},
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_health(client):
    response = await client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["api_ok"] is True
    assert body["db_ok"] is True
    assert body["alembic_head"] == "3c1f2a9d7e10"


@pytest.mark.asyncio
async def test_health_reports_no_head_when_migrations_cannot_be_read(client, monkeypatch):
    def _broken(config):
        raise CommandError("No 'script_location' key found in configuration.")

    monkeypatch.setattr(health.ScriptDirectory, "from_config", _broken)

    response = await client.get("/health")
    assert response.status_code == 200
    body = response.json()
    assert body["alembic_head"] is None
    assert body["alembic_head_ok"] is False
