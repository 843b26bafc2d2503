"""세션(담당자/프로젝트) API 통합 테스트."""

import pytest
from httpx import AsyncClient, ASGITransport

from app.main import app


@pytest.fixture
async def client():
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac


async def test_contacts_directory(client: AsyncClient):
    response = await client.get("/api/v1/session/contacts")

    assert response.status_code == 200
    contacts = response.json()["contacts"]
    assert len(contacts) == 4
    assert {"id", "contactName", "email"} <= set(contacts[0])


async def test_resolve_with_contact_id(client: AsyncClient):
    response = await client.post(
        "/api/v1/session/resolve",
        json={"contactId": "AMY@pacificbathroom.com.au", "project": {"projectName": "Villa 7"}},
    )

    assert response.status_code == 200
    data = response.json()
    assert data["selectedContactId"] == "amy-keys"
    assert data["contact"]["contactName"] == "Amy Keys"
    assert data["form"]["projectName"] == "Villa 7"
    assert data["form"]["email"] == "amy@pacificbathroom.com.au"


async def test_resolve_fills_presentation_date(client: AsyncClient):
    response = await client.post("/api/v1/session/resolve", json={})

    data = response.json()
    assert data["project"]["presentationDate"]
    assert data["form"]["date"] == data["project"]["presentationDate"]
    assert data["form"]["contactName"]
