import pytest
from httpx import AsyncClient

from tests.factories.sheet import SheetCreateFactory, SheetFieldCreateFactory
from tests.fixtures.auth import make_token

SHEETS_URL = "/sheetshare/api/v1/admin/sheets/"
FIELDS_URL = "/sheetshare/api/v1/admin/fields/"


@pytest.mark.integration
class TestSheetAPI:
    """Administrator sheet and field endpoints."""

    async def test_requires_credentials(self, async_client: AsyncClient):
        response = await async_client.get(SHEETS_URL)
        assert response.status_code == 401

    async def test_agent_rejected(self, async_client: AsyncClient, agent_headers):
        response = await async_client.get(SHEETS_URL, headers=agent_headers(10))
        assert response.status_code == 403

    async def test_cookie_credential(self, async_client: AsyncClient):
        response = await async_client.get(SHEETS_URL, headers={"Cookie": f"token={make_token(1)}"})
        assert response.status_code == 200
        assert response.json() == []

    async def test_create_and_list(self, async_client: AsyncClient, admin_headers):
        payload = SheetCreateFactory.build().model_dump(mode="json")

        response = await async_client.post(SHEETS_URL, json=payload, headers=admin_headers(1))
        assert response.status_code == 201
        created = response.json()
        assert created["sheet_name"] == payload["sheet_name"]
        assert created["manager_id"] == 1

        response = await async_client.get(SHEETS_URL, headers=admin_headers(1))
        assert response.status_code == 200
        assert [(s["id"], s["share_count"]) for s in response.json()] == [(created["id"], 0)]

        # Other administrators do not see it
        response = await async_client.get(f"{SHEETS_URL}{created['id']}", headers=admin_headers(2))
        assert response.status_code == 404

    async def test_duplicate_number(self, async_client: AsyncClient, admin_headers):
        payload = SheetCreateFactory.build().model_dump(mode="json")
        await async_client.post(SHEETS_URL, json=payload, headers=admin_headers(1))

        response = await async_client.post(
            SHEETS_URL, json={**payload, "sheet_name": "Renamed"}, headers=admin_headers(1)
        )
        assert response.status_code == 409

    async def test_data_requires_fields(self, async_client: AsyncClient, admin_headers):
        payload = SheetCreateFactory.build().model_dump(mode="json")
        sheet = (await async_client.post(SHEETS_URL, json=payload, headers=admin_headers(1))).json()

        response = await async_client.get(f"{SHEETS_URL}{sheet['id']}/data", headers=admin_headers(1))
        assert response.status_code == 400
        assert response.json()["detail"]["msg"] == "You must design the sheet structure first."

    async def test_fields_in_creation_order(self, async_client: AsyncClient, admin_headers):
        payload = SheetCreateFactory.build().model_dump(mode="json")
        sheet = (await async_client.post(SHEETS_URL, json=payload, headers=admin_headers(1))).json()

        titles = ["Name", "Phone", "Notes"]
        for title in titles:
            field = SheetFieldCreateFactory.build(sheet_id=sheet["id"], title=title).model_dump(mode="json")
            response = await async_client.post(FIELDS_URL, json=field, headers=admin_headers(1))
            assert response.status_code == 201

        response = await async_client.get(FIELDS_URL, params={"sheet_id": sheet["id"]}, headers=admin_headers(1))
        assert [f["title"] for f in response.json()] == titles

    async def test_default_field_type_is_static(self, async_client: AsyncClient, admin_headers):
        payload = SheetCreateFactory.build().model_dump(mode="json")
        sheet = (await async_client.post(SHEETS_URL, json=payload, headers=admin_headers(1))).json()

        response = await async_client.post(
            FIELDS_URL, json={"sheet_id": sheet["id"], "title": "Name"}, headers=admin_headers(1)
        )
        assert response.status_code == 201
        assert response.json()["type"] == "static"
        assert response.json()["display_width"] == "150"
