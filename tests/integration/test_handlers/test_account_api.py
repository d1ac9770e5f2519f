import pytest
from httpx import AsyncClient
from sqlmodel.ext.asyncio.session import AsyncSession

from sheetshare.models.user import User
from tests.factories.sheet import SheetCreateFactory

API = "/sheetshare/api/v1"
ADMIN_ID = 100


@pytest.mark.integration
class TestAccountAPI:
    """Users, sharing grants and view preference endpoints."""

    @pytest.fixture
    async def users(self, db_session: AsyncSession) -> dict[str, int]:
        mine = User(manager_id=ADMIN_ID, username="bob")
        theirs = User(manager_id=2, username="carol", is_active=True)
        db_session.add_all([mine, theirs])
        await db_session.commit()
        assert mine.id is not None and theirs.id is not None
        return {"mine": mine.id, "theirs": theirs.id}

    async def test_list_and_activate(self, async_client: AsyncClient, admin_headers, users):
        headers = admin_headers(ADMIN_ID)

        listed = (await async_client.get(f"{API}/admin/users/", headers=headers)).json()
        assert [(u["username"], u["is_active"]) for u in listed] == [("bob", False)]

        response = await async_client.patch(
            f"{API}/admin/users/{users['mine']}", json={"is_active": True}, headers=headers
        )
        assert response.status_code == 200

        listed = (await async_client.get(f"{API}/admin/users/", headers=headers)).json()
        assert listed[0]["is_active"] is True

    async def test_cannot_touch_other_managers_users(self, async_client: AsyncClient, admin_headers, users):
        response = await async_client.patch(
            f"{API}/admin/users/{users['theirs']}", json={"is_active": False}, headers=admin_headers(ADMIN_ID)
        )
        assert response.status_code == 404
        assert response.json()["detail"] == {"msg": "User not found or access denied"}

    async def test_share_lifecycle(self, async_client: AsyncClient, admin_headers, agent_headers, users):
        headers = admin_headers(ADMIN_ID)
        payload = SheetCreateFactory.build().model_dump(mode="json")
        sheet = (await async_client.post(f"{API}/admin/sheets/", json=payload, headers=headers)).json()
        grant = {"sheet_id": sheet["id"], "user_id": users["mine"]}

        assert (await async_client.post(f"{API}/admin/shares/", json=grant, headers=headers)).status_code == 201
        assert (await async_client.post(f"{API}/admin/shares/", json=grant, headers=headers)).status_code == 409

        foreign = {"sheet_id": sheet["id"], "user_id": users["theirs"]}
        assert (await async_client.post(f"{API}/admin/shares/", json=foreign, headers=headers)).status_code == 404

        shared = (await async_client.get(f"{API}/agent/sheets/", headers=agent_headers(users["mine"]))).json()
        assert shared[0]["manager_name"] is None
        assert shared[0]["id"] == sheet["id"]

        response = await async_client.delete(f"{API}/admin/shares/", params=grant, headers=headers)
        assert response.status_code == 200
        assert (await async_client.get(f"{API}/agent/sheets/", headers=agent_headers(users["mine"]))).json() == []

    async def test_view_preference(self, async_client: AsyncClient, admin_headers):
        headers = admin_headers(ADMIN_ID)
        url = f"{API}/admin/view-preference/"

        assert (await async_client.get(url, headers=headers)).json() == {"view_type": 0}
        assert (await async_client.post(url, json={"view_type": 1}, headers=headers)).json() == {"view_type": 1}
        invalid = await async_client.post(url, json={"view_type": 7}, headers=headers)
        assert invalid.status_code == 400
        assert invalid.json()["detail"] == {"msg": "Invalid view_type. Must be 0 (card) or 1 (table)"}
        assert (await async_client.get(url, headers=headers)).json() == {"view_type": 1}

    async def test_shared_sheet_reports_manager_name(
        self, async_client: AsyncClient, db_session: AsyncSession, admin_headers, agent_headers, users
    ):
        db_session.add(User(id=ADMIN_ID, username="boss", is_active=True))
        await db_session.commit()

        headers = admin_headers(ADMIN_ID)
        payload = SheetCreateFactory.build().model_dump(mode="json")
        sheet = (await async_client.post(f"{API}/admin/sheets/", json=payload, headers=headers)).json()
        await async_client.post(
            f"{API}/admin/shares/", json={"sheet_id": sheet["id"], "user_id": users["mine"]}, headers=headers
        )

        shared = (await async_client.get(f"{API}/agent/sheets/", headers=agent_headers(users["mine"]))).json()
        assert [(s["id"], s["manager_name"]) for s in shared] == [(sheet["id"], "boss")]


@pytest.mark.integration
class TestProfileAPI:
    """Agent self-service profile and username lookup."""

    PROFILE_URL = f"{API}/agent/profile/"
    CHECK_URL = f"{API}/check-username/"

    @pytest.fixture
    async def agent_id(self, db_session: AsyncSession) -> int:
        manager = User(id=ADMIN_ID, username="boss", is_active=True)
        agent = User(manager_id=ADMIN_ID, username="dave", is_active=True)
        other = User(manager_id=ADMIN_ID, username="erin")
        db_session.add_all([manager, agent, other])
        await db_session.commit()
        assert agent.id is not None
        return agent.id

    async def test_get_profile(self, async_client: AsyncClient, agent_headers, agent_id: int):
        response = await async_client.get(self.PROFILE_URL, headers=agent_headers(agent_id))
        assert response.status_code == 200
        assert response.json() == {
            "user": {
                "id": agent_id,
                "username": "dave",
                "is_active": True,
                "manager_id": ADMIN_ID,
                "manager_name": "boss",
            }
        }

    async def test_profile_requires_agent(self, async_client: AsyncClient, admin_headers):
        response = await async_client.get(self.PROFILE_URL, headers=admin_headers(ADMIN_ID))
        assert response.status_code == 403

    async def test_profile_of_unknown_user(self, async_client: AsyncClient, agent_headers):
        response = await async_client.get(self.PROFILE_URL, headers=agent_headers(4242))
        assert response.status_code == 404

    async def test_rename(self, async_client: AsyncClient, agent_headers, agent_id: int):
        response = await async_client.patch(
            self.PROFILE_URL, json={"username": "  david "}, headers=agent_headers(agent_id)
        )
        assert response.status_code == 200
        body = response.json()
        assert body["message"] == "Profile updated successfully"
        assert body["user"]["username"] == "david"

        check = await async_client.post(self.CHECK_URL, json={"username": "david"})
        assert check.json() == {"exists": True}

    async def test_keep_same_username(self, async_client: AsyncClient, agent_headers, agent_id: int):
        headers = agent_headers(agent_id)
        response = await async_client.patch(self.PROFILE_URL, json={"username": "dave"}, headers=headers)
        assert response.status_code == 200
        assert response.json()["user"]["username"] == "dave"

    async def test_rename_too_short(self, async_client: AsyncClient, agent_headers, agent_id: int):
        headers = agent_headers(agent_id)
        response = await async_client.patch(self.PROFILE_URL, json={"username": " ab "}, headers=headers)
        assert response.status_code == 400
        assert response.json()["detail"] == {"msg": "Username must be at least 3 characters"}

    async def test_rename_to_taken_name(self, async_client: AsyncClient, agent_headers, agent_id: int):
        headers = agent_headers(agent_id)
        response = await async_client.patch(self.PROFILE_URL, json={"username": "erin"}, headers=headers)
        assert response.status_code == 400
        assert response.json()["detail"] == {"msg": "Username already taken"}

    async def test_check_username(self, async_client: AsyncClient, agent_id: int):
        assert (await async_client.post(self.CHECK_URL, json={"username": "erin"})).json() == {"exists": True}
        assert (await async_client.post(self.CHECK_URL, json={"username": "nobody"})).json() == {"exists": False}
        assert (await async_client.post(self.CHECK_URL, json={})).status_code == 400
