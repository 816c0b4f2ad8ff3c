"""End-to-end tests of the dashboard API against the in-memory farm backend."""

import datetime as dt
from collections.abc import AsyncIterator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient

from goatfarm.application.services import SessionService
from goatfarm.config import Settings
from goatfarm.infrastructure.demo import DEMO_PASSWORD, DemoFarmGateway
from goatfarm.infrastructure.dependencies import DashboardContainer, build_container
from goatfarm.infrastructure.storage import InMemorySessionStorage
from goatfarm.main import create_app


class SessionToken:
    """Hands the demo backend the token of whichever session is attached."""

    session: SessionService | None = None

    def __call__(self) -> str | None:
        return self.session.credential if self.session is not None else None


@pytest.fixture
def token() -> SessionToken:
    return SessionToken()


@pytest.fixture
def gateway(token: SessionToken) -> DemoFarmGateway:
    return DemoFarmGateway(token)


@pytest.fixture
def container(gateway: DemoFarmGateway, token: SessionToken) -> DashboardContainer:
    session = SessionService(gateway, InMemorySessionStorage())
    token.session = session
    return build_container(Settings(_env_file=None), gateway=gateway, session=session)


@pytest_asyncio.fixture
async def client(container: DashboardContainer) -> AsyncIterator[AsyncClient]:
    transport = ASGITransport(app=create_app(container))
    async with AsyncClient(transport=transport, base_url="http://test") as client:
        yield client


async def _login(client: AsyncClient, username: str) -> None:
    response = await client.post(
        "/api/v1/session/login", json={"username": username, "password": DEMO_PASSWORD}
    )
    assert response.status_code == 200


# ── Session ──


@pytest.mark.asyncio
async def test_login_and_logout(client: AsyncClient):
    response = await client.post(
        "/api/v1/session/login", json={"username": "timur", "password": DEMO_PASSWORD}
    )
    assert response.json() == {
        "authenticated": True,
        "id": "3",
        "username": "timur",
        "role": "timur",
        "barn": "timur",
    }

    response = await client.post("/api/v1/session/logout")
    assert response.json()["authenticated"] is False
    assert (await client.get("/api/v1/session")).json()["authenticated"] is False


@pytest.mark.asyncio
async def test_bad_login_is_generic_401(client: AsyncClient):
    response = await client.post(
        "/api/v1/session/login", json={"username": "timur", "password": "wrong"}
    )
    assert response.status_code == 401
    assert response.json()["detail"] == "Invalid username or password"


@pytest.mark.asyncio
@pytest.mark.parametrize("path", ["/api/v1/dashboard", "/api/v1/goats", "/api/v1/feeding"])
async def test_pages_require_login(client: AsyncClient, path: str):
    response = await client.get(path)
    assert response.status_code == 401
    assert response.json()["detail"]["redirect"] == "/login"


# ── Dashboard and goats ──


@pytest.mark.asyncio
async def test_dashboard_stats(client: AsyncClient):
    await _login(client, "barat")
    data = (await client.get("/api/v1/dashboard")).json()

    assert (data["total"], data["west"], data["east"]) == (5, 3, 2)
    assert [card["value"] for card in data["cards"]] == [5, 3, 2]


@pytest.mark.asyncio
async def test_handler_goat_table_flags(client: AsyncClient):
    await _login(client, "barat")
    data = (await client.get("/api/v1/goats")).json()

    assert data["barn_selectable"] is False
    assert data["barn_filter"] is None
    for row in data["rows"]:
        own = row["goat"]["barn"] == "barat"
        assert row["can_edit"] is own
        assert row["can_delete"] is own


@pytest.mark.asyncio
async def test_admin_adds_goat_and_stats_follow(client: AsyncClient):
    await _login(client, "admin")
    response = await client.post(
        "/api/v1/goats",
        json={"tag": "G010", "weight": "40", "age": "6", "gender": "male", "status": "healthy", "barn": "timur"},
    )
    assert response.status_code == 201
    assert response.json()["tag"] == "G010"

    data = (await client.get("/api/v1/dashboard")).json()
    assert (data["total"], data["east"]) == (6, 3)

    table = (await client.get("/api/v1/goats", params={"barn": "timur"})).json()
    assert "G010" in [row["goat"]["tag"] for row in table["rows"]]


@pytest.mark.asyncio
async def test_invalid_goat_form_is_422(client: AsyncClient):
    await _login(client, "admin")
    response = await client.post("/api/v1/goats", json={"tag": "", "weight": "", "age": "3"})

    assert response.status_code == 422
    assert response.json()["detail"] == {
        "message": "Please fill all required fields",
        "fields": ["tag", "weight"],
    }


@pytest.mark.asyncio
async def test_handler_cannot_delete_other_barn_goat(client: AsyncClient):
    await _login(client, "barat")
    rows = (await client.get("/api/v1/goats", params={"barn": "timur"})).json()["rows"]
    goat_id = rows[0]["goat"]["id"]

    form = (await client.get(f"/api/v1/goats/{goat_id}/form")).json()
    assert form["can_delete"] is False
    assert form["barn_locked"] is True

    response = await client.delete(f"/api/v1/goats/{goat_id}")
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_edit_and_delete_own_goat(client: AsyncClient):
    await _login(client, "barat")
    rows = (await client.get("/api/v1/goats", params={"barn": "barat"})).json()["rows"]
    goat = rows[0]["goat"]

    response = await client.put(
        f"/api/v1/goats/{goat['id']}",
        json={**goat, "weight": "36.5", "status": "sick"},
    )
    assert response.status_code == 200
    assert response.json()["status"] == "sick"

    assert (await client.delete(f"/api/v1/goats/{goat['id']}")).status_code == 204
    assert (await client.get(f"/api/v1/goats/{goat['id']}")).status_code == 404


@pytest.mark.asyncio
async def test_expired_session_redirects_to_login(client: AsyncClient, gateway: DemoFarmGateway):
    await _login(client, "barat")
    await gateway.login("barat", DEMO_PASSWORD)

    response = await client.get("/api/v1/goats")
    assert response.status_code == 401
    assert response.json()["detail"]["redirect"] == "/login"
    assert (await client.get("/api/v1/session")).json()["authenticated"] is False


@pytest.mark.asyncio
async def test_handler_goat_without_barn_lands_in_own_barn(client: AsyncClient):
    await _login(client, "timur")
    response = await client.post("/api/v1/goats", json={"tag": "G9", "weight": "3", "age": "2"})

    assert response.status_code == 201
    assert response.json()["barn"] == "timur"
    assert (response.json()["gender"], response.json()["status"]) == ("male", "healthy")


@pytest.mark.asyncio
async def test_partial_update_keeps_stored_barn_and_status(client: AsyncClient):
    await _login(client, "admin")
    await client.get("/api/v1/goats")

    response = await client.put("/api/v1/goats/4", json={"tag": "G004", "weight": "50", "age": "3"})

    assert response.status_code == 200
    goat = response.json()
    assert (goat["barn"], goat["gender"], goat["status"]) == ("timur", "male", "healthy")
    assert goat["weight"] == 50
    data = (await client.get("/api/v1/dashboard")).json()
    assert (data["west"], data["east"]) == (3, 2)


# ── Feeding calendar ──


@pytest.mark.asyncio
async def test_feeding_calendar_month(client: AsyncClient):
    await _login(client, "timur")
    today = dt.date.today()
    data = (
        await client.get("/api/v1/feeding", params={"year": today.year, "month": today.month})
    ).json()

    assert (data["year"], data["month"]) == (today.year, today.month)
    assert data["barn_selectable"] is False
    first = data["cells"][0]["entries"]
    assert [entry["log"]["barn"] for entry in first][:2] == ["barat", "timur"]
    assert [entry["can_edit"] for entry in first][:2] == [False, True]
    assert data["cells"][today.day - 1]["is_today"] is True


@pytest.mark.asyncio
async def test_february_calendar_has_28_cells(client: AsyncClient):
    await _login(client, "admin")
    data = (await client.get("/api/v1/feeding", params={"year": 2023, "month": 2})).json()
    assert data["label"] == "February 2023"
    assert len(data["cells"]) == 28


@pytest.mark.asyncio
async def test_feeding_log_without_time_is_rejected(client: AsyncClient):
    await _login(client, "barat")
    await client.get("/api/v1/feeding")
    form = (await client.get("/api/v1/feeding/form", params={"day": "2024-05-09"})).json()
    assert form["date"] == "2024-05-09"
    assert form["barn"] == "barat"

    response = await client.post("/api/v1/feeding", json=form)
    assert response.status_code == 422
    assert response.json()["detail"]["fields"] == ["feed_time"]


@pytest.mark.asyncio
async def test_feeding_log_lifecycle(client: AsyncClient):
    await _login(client, "barat")
    today = dt.date.today()
    await client.get("/api/v1/feeding")

    response = await client.post(
        "/api/v1/feeding",
        json={"date": today.isoformat(), "feed_time": "06:45", "barn": "barat", "note": "Hay"},
    )
    assert response.status_code == 201
    log = response.json()
    assert log["user_id"] == "2"

    form = (await client.get(f"/api/v1/feeding/{log['id']}/form")).json()
    assert form["feed_time"] == "06:45"
    assert form["can_delete"] is True

    response = await client.put(
        f"/api/v1/feeding/{log['id']}", json={**form, "note": "More hay"}
    )
    assert response.json()["note"] == "More hay"

    assert (await client.delete(f"/api/v1/feeding/{log['id']}")).status_code == 204
    assert (await client.get(f"/api/v1/feeding/{log['id']}/form")).status_code == 404


@pytest.mark.asyncio
async def test_handler_feeding_log_without_barn_lands_in_own_barn(client: AsyncClient):
    await _login(client, "timur")
    await client.get("/api/v1/feeding")

    response = await client.post(
        "/api/v1/feeding", json={"date": dt.date.today().isoformat(), "feed_time": "07:00"}
    )

    assert response.status_code == 201
    assert response.json()["barn"] == "timur"
    assert response.json()["note"] == ""
