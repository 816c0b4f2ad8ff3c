"""Unit tests for the dashboard views, driven against the in-memory farm backend."""

import datetime as dt

import pytest

from goatfarm.application.schemas import FeedingLogForm, GoatForm
from goatfarm.application.services import (
    FeedingCalendarView,
    FeedingLogService,
    GoatService,
    GoatTableView,
    SessionService,
    load_dashboard_summary,
)
from goatfarm.domain.calendar import CalendarMonth
from goatfarm.domain.entities import Barn
from goatfarm.domain.exceptions import (
    AuthorizationError,
    NotFoundError,
    PermissionDeniedError,
)
from goatfarm.infrastructure.demo import DEMO_PASSWORD, DemoFarmGateway
from goatfarm.infrastructure.storage import InMemorySessionStorage

TODAY = dt.date(2024, 5, 17)
MAY = CalendarMonth(2024, 5)


class Farm:
    """Demo backend, session and views wired together like the app does."""

    def __init__(self):
        self.storage = InMemorySessionStorage()
        self.gateway = DemoFarmGateway(lambda: self.session.credential, today=TODAY)
        self.session = SessionService(self.gateway, self.storage)
        self.goats = GoatService(self.gateway, self.session)
        self.feeding = FeedingLogService(self.gateway, self.session)
        self.table = GoatTableView(self.goats, self.session)
        self.calendar = FeedingCalendarView(self.feeding, self.session, MAY)

    async def login(self, username: str) -> "Farm":
        await self.session.login(username, DEMO_PASSWORD)
        return self


@pytest.fixture
def farm() -> Farm:
    return Farm()


# ── Dashboard summary ──


@pytest.mark.asyncio
async def test_summary_counts_every_barn(farm: Farm):
    await farm.login("barat")
    summary = await load_dashboard_summary(farm.goats, farm.session)

    assert summary.greeting.startswith("Welcome back, barat!")
    assert (summary.stats.total, summary.stats.west, summary.stats.east) == (5, 3, 2)
    assert [card.value for card in summary.cards] == [5, 3, 2]


# ── Goat table ──


@pytest.mark.asyncio
async def test_handler_sees_all_barns_but_manages_only_own(farm: Farm):
    await farm.login("barat")
    rows = await farm.table.load()

    assert {row.goat.barn for row in rows} == {Barn.WEST, Barn.EAST}
    for row in rows:
        own = row.goat.barn is Barn.WEST
        assert row.can_edit is own
        assert row.can_delete is own
    assert farm.table.barn_selectable is False


@pytest.mark.asyncio
async def test_barn_filter(farm: Farm):
    await farm.login("admin")
    rows = await farm.table.load(Barn.EAST)

    assert [row.goat.tag for row in rows] == ["G004", "G005"]
    assert farm.table.barn_selectable is True
    assert all(row.can_edit for row in rows)


@pytest.mark.asyncio
async def test_admin_adds_goat_to_east_barn(farm: Farm):
    await farm.login("admin")
    await farm.table.load()
    before = await farm.goats.goat_stats()

    goat = await farm.table.add(
        GoatForm(tag="G010", weight="40", age="6", gender="male", status="healthy", barn=Barn.EAST)
    )
    after = await farm.goats.goat_stats()

    assert farm.table.collection.get(goat.id).tag == "G010"
    assert after.east == before.east + 1
    assert after.total == before.total + 1
    assert after.west == before.west


@pytest.mark.asyncio
async def test_created_goat_is_listed_with_same_fields(farm: Farm):
    await farm.login("timur")
    created = await farm.table.add(GoatForm(tag="G011", weight="22.5", age="4", barn=Barn.EAST))

    rows = await farm.table.load()
    listed = next(row.goat for row in rows if row.goat.id == created.id)
    assert listed == created


@pytest.mark.asyncio
async def test_handler_edit_form_is_locked_without_delete_on_other_barn(farm: Farm):
    await farm.login("barat")
    await farm.table.load()
    east_goat = next(row.goat for row in farm.table.rows() if row.goat.barn is Barn.EAST)

    form, can_delete = await farm.table.edit_form(east_goat.id)

    assert form.barn_locked is True
    assert can_delete is False
    with pytest.raises(PermissionDeniedError):
        await farm.table.remove(east_goat.id)
    assert farm.table.collection.get(east_goat.id) is not None


@pytest.mark.asyncio
async def test_save_replaces_row_in_place(farm: Farm):
    await farm.login("barat")
    await farm.table.load(Barn.WEST)
    first = farm.table.rows()[0].goat

    form = GoatForm.from_goat(first).model_copy(update={"weight": "50"})
    await farm.table.save(first.id, form)

    assert farm.table.rows()[0].goat.weight == 50
    assert len(farm.table.rows()) == 3


@pytest.mark.asyncio
async def test_remove_already_deleted_goat(farm: Farm):
    await farm.login("admin")
    await farm.table.load()
    goat = farm.table.rows()[0].goat
    await farm.gateway.delete_goat(goat.id)

    await farm.table.remove(goat.id)
    await farm.table.remove("no-such-goat")

    assert farm.table.collection.get(goat.id) is None


@pytest.mark.asyncio
async def test_resolve_unlisted_goat_asks_farm_api(farm: Farm):
    await farm.login("admin")
    await farm.table.load(Barn.WEST)
    east_goat = (await farm.goats.list_goats(Barn.EAST))[0]

    resolved = await farm.table.resolve(east_goat.id)
    assert resolved.tag == east_goat.tag
    with pytest.raises(NotFoundError):
        await farm.table.resolve("no-such-goat")


@pytest.mark.asyncio
async def test_login_elsewhere_logs_out_table_user(farm: Farm):
    await farm.login("barat")
    await farm.gateway.login("barat", DEMO_PASSWORD)

    with pytest.raises(AuthorizationError):
        await farm.table.load()
    assert farm.session.actor is None
    assert farm.storage.keys() == []


# ── Feeding calendar ──


@pytest.mark.asyncio
async def test_calendar_buckets_seeded_logs(farm: Farm):
    await farm.login("timur")
    grid = await farm.calendar.load()

    assert len(grid) == 31
    first_day = grid[0]
    assert [entry.log.feed_time for entry in first_day.entries] == [
        dt.time(7, 0),
        dt.time(7, 30),
    ]
    assert [entry.can_edit for entry in first_day.entries] == [False, True]
    assert grid[TODAY.day - 1].entries[0].log.note == "Concentrate"


@pytest.mark.asyncio
async def test_month_navigation_reloads(farm: Farm):
    await farm.login("admin")
    await farm.calendar.load()

    grid = await farm.calendar.next_month()
    assert farm.calendar.month == CalendarMonth(2024, 6)
    assert len(grid) == 30
    assert all(not cell.entries for cell in grid)

    await farm.calendar.previous_month()
    assert farm.calendar.month == MAY
    assert len(farm.calendar.collection) == 3


@pytest.mark.asyncio
async def test_add_log_from_clicked_day(farm: Farm):
    await farm.login("barat")
    await farm.calendar.load()

    form = farm.calendar.new_form(dt.date(2024, 5, 9))
    log = await farm.calendar.add(form.model_copy(update={"feed_time": "06:45"}))

    assert log.user_id == "2"
    assert log.barn is Barn.WEST
    cell = farm.calendar.grid(TODAY)[8]
    assert [entry.log.id for entry in cell.entries] == [log.id]


@pytest.mark.asyncio
async def test_edit_and_delete_own_log(farm: Farm):
    await farm.login("barat")
    await farm.calendar.load()
    own = next(log for log in farm.calendar.collection.items if log.barn is Barn.WEST)

    form, can_delete = farm.calendar.edit_form(own.id)
    assert can_delete is True
    saved = await farm.calendar.save(own.id, form.model_copy(update={"note": "Extra hay"}))
    assert farm.calendar.collection.get(own.id).note == "Extra hay"
    assert saved.user_id == own.user_id

    await farm.calendar.remove(own.id)
    assert farm.calendar.collection.get(own.id) is None
    await farm.calendar.remove(own.id)


@pytest.mark.asyncio
async def test_edit_form_of_unknown_log(farm: Farm):
    await farm.login("admin")
    await farm.calendar.load()

    with pytest.raises(NotFoundError):
        farm.calendar.edit_form("no-such-log")


@pytest.mark.asyncio
async def test_today_marker(farm: Farm):
    await farm.login("admin")
    await farm.calendar.load()

    grid = farm.calendar.grid(TODAY)
    assert [cell.date for cell in grid if cell.is_today] == [TODAY]


@pytest.mark.asyncio
async def test_new_feeding_form_defaults(farm: Farm):
    await farm.login("timur")
    form = farm.calendar.new_form(dt.date(2024, 5, 3))
    assert form == FeedingLogForm(
        date="2024-05-03", feed_time="", barn=Barn.EAST, note="", barn_locked=True
    )
