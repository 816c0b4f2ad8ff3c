"""View models for the dashboard pages: stats cards, goat table, feeding calendar.

Views hold the locally displayed records and decide, per record, which
actions the current actor is offered. They never change local state before
the farm API has confirmed a mutation.
"""

import datetime as dt
import logging
from dataclasses import dataclass, field

from goatfarm.application.schemas import FeedingLogForm, GoatForm
from goatfarm.application.services.feeding_log_service import FeedingLogService
from goatfarm.application.services.goat_service import GoatService
from goatfarm.application.services.record_collection import RecordCollection
from goatfarm.application.services.session_service import SessionService
from goatfarm.domain.authorization import can_choose_barn, can_manage
from goatfarm.domain.calendar import CalendarMonth, bucket
from goatfarm.domain.entities import Barn, FeedingLog, Goat, GoatStats
from goatfarm.domain.exceptions import NotFoundError

logger = logging.getLogger(__name__)


# ── Dashboard summary ────────────────────────────────────────────────


@dataclass
class StatCard:
    title: str
    value: int
    caption: str


@dataclass
class DashboardSummary:
    greeting: str
    stats: GoatStats
    cards: list[StatCard] = field(default_factory=list)


async def load_dashboard_summary(
    goat_service: GoatService, session: SessionService
) -> DashboardSummary:
    """Build the landing page of an authenticated actor."""
    actor = session.require_actor()
    stats = await goat_service.goat_stats()
    cards = [
        StatCard(title="Total Goats", value=stats.total, caption="Across all barns"),
        StatCard(
            title=f"{Barn.WEST.label} (Kandang Barat)",
            value=stats.west,
            caption="Goats in the western barn",
        ),
        StatCard(
            title=f"{Barn.EAST.label} (Kandang Timur)",
            value=stats.east,
            caption="Goats in the eastern barn",
        ),
    ]
    return DashboardSummary(
        greeting=f"Welcome back, {actor.username}! Here's an overview of your farm.",
        stats=stats,
        cards=cards,
    )


# ── Goat table ───────────────────────────────────────────────────────


@dataclass
class GoatRow:
    goat: Goat
    can_edit: bool
    can_delete: bool


class GoatTableView:
    """The goat management table with its optional barn filter."""

    def __init__(self, service: GoatService, session: SessionService):
        self._service = service
        self._session = session
        self.barn_filter: Barn | None = None
        self.collection: RecordCollection[Goat] = RecordCollection("goat")

    async def load(self, barn_filter: Barn | None = None) -> list[GoatRow]:
        self.barn_filter = barn_filter
        self.collection.replace_all(await self._service.list_goats(barn_filter))
        return self.rows()

    def rows(self) -> list[GoatRow]:
        actor = self._session.actor
        return [
            GoatRow(
                goat=goat,
                can_edit=can_manage(actor, goat.barn),
                can_delete=can_manage(actor, goat.barn),
            )
            for goat in self.collection.items
        ]

    @property
    def barn_selectable(self) -> bool:
        return can_choose_barn(self._session.actor)

    def new_form(self) -> GoatForm:
        return GoatForm.blank(self._session.require_actor())

    async def edit_form(self, goat_id: str) -> tuple[GoatForm, bool]:
        """Prefilled form for ``goat_id`` and whether its Delete shortcut is shown."""
        goat = await self.resolve(goat_id)
        actor = self._session.require_actor()
        return GoatForm.from_goat(goat, actor), can_manage(actor, goat.barn)

    async def resolve(self, goat_id: str) -> Goat:
        """The displayed goat, or the farm API's copy when it is not listed."""
        goat = self.collection.get(goat_id)
        if goat is None:
            goat = await self._service.get_goat(goat_id)
        return goat

    async def add(self, form: GoatForm) -> Goat:
        return await self.collection.create(lambda: self._service.create_goat(form))

    async def save(self, goat_id: str, form: GoatForm) -> Goat:
        goat = await self.resolve(goat_id)
        return await self.collection.update(
            goat_id, lambda: self._service.update_goat(goat, form)
        )

    async def remove(self, goat_id: str) -> None:
        """Delete ``goat_id``; an id that is already gone is not an error."""
        try:
            goat = await self.resolve(goat_id)
        except NotFoundError:
            self.collection.remove_local(goat_id)
            return
        await self.collection.delete(goat_id, lambda: self._service.delete_goat(goat))


# ── Feeding calendar ─────────────────────────────────────────────────


@dataclass
class FeedingEntry:
    log: FeedingLog
    can_edit: bool
    can_delete: bool


@dataclass
class CalendarCell:
    date: dt.date
    is_today: bool
    entries: list[FeedingEntry]


class FeedingCalendarView:
    """Month grid of feeding logs; re-bucketed whenever logs or month change."""

    def __init__(
        self,
        service: FeedingLogService,
        session: SessionService,
        month: CalendarMonth | None = None,
    ):
        self._service = service
        self._session = session
        self.month = month or CalendarMonth.containing(dt.date.today())
        self.collection: RecordCollection[FeedingLog] = RecordCollection("feeding log")

    async def load(self, month: CalendarMonth | None = None) -> list[CalendarCell]:
        if month is not None:
            self.month = month
        self.collection.replace_all(await self._service.list_feeding_logs(self.month))
        logger.debug("Loaded %d feeding logs for %s", len(self.collection), self.month.label)
        return self.grid()

    async def next_month(self) -> list[CalendarCell]:
        return await self.load(self.month.next())

    async def previous_month(self) -> list[CalendarCell]:
        return await self.load(self.month.previous())

    def grid(self, today: dt.date | None = None) -> list[CalendarCell]:
        actor = self._session.actor
        today = today or dt.date.today()
        return [
            CalendarCell(
                date=day.date,
                is_today=day.is_today(today),
                entries=[
                    FeedingEntry(
                        log=log,
                        can_edit=can_manage(actor, log.barn),
                        can_delete=can_manage(actor, log.barn),
                    )
                    for log in day.records
                ],
            )
            for day in bucket(self.collection.items, self.month)
        ]

    def new_form(self, day: dt.date | None = None) -> FeedingLogForm:
        return FeedingLogForm.blank(self._session.require_actor(), day)

    def edit_form(self, log_id: str) -> tuple[FeedingLogForm, bool]:
        """Prefilled form for ``log_id`` and whether its Delete shortcut is shown."""
        log = self._require(log_id)
        actor = self._session.require_actor()
        return FeedingLogForm.from_log(log, actor), can_manage(actor, log.barn)

    async def add(self, form: FeedingLogForm) -> FeedingLog:
        return await self.collection.create(lambda: self._service.create_feeding_log(form))

    async def save(self, log_id: str, form: FeedingLogForm) -> FeedingLog:
        log = self._require(log_id)
        return await self.collection.update(
            log_id, lambda: self._service.update_feeding_log(log, form)
        )

    async def remove(self, log_id: str) -> None:
        log = self.collection.get(log_id)
        if log is None:
            return
        await self.collection.delete(log_id, lambda: self._service.delete_feeding_log(log))

    def _require(self, log_id: str) -> FeedingLog:
        log = self.collection.get(log_id)
        if log is None:
            raise NotFoundError("FeedingLog", log_id)
        return log
