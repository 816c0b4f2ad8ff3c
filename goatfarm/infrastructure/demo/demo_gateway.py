"""In-memory farm backend for demo mode and tests.

Selected explicitly with ``DEMO_MODE=true``; it never stands in for the real
farm API when that one fails. It applies the same rules the real server
does: a bearer token is required, handlers may only mutate their own barn,
and the stats are counted from the herd itself so ``total == west + east``.
"""

import datetime as dt
import logging
from collections.abc import Callable
from itertools import count

from goatfarm.application.interfaces import AuthGateway, FeedingLogGateway, GoatGateway
from goatfarm.application.schemas import FeedingLogCreate, GoatCreate, LoginResponse
from goatfarm.domain.authorization import can_manage
from goatfarm.domain.entities import (
    Actor,
    Admin,
    Barn,
    FeedingLog,
    Goat,
    GoatGender,
    GoatStats,
    GoatStatus,
    Handler,
    actor_to_payload,
)
from goatfarm.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NotFoundError,
    PermissionDeniedError,
)

logger = logging.getLogger(__name__)

DEMO_PASSWORD = "demo"

_DEMO_USERS: dict[str, Actor] = {
    "admin": Admin(id="1", username="admin"),
    "barat": Handler(id="2", username="barat", barn=Barn.WEST),
    "timur": Handler(id="3", username="timur", barn=Barn.EAST),
}


class DemoFarmGateway(AuthGateway, GoatGateway, FeedingLogGateway):
    """Auth, goat and feeding log gateways backed by Python lists."""

    def __init__(
        self,
        credential_provider: Callable[[], str | None] | None = None,
        *,
        seed: bool = True,
        today: dt.date | None = None,
    ):
        self._credential_provider = credential_provider or (lambda: None)
        self._tokens: dict[str, Actor] = {}
        self._goats: list[Goat] = []
        self._logs: list[FeedingLog] = []
        self._ids = count(1)
        if seed:
            self._seed(today or dt.date.today())

    def _next_id(self) -> str:
        return str(next(self._ids))

    def _seed(self, today: dt.date) -> None:
        samples = [
            ("G001", 35.5, 14, GoatGender.FEMALE, GoatStatus.HEALTHY, Barn.WEST),
            ("G002", 42.0, 20, GoatGender.MALE, GoatStatus.HEALTHY, Barn.WEST),
            ("G003", 28.3, 9, GoatGender.FEMALE, GoatStatus.SICK, Barn.WEST),
            ("G004", 38.7, 16, GoatGender.MALE, GoatStatus.HEALTHY, Barn.EAST),
            ("G005", 31.2, 11, GoatGender.FEMALE, GoatStatus.HEALTHY, Barn.EAST),
        ]
        for tag, weight, age, gender, status, barn in samples:
            self._goats.append(
                Goat(
                    id=self._next_id(),
                    tag=tag,
                    weight=weight,
                    age=age,
                    gender=gender,
                    status=status,
                    barn=barn,
                )
            )

        first = today.replace(day=1)
        feedings = [
            (first, dt.time(7, 0), Barn.WEST, "Morning hay", "2"),
            (first, dt.time(7, 30), Barn.EAST, "Morning hay", "3"),
            (today, dt.time(16, 0), Barn.WEST, "Concentrate", "2"),
        ]
        for day, feed_time, barn, note, user_id in feedings:
            self._logs.append(
                FeedingLog(
                    id=self._next_id(),
                    date=day,
                    feed_time=feed_time,
                    barn=barn,
                    note=note,
                    user_id=user_id,
                )
            )

    # ── Request context ─────────────────────────────────────────────

    def _caller(self) -> Actor:
        token = self._credential_provider()
        actor = self._tokens.get(token or "")
        if actor is None:
            raise AuthorizationError()
        return actor

    def _check_barn(self, actor: Actor, *barns: Barn) -> None:
        for barn in barns:
            if not can_manage(actor, barn):
                raise PermissionDeniedError(barn.value)

    # ── Authentication ──────────────────────────────────────────────

    async def login(self, username: str, password: str) -> LoginResponse:
        actor = _DEMO_USERS.get(username)
        if actor is None or password != DEMO_PASSWORD:
            raise AuthenticationError()
        # One active token per user: a new login ends the previous session.
        self._tokens = {t: a for t, a in self._tokens.items() if a != actor}
        token = f"demo-{actor.username}-{self._next_id()}"
        self._tokens[token] = actor
        logger.info("Demo login for '%s'", username)
        return LoginResponse(token=token, user=actor_to_payload(actor))

    # ── Goats ───────────────────────────────────────────────────────

    def _find_goat(self, goat_id: str) -> Goat:
        goat = next((g for g in self._goats if g.id == goat_id), None)
        if goat is None:
            raise NotFoundError("Goat", goat_id)
        return goat

    async def list_goats(self, barn: Barn | None = None) -> list[Goat]:
        self._caller()
        return [_copy_goat(g) for g in self._goats if barn is None or g.barn == barn]

    async def get_goat(self, goat_id: str) -> Goat:
        self._caller()
        return _copy_goat(self._find_goat(goat_id))

    async def create_goat(self, data: GoatCreate) -> Goat:
        self._check_barn(self._caller(), data.barn)
        goat = Goat(id=self._next_id(), **data.model_dump())
        self._goats.append(goat)
        return _copy_goat(goat)

    async def update_goat(self, goat_id: str, data: GoatCreate) -> Goat:
        actor = self._caller()
        goat = self._find_goat(goat_id)
        self._check_barn(actor, goat.barn, data.barn)
        for key, value in data.model_dump().items():
            setattr(goat, key, value)
        return _copy_goat(goat)

    async def delete_goat(self, goat_id: str) -> None:
        actor = self._caller()
        goat = self._find_goat(goat_id)
        self._check_barn(actor, goat.barn)
        self._goats.remove(goat)

    async def goat_stats(self) -> GoatStats:
        self._caller()
        west = sum(1 for g in self._goats if g.barn == Barn.WEST)
        east = sum(1 for g in self._goats if g.barn == Barn.EAST)
        return GoatStats(total=west + east, west=west, east=east)

    # ── Feeding logs ────────────────────────────────────────────────

    def _find_log(self, log_id: str) -> FeedingLog:
        log = next((entry for entry in self._logs if entry.id == log_id), None)
        if log is None:
            raise NotFoundError("FeedingLog", log_id)
        return log

    async def list_feeding_logs(
        self, *, year: int | None = None, month: int | None = None
    ) -> list[FeedingLog]:
        self._caller()
        return [
            _copy_log(log)
            for log in self._logs
            if (year is None or log.date.year == year)
            and (month is None or log.date.month == month)
        ]

    async def create_feeding_log(self, data: FeedingLogCreate) -> FeedingLog:
        actor = self._caller()
        self._check_barn(actor, data.barn)
        log = FeedingLog(id=self._next_id(), user_id=actor.id, **data.model_dump())
        self._logs.append(log)
        return _copy_log(log)

    async def update_feeding_log(self, log_id: str, data: FeedingLogCreate) -> FeedingLog:
        actor = self._caller()
        log = self._find_log(log_id)
        self._check_barn(actor, log.barn, data.barn)
        for key, value in data.model_dump().items():
            setattr(log, key, value)
        return _copy_log(log)

    async def delete_feeding_log(self, log_id: str) -> None:
        actor = self._caller()
        log = self._find_log(log_id)
        self._check_barn(actor, log.barn)
        self._logs.remove(log)


def _copy_goat(goat: Goat) -> Goat:
    return Goat(**vars(goat))


def _copy_log(log: FeedingLog) -> FeedingLog:
    return FeedingLog(**vars(log))
