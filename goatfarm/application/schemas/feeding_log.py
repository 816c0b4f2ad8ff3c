"""Pydantic DTOs for feeding logs: wire payloads and the add/edit form."""

import datetime as dt

from pydantic import BaseModel, field_serializer, field_validator

from goatfarm.domain.authorization import can_choose_barn, default_barn
from goatfarm.domain.entities import Actor, Barn, FeedingLog
from goatfarm.domain.exceptions import ValidationError


def _truncate_to_day(value: object) -> object:
    """Keep only YYYY-MM-DD of a date string such as ``2024-05-01T00:00:00Z``."""
    if isinstance(value, str) and len(value) > 10:
        return value[:10]
    return value


def _format_time(value: dt.time) -> str:
    return value.isoformat(timespec="seconds" if value.second else "minutes")


class FeedingLogCreate(BaseModel):
    """Payload sent on create and on update. Never carries ``id`` or ``user_id``."""

    date: dt.date
    feed_time: dt.time
    barn: Barn
    note: str = ""

    @field_serializer("date", when_used="json")
    def _serialize_date(self, value: dt.date) -> str:
        return value.isoformat()

    @field_serializer("feed_time", when_used="json")
    def _serialize_feed_time(self, value: dt.time) -> str:
        return _format_time(value)


class FeedingLogResponse(BaseModel):
    """Feeding log as returned by the farm API."""

    id: str
    date: dt.date
    feed_time: dt.time
    barn: Barn
    note: str | None = ""
    user_id: str | None = None

    model_config = {"coerce_numbers_to_str": True}

    @field_validator("date", mode="before")
    @classmethod
    def _date_only(cls, value: object) -> object:
        return _truncate_to_day(value)

    def to_entity(self) -> FeedingLog:
        return FeedingLog(
            id=self.id,
            date=self.date,
            feed_time=self.feed_time,
            barn=self.barn,
            note=self.note or "",
            user_id=self.user_id,
        )


class FeedingLogForm(BaseModel):
    """Raw add/edit form input for a feeding log."""

    date: str = ""
    feed_time: str = ""
    barn: Barn | None = None
    note: str | None = None
    barn_locked: bool = False

    @classmethod
    def blank(cls, actor: Actor, day: dt.date | None = None) -> "FeedingLogForm":
        """Empty form for a new log, dated on the clicked day (today by default)."""
        return cls(
            date=(day or dt.date.today()).isoformat(),
            barn=default_barn(actor),
            note="",
            barn_locked=not can_choose_barn(actor),
        )

    @classmethod
    def from_log(cls, log: FeedingLog, actor: Actor | None = None) -> "FeedingLogForm":
        return cls(
            date=log.date.isoformat(),
            feed_time=_format_time(log.feed_time),
            barn=log.barn,
            note=log.note,
            barn_locked=actor is not None and not can_choose_barn(actor),
        )

    def with_defaults(
        self, actor: Actor, current: FeedingLog | None = None
    ) -> "FeedingLogForm":
        """Fill an omitted barn or note from the edited log, or for a new one from the actor."""
        update: dict[str, object] = {}
        if self.barn is None:
            update["barn"] = current.barn if current is not None else default_barn(actor)
        if self.note is None:
            update["note"] = current.note if current is not None else ""
        return self.model_copy(update=update) if update else self

    def to_create(self) -> FeedingLogCreate:
        """Validate the form and coerce it into a create/update payload.

        Only presence is required; the browser's date and time inputs are
        trusted for the format, so unparseable values are reported the same
        way as missing ones.
        """
        invalid: list[str] = []

        parsed_date: dt.date | None = None
        raw_date = self.date.strip()
        if raw_date:
            try:
                parsed_date = dt.date.fromisoformat(str(_truncate_to_day(raw_date)))
            except ValueError:
                parsed_date = None
        if parsed_date is None:
            invalid.append("date")

        parsed_time: dt.time | None = None
        raw_time = self.feed_time.strip()
        if raw_time:
            try:
                parsed_time = dt.time.fromisoformat(raw_time)
            except ValueError:
                parsed_time = None
        if parsed_time is None:
            invalid.append("feed_time")

        if self.barn is None:
            invalid.append("barn")

        if invalid:
            raise ValidationError(invalid)

        return FeedingLogCreate(
            date=parsed_date,
            feed_time=parsed_time,
            barn=self.barn,
            note=(self.note or "").strip(),
        )

