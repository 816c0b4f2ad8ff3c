"""Response schemas for the dashboard pages."""

import datetime as dt

from pydantic import BaseModel

from goatfarm.domain.entities import Barn, GoatGender, GoatStatus


class GoatOut(BaseModel):
    id: str
    tag: str
    weight: float
    age: int
    gender: GoatGender
    status: GoatStatus
    barn: Barn

    model_config = {"from_attributes": True}


class GoatRowResponse(BaseModel):
    """One table row; Edit/Delete are rendered only when allowed."""

    goat: GoatOut
    can_edit: bool
    can_delete: bool

    model_config = {"from_attributes": True}


class GoatTableResponse(BaseModel):
    barn_filter: Barn | None
    barn_selectable: bool
    rows: list[GoatRowResponse]


class GoatFormResponse(BaseModel):
    """Prefilled add/edit form with the state of its controls."""

    tag: str
    weight: str | float
    age: str | int
    gender: GoatGender
    status: GoatStatus
    barn: Barn
    barn_locked: bool
    can_delete: bool = False


class StatCardResponse(BaseModel):
    title: str
    value: int
    caption: str

    model_config = {"from_attributes": True}


class DashboardResponse(BaseModel):
    greeting: str
    total: int
    west: int
    east: int
    cards: list[StatCardResponse]


class FeedingLogOut(BaseModel):
    id: str
    date: dt.date
    feed_time: dt.time
    barn: Barn
    note: str
    user_id: str | None

    model_config = {"from_attributes": True}


class FeedingEntryResponse(BaseModel):
    log: FeedingLogOut
    can_edit: bool
    can_delete: bool

    model_config = {"from_attributes": True}


class CalendarCellResponse(BaseModel):
    date: dt.date
    is_today: bool
    entries: list[FeedingEntryResponse]

    model_config = {"from_attributes": True}


class CalendarResponse(BaseModel):
    year: int
    month: int
    label: str
    barn_selectable: bool
    cells: list[CalendarCellResponse]


class FeedingLogFormResponse(BaseModel):
    date: str
    feed_time: str
    barn: Barn
    note: str
    barn_locked: bool
    can_delete: bool = False
