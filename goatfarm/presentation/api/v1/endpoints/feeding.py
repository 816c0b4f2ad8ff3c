"""Feeding schedule endpoints: the month calendar and its logs."""

import datetime as dt

from fastapi import APIRouter, Depends, Query, status

from goatfarm.application.schemas import (
    CalendarResponse,
    FeedingLogForm,
    FeedingLogFormResponse,
)
from goatfarm.application.schemas.dashboard import (
    CalendarCellResponse,
    FeedingEntryResponse,
    FeedingLogOut,
)
from goatfarm.application.services import FeedingCalendarView
from goatfarm.domain.authorization import can_choose_barn
from goatfarm.domain.calendar import CalendarMonth
from goatfarm.domain.entities import Actor
from goatfarm.domain.exceptions import DashboardError
from goatfarm.infrastructure.dependencies import get_feeding_calendar, require_actor
from goatfarm.presentation.api.errors import to_http_exception

router = APIRouter(prefix="/feeding", tags=["Feeding schedule"])


def _calendar_response(calendar: FeedingCalendarView, actor: Actor) -> CalendarResponse:
    return CalendarResponse(
        year=calendar.month.year,
        month=calendar.month.month,
        label=calendar.month.label,
        barn_selectable=can_choose_barn(actor),
        cells=[
            CalendarCellResponse(
                date=cell.date,
                is_today=cell.is_today,
                entries=[
                    FeedingEntryResponse(
                        log=FeedingLogOut.model_validate(entry.log, from_attributes=True),
                        can_edit=entry.can_edit,
                        can_delete=entry.can_delete,
                    )
                    for entry in cell.entries
                ],
            )
            for cell in calendar.grid()
        ],
    )


@router.get("", response_model=CalendarResponse)
async def feeding_calendar(
    year: int | None = Query(None, ge=1, le=9999),
    month: int | None = Query(None, ge=1, le=12),
    actor: Actor = Depends(require_actor),
    calendar: FeedingCalendarView = Depends(get_feeding_calendar),
) -> CalendarResponse:
    """Month grid of feeding logs; defaults to the month currently shown."""
    target = CalendarMonth(
        year if year is not None else calendar.month.year,
        month if month is not None else calendar.month.month,
    )
    try:
        await calendar.load(target)
    except DashboardError as e:
        raise to_http_exception(e)
    return _calendar_response(calendar, actor)


@router.get("/form", response_model=FeedingLogFormResponse)
async def new_feeding_log_form(
    day: dt.date | None = Query(None, description="Day clicked in the calendar"),
    _actor: Actor = Depends(require_actor),
    calendar: FeedingCalendarView = Depends(get_feeding_calendar),
) -> FeedingLogFormResponse:
    return FeedingLogFormResponse(**calendar.new_form(day).model_dump())


@router.get("/{log_id}/form", response_model=FeedingLogFormResponse)
async def edit_feeding_log_form(
    log_id: str,
    _actor: Actor = Depends(require_actor),
    calendar: FeedingCalendarView = Depends(get_feeding_calendar),
) -> FeedingLogFormResponse:
    """Edit form of a log shown in the current month."""
    try:
        form, can_delete = calendar.edit_form(log_id)
    except DashboardError as e:
        raise to_http_exception(e)
    return FeedingLogFormResponse(**form.model_dump(), can_delete=can_delete)


@router.post("", response_model=FeedingLogOut, status_code=status.HTTP_201_CREATED)
async def create_feeding_log(
    form: FeedingLogForm,
    _actor: Actor = Depends(require_actor),
    calendar: FeedingCalendarView = Depends(get_feeding_calendar),
) -> FeedingLogOut:
    try:
        log = await calendar.add(form)
    except DashboardError as e:
        raise to_http_exception(e)
    return FeedingLogOut.model_validate(log, from_attributes=True)


@router.put("/{log_id}", response_model=FeedingLogOut)
async def update_feeding_log(
    log_id: str,
    form: FeedingLogForm,
    _actor: Actor = Depends(require_actor),
    calendar: FeedingCalendarView = Depends(get_feeding_calendar),
) -> FeedingLogOut:
    try:
        log = await calendar.save(log_id, form)
    except DashboardError as e:
        raise to_http_exception(e)
    return FeedingLogOut.model_validate(log, from_attributes=True)


@router.delete("/{log_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_feeding_log(
    log_id: str,
    _actor: Actor = Depends(require_actor),
    calendar: FeedingCalendarView = Depends(get_feeding_calendar),
) -> None:
    try:
        await calendar.remove(log_id)
    except DashboardError as e:
        raise to_http_exception(e)
