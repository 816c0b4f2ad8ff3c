"""Goat management endpoints."""

from fastapi import APIRouter, Depends, Query, status

from goatfarm.application.schemas import (
    GoatForm,
    GoatFormResponse,
    GoatOut,
    GoatRowResponse,
    GoatTableResponse,
)
from goatfarm.application.services import GoatTableView
from goatfarm.domain.entities import Actor, Barn
from goatfarm.domain.exceptions import DashboardError
from goatfarm.infrastructure.dependencies import get_goat_table, require_actor
from goatfarm.presentation.api.errors import to_http_exception

router = APIRouter(prefix="/goats", tags=["Goats"])


def _table_response(table: GoatTableView) -> GoatTableResponse:
    return GoatTableResponse(
        barn_filter=table.barn_filter,
        barn_selectable=table.barn_selectable,
        rows=[
            GoatRowResponse(
                goat=GoatOut.model_validate(row.goat, from_attributes=True),
                can_edit=row.can_edit,
                can_delete=row.can_delete,
            )
            for row in table.rows()
        ],
    )


@router.get("", response_model=GoatTableResponse)
async def list_goats(
    barn: Barn | None = Query(None, description="Show only this barn (all barns when omitted)"),
    _actor: Actor = Depends(require_actor),
    table: GoatTableView = Depends(get_goat_table),
) -> GoatTableResponse:
    """Every goat of the herd, with the actions the actor may take on each row."""
    try:
        await table.load(barn)
    except DashboardError as e:
        raise to_http_exception(e)
    return _table_response(table)


@router.get("/form", response_model=GoatFormResponse)
async def new_goat_form(
    _actor: Actor = Depends(require_actor),
    table: GoatTableView = Depends(get_goat_table),
) -> GoatFormResponse:
    """Blank add form, barn pre-filled for the actor."""
    form = table.new_form()
    return GoatFormResponse(**form.model_dump())


@router.get("/{goat_id}", response_model=GoatOut)
async def get_goat(
    goat_id: str,
    _actor: Actor = Depends(require_actor),
    table: GoatTableView = Depends(get_goat_table),
) -> GoatOut:
    try:
        goat = await table.resolve(goat_id)
    except DashboardError as e:
        raise to_http_exception(e)
    return GoatOut.model_validate(goat, from_attributes=True)


@router.get("/{goat_id}/form", response_model=GoatFormResponse)
async def edit_goat_form(
    goat_id: str,
    _actor: Actor = Depends(require_actor),
    table: GoatTableView = Depends(get_goat_table),
) -> GoatFormResponse:
    """Edit form prefilled from the goat; ``can_delete`` gates its Delete shortcut."""
    try:
        form, can_delete = await table.edit_form(goat_id)
    except DashboardError as e:
        raise to_http_exception(e)
    return GoatFormResponse(**form.model_dump(), can_delete=can_delete)


@router.post("", response_model=GoatOut, status_code=status.HTTP_201_CREATED)
async def create_goat(
    form: GoatForm,
    _actor: Actor = Depends(require_actor),
    table: GoatTableView = Depends(get_goat_table),
) -> GoatOut:
    try:
        goat = await table.add(form)
    except DashboardError as e:
        raise to_http_exception(e)
    return GoatOut.model_validate(goat, from_attributes=True)


@router.put("/{goat_id}", response_model=GoatOut)
async def update_goat(
    goat_id: str,
    form: GoatForm,
    _actor: Actor = Depends(require_actor),
    table: GoatTableView = Depends(get_goat_table),
) -> GoatOut:
    try:
        goat = await table.save(goat_id, form)
    except DashboardError as e:
        raise to_http_exception(e)
    return GoatOut.model_validate(goat, from_attributes=True)


@router.delete("/{goat_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_goat(
    goat_id: str,
    _actor: Actor = Depends(require_actor),
    table: GoatTableView = Depends(get_goat_table),
) -> None:
    try:
        await table.remove(goat_id)
    except DashboardError as e:
        raise to_http_exception(e)
