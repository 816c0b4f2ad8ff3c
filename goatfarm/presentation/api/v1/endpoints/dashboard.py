"""Dashboard landing page: herd statistics."""

from fastapi import APIRouter, Depends

from goatfarm.application.schemas import DashboardResponse, StatCardResponse
from goatfarm.application.services import load_dashboard_summary
from goatfarm.domain.entities import Actor
from goatfarm.domain.exceptions import DashboardError
from goatfarm.infrastructure.dependencies import (
    DashboardContainer,
    get_container,
    require_actor,
)
from goatfarm.presentation.api.errors import to_http_exception

router = APIRouter(prefix="/dashboard", tags=["Dashboard"])


@router.get("", response_model=DashboardResponse)
async def dashboard(
    _actor: Actor = Depends(require_actor),
    container: DashboardContainer = Depends(get_container),
) -> DashboardResponse:
    """Total head count and the count per barn."""
    try:
        summary = await load_dashboard_summary(container.goat_service, container.session)
    except DashboardError as e:
        raise to_http_exception(e)
    return DashboardResponse(
        greeting=summary.greeting,
        total=summary.stats.total,
        west=summary.stats.west,
        east=summary.stats.east,
        cards=[
            StatCardResponse.model_validate(card, from_attributes=True)
            for card in summary.cards
        ],
    )
