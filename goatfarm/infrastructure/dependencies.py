"""FastAPI dependency injection — wires infrastructure to the application layer.

The dashboard serves one operator, like a browser tab: a single session
context and a single set of views live for the whole process, built in the
application lifespan and stored on ``app.state``.
"""

import logging
from dataclasses import dataclass

from fastapi import Depends, HTTPException, Request, status

from goatfarm.application.interfaces import AuthGateway, FeedingLogGateway, GoatGateway
from goatfarm.application.services import (
    FeedingCalendarView,
    FeedingLogService,
    GoatService,
    GoatTableView,
    SessionService,
)
from goatfarm.config import Settings, get_settings
from goatfarm.domain.entities import Actor
from goatfarm.infrastructure.demo import DemoFarmGateway
from goatfarm.infrastructure.farm_api import FarmApiClient
from goatfarm.infrastructure.storage import JsonFileSessionStorage

logger = logging.getLogger(__name__)

LOGIN_PATH = "/login"


@dataclass
class DashboardContainer:
    """Everything the routes need, built once per process."""

    session: SessionService
    goat_service: GoatService
    feeding_log_service: FeedingLogService
    goat_table: GoatTableView
    feeding_calendar: FeedingCalendarView


class _SessionCredential:
    """Late-bound token lookup: the gateway exists before the session does."""

    def __init__(self) -> None:
        self.session: SessionService | None = None

    def __call__(self) -> str | None:
        return self.session.credential if self.session is not None else None


def build_container(
    settings: Settings | None = None,
    *,
    gateway: AuthGateway | None = None,
    session: SessionService | None = None,
) -> DashboardContainer:
    """Wire gateway, session and views from settings (or injected fakes)."""
    settings = settings or get_settings()
    credential = _SessionCredential()

    if gateway is None:
        if settings.demo_mode:
            logger.warning("Demo mode enabled: serving the in-memory sample herd")
            gateway = DemoFarmGateway(credential_provider=credential)
        else:
            gateway = FarmApiClient(
                base_url=settings.farm_api_base_url,
                credential_provider=credential,
                timeout=settings.request_timeout_seconds,
            )

    if session is None:
        session = SessionService(gateway, JsonFileSessionStorage(settings.session_file))
    credential.session = session

    if not isinstance(gateway, GoatGateway) or not isinstance(gateway, FeedingLogGateway):
        raise TypeError("The farm gateway must implement the goat and feeding log ports")

    goat_service = GoatService(gateway, session)
    feeding_log_service = FeedingLogService(gateway, session)
    return DashboardContainer(
        session=session,
        goat_service=goat_service,
        feeding_log_service=feeding_log_service,
        goat_table=GoatTableView(goat_service, session),
        feeding_calendar=FeedingCalendarView(feeding_log_service, session),
    )


def get_container(request: Request) -> DashboardContainer:
    return request.app.state.container


def get_session_service(
    container: DashboardContainer = Depends(get_container),
) -> SessionService:
    return container.session


def require_actor(
    session: SessionService = Depends(get_session_service),
) -> Actor:
    """Navigation guard: dashboard pages need an authenticated actor."""
    if not session.is_authenticated:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail={"message": "Authentication required", "redirect": LOGIN_PATH},
        )
    return session.require_actor()


def get_goat_service(
    container: DashboardContainer = Depends(get_container),
) -> GoatService:
    return container.goat_service


def get_goat_table(
    container: DashboardContainer = Depends(get_container),
) -> GoatTableView:
    return container.goat_table


def get_feeding_calendar(
    container: DashboardContainer = Depends(get_container),
) -> FeedingCalendarView:
    return container.feeding_calendar
