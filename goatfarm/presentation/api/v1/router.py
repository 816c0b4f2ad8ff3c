"""V1 API router — aggregates all v1 endpoint routers."""

from fastapi import APIRouter

from goatfarm.presentation.api.v1.endpoints.health import router as health_router
from goatfarm.presentation.api.v1.endpoints.session import router as session_router
from goatfarm.presentation.api.v1.endpoints.dashboard import router as dashboard_router
from goatfarm.presentation.api.v1.endpoints.goats import router as goats_router
from goatfarm.presentation.api.v1.endpoints.feeding import router as feeding_router

router = APIRouter(prefix="/v1")
router.include_router(health_router)
router.include_router(session_router)
router.include_router(dashboard_router)
router.include_router(goats_router)
router.include_router(feeding_router)
