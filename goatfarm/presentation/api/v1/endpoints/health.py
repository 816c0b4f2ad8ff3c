"""Health check endpoint — no dependencies, always available."""

from fastapi import APIRouter

from goatfarm.config import get_settings

router = APIRouter(tags=["Health"])


@router.get("/health")
async def health_check() -> dict:
    """Reports the application version and whether demo data is served."""
    settings = get_settings()
    return {
        "status": "healthy",
        "version": settings.app_version,
        "environment": settings.app_env,
        "demo_mode": settings.demo_mode,
    }
