"""Application service (use case) for goat operations."""

import logging

from goatfarm.application.interfaces import GoatGateway
from goatfarm.application.schemas import GoatForm
from goatfarm.application.services.record_service import RecordService
from goatfarm.application.services.session_service import SessionService
from goatfarm.domain.entities import Barn, Goat, GoatStats

logger = logging.getLogger(__name__)


class GoatService(RecordService):
    """CRUD façade over the remote goat collection, plus the herd stats."""

    def __init__(self, gateway: GoatGateway, session: SessionService):
        super().__init__(session)
        self._gateway = gateway

    async def list_goats(self, barn: Barn | None = None) -> list[Goat]:
        return await self._call(self._gateway.list_goats(barn))

    async def get_goat(self, goat_id: str) -> Goat:
        return await self._call(self._gateway.get_goat(goat_id))

    async def create_goat(self, form: GoatForm) -> Goat:
        payload = form.with_defaults(self._session.require_actor()).to_create()
        self._authorize(payload.barn)
        goat = await self._call(self._gateway.create_goat(payload))
        logger.info("Created goat '%s' in barn '%s'", goat.tag, goat.barn.value)
        return goat

    async def update_goat(self, goat: Goat, form: GoatForm) -> Goat:
        """Replace the mutable fields; fields left out of ``form`` keep their stored value."""
        payload = form.with_defaults(self._session.require_actor(), goat).to_create()
        self._authorize(goat.barn, payload.barn)
        updated = await self._call(self._gateway.update_goat(goat.id, payload))
        logger.info("Updated goat '%s'", updated.tag)
        return updated

    async def delete_goat(self, goat: Goat) -> None:
        self._authorize(goat.barn)
        await self._call(self._gateway.delete_goat(goat.id))
        logger.info("Deleted goat '%s'", goat.tag)

    async def goat_stats(self) -> GoatStats:
        stats = await self._call(self._gateway.goat_stats())
        if not stats.is_consistent:
            logger.warning(
                "Inconsistent herd stats from the farm API: total=%d west=%d east=%d",
                stats.total,
                stats.west,
                stats.east,
            )
        return stats
