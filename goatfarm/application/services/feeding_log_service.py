"""Application service (use case) for feeding log operations."""

import logging

from goatfarm.application.interfaces import FeedingLogGateway
from goatfarm.application.schemas import FeedingLogForm
from goatfarm.application.services.record_service import RecordService
from goatfarm.application.services.session_service import SessionService
from goatfarm.domain.calendar import CalendarMonth
from goatfarm.domain.entities import FeedingLog

logger = logging.getLogger(__name__)


class FeedingLogService(RecordService):
    """CRUD façade over the remote feeding log collection."""

    def __init__(self, gateway: FeedingLogGateway, session: SessionService):
        super().__init__(session)
        self._gateway = gateway

    async def list_feeding_logs(self, month: CalendarMonth | None = None) -> list[FeedingLog]:
        """List logs, restricted to ``month`` when given.

        The month filter is sent to the farm API and applied again locally,
        so a server ignoring the query still yields only that month.
        """
        if month is None:
            return await self._call(self._gateway.list_feeding_logs())

        logs = await self._call(
            self._gateway.list_feeding_logs(year=month.year, month=month.month)
        )
        return [log for log in logs if month.contains(log.date)]

    async def create_feeding_log(self, form: FeedingLogForm) -> FeedingLog:
        payload = form.with_defaults(self._session.require_actor()).to_create()
        self._authorize(payload.barn)
        log = await self._call(self._gateway.create_feeding_log(payload))
        logger.info("Created feeding log %s on %s", log.id, log.date.isoformat())
        return log

    async def update_feeding_log(self, log: FeedingLog, form: FeedingLogForm) -> FeedingLog:
        payload = form.with_defaults(self._session.require_actor(), log).to_create()
        self._authorize(log.barn, payload.barn)
        updated = await self._call(self._gateway.update_feeding_log(log.id, payload))
        if updated.user_id is None:
            updated.user_id = log.user_id
        logger.info("Updated feeding log %s", updated.id)
        return updated

    async def delete_feeding_log(self, log: FeedingLog) -> None:
        self._authorize(log.barn)
        await self._call(self._gateway.delete_feeding_log(log.id))
        logger.info("Deleted feeding log %s", log.id)
