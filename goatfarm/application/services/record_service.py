"""Shared plumbing of the goat and feeding log services."""

import logging
from collections.abc import Awaitable
from typing import TypeVar

from goatfarm.application.services.session_service import SessionService
from goatfarm.domain.authorization import can_manage
from goatfarm.domain.entities import Actor, Barn
from goatfarm.domain.exceptions import AuthorizationError, PermissionDeniedError

logger = logging.getLogger(__name__)

T = TypeVar("T")


class RecordService:
    """Base for the CRUD façades. Depends on the session context (DI)."""

    def __init__(self, session: SessionService):
        self._session = session

    async def _call(self, operation: Awaitable[T]) -> T:
        """Await a gateway call; a 401 ends the session before propagating."""
        try:
            return await operation
        except AuthorizationError:
            self._session.force_logout()
            raise

    def _authorize(self, *barns: Barn) -> Actor:
        """Return the actor if it may manage every barn given, else refuse locally."""
        actor = self._session.require_actor()
        for barn in barns:
            if not can_manage(actor, barn):
                logger.info(
                    "Refused mutation of barn '%s' for '%s'", barn.value, actor.username
                )
                raise PermissionDeniedError(barn.value)
        return actor
