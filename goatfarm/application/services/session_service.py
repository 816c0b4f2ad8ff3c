"""Session store: who is logged in, and with which credential.

Lifecycle: anonymous → authenticated(actor, credential) → anonymous.
The actor snapshot and the credential are persisted under two keys so a
restarted dashboard can resume the session without logging in again.
"""

import json
import logging

from goatfarm.application.interfaces import AuthGateway, SessionStorage
from goatfarm.domain.entities import Actor, actor_from_payload, actor_to_payload
from goatfarm.domain.exceptions import (
    AuthenticationError,
    DashboardError,
    NotAuthenticatedError,
)

logger = logging.getLogger(__name__)

TOKEN_KEY = "token"
USER_KEY = "user"


class SessionService:
    """Explicit session context handed to every consumer that needs the actor."""

    def __init__(self, auth_gateway: AuthGateway, storage: SessionStorage):
        self._auth_gateway = auth_gateway
        self._storage = storage
        self._actor: Actor | None = None
        self._credential: str | None = None

    @property
    def actor(self) -> Actor | None:
        return self._actor

    @property
    def credential(self) -> str | None:
        return self._credential

    @property
    def is_authenticated(self) -> bool:
        return self._actor is not None and self._credential is not None

    def require_actor(self) -> Actor:
        if self._actor is None:
            raise NotAuthenticatedError()
        return self._actor

    async def login(self, username: str, password: str) -> Actor:
        """Authenticate against the farm API and persist the session.

        Every failure, including an unreachable server, surfaces as the same
        AuthenticationError. No retry is attempted.
        """
        try:
            result = await self._auth_gateway.login(username, password)
            actor = actor_from_payload(result.user)
        except (DashboardError, ValueError) as exc:
            logger.info("Login failed for '%s': %s", username, exc)
            raise AuthenticationError() from exc

        self._storage.set(TOKEN_KEY, result.token)
        self._storage.set(USER_KEY, json.dumps(actor_to_payload(actor)))
        self._actor = actor
        self._credential = result.token
        logger.info("Logged in as '%s' (role=%s)", actor.username, actor.role)
        return actor

    def logout(self) -> None:
        """Clear the persisted keys and return to anonymous, whatever the state."""
        self._storage.remove(TOKEN_KEY)
        self._storage.remove(USER_KEY)
        if self._actor is not None:
            logger.info("Logged out '%s'", self._actor.username)
        self._actor = None
        self._credential = None

    def force_logout(self, reason: str = "unauthorized") -> None:
        """Logout triggered by the farm API rejecting the credential."""
        logger.warning("Session ended by the farm API (%s)", reason)
        self.logout()

    def restore(self) -> bool:
        """Resume a persisted session without contacting the server.

        The credential is trusted as stored; an expired token is only
        noticed when the next API call answers 401. A snapshot that cannot
        be read is discarded.
        """
        token = self._storage.get(TOKEN_KEY)
        raw_user = self._storage.get(USER_KEY)
        if not token or not raw_user:
            return False

        try:
            actor = actor_from_payload(json.loads(raw_user))
        except (ValueError, TypeError) as exc:
            logger.warning("Discarding unreadable session snapshot: %s", exc)
            self.logout()
            return False

        self._actor = actor
        self._credential = token
        logger.info("Restored session for '%s'", actor.username)
        return True
