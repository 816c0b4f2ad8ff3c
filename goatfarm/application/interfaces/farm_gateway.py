"""Abstract gateways (ports) to the remote farm API.

Implementations translate HTTP failures into the domain exceptions:
401 → AuthorizationError (AuthenticationError on login), 403 →
PermissionDeniedError, 404 → NotFoundError, anything else → NetworkError.
"""

from abc import ABC, abstractmethod

from goatfarm.application.schemas import FeedingLogCreate, GoatCreate, LoginResponse
from goatfarm.domain.entities import Barn, FeedingLog, Goat, GoatStats


class AuthGateway(ABC):
    """Port for credential checks."""

    @abstractmethod
    async def login(self, username: str, password: str) -> LoginResponse:
        """Exchange credentials for a bearer token and the user object."""
        ...


class GoatGateway(ABC):
    """Port for the remote goat collection."""

    @abstractmethod
    async def list_goats(self, barn: Barn | None = None) -> list[Goat]:
        """List goats in arrival order, optionally restricted to one barn."""
        ...

    @abstractmethod
    async def get_goat(self, goat_id: str) -> Goat:
        """Retrieve a single goat."""
        ...

    @abstractmethod
    async def create_goat(self, data: GoatCreate) -> Goat:
        """Create a goat; the server assigns the id."""
        ...

    @abstractmethod
    async def update_goat(self, goat_id: str, data: GoatCreate) -> Goat:
        """Replace the mutable fields of a goat."""
        ...

    @abstractmethod
    async def delete_goat(self, goat_id: str) -> None:
        """Delete a goat permanently."""
        ...

    @abstractmethod
    async def goat_stats(self) -> GoatStats:
        """Head count, total and per barn."""
        ...


class FeedingLogGateway(ABC):
    """Port for the remote feeding log collection."""

    @abstractmethod
    async def list_feeding_logs(
        self, *, year: int | None = None, month: int | None = None
    ) -> list[FeedingLog]:
        """List feeding logs, optionally restricted to one month."""
        ...

    @abstractmethod
    async def create_feeding_log(self, data: FeedingLogCreate) -> FeedingLog:
        """Create a log; the server assigns the id and the creator."""
        ...

    @abstractmethod
    async def update_feeding_log(self, log_id: str, data: FeedingLogCreate) -> FeedingLog:
        """Replace the mutable fields of a log."""
        ...

    @abstractmethod
    async def delete_feeding_log(self, log_id: str) -> None:
        """Delete a log permanently."""
        ...
