"""Farm API client — implements the auth, goat and feeding log gateways.

Talks JSON to the farm backend using httpx. Every request after login
carries ``Authorization: Bearer <token>``; the token is read from the
injected credential provider at request time, so a logout takes effect
immediately.
"""

import logging
from collections.abc import Callable
from typing import Any

import httpx
from pydantic import ValidationError as PydanticValidationError

from goatfarm.application.interfaces import AuthGateway, FeedingLogGateway, GoatGateway
from goatfarm.application.schemas import (
    FeedingLogCreate,
    FeedingLogResponse,
    GoatCreate,
    GoatResponse,
    GoatStatsResponse,
    LoginResponse,
)
from goatfarm.domain.entities import Barn, FeedingLog, Goat, GoatStats
from goatfarm.domain.exceptions import (
    AuthenticationError,
    AuthorizationError,
    NetworkError,
    NotFoundError,
    PermissionDeniedError,
    ValidationError,
)

logger = logging.getLogger(__name__)

CredentialProvider = Callable[[], str | None]

DEFAULT_BASE_URL = "https://api.karangnongkofarm.com/api"


class FarmApiClient(AuthGateway, GoatGateway, FeedingLogGateway):
    """Infrastructure adapter — connects to the farm REST API.

    Uses an injected ``httpx.AsyncClient`` when given (connection pooling,
    tests with ``MockTransport``), otherwise opens one client per request.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_BASE_URL,
        credential_provider: CredentialProvider | None = None,
        timeout: float = 10.0,
        http_client: httpx.AsyncClient | None = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._credential_provider = credential_provider or (lambda: None)
        self._timeout = timeout
        self._http_client = http_client

    def _get_headers(self) -> dict[str, str]:
        """Standard headers; the bearer token is added once a session exists."""
        headers = {
            "Content-Type": "application/json",
            "Accept": "application/json",
        }
        token = self._credential_provider()
        if token:
            headers["Authorization"] = f"Bearer {token}"
        return headers

    async def _get_client(self) -> httpx.AsyncClient:
        """Return the injected client or create a new one."""
        if self._http_client is not None:
            return self._http_client
        return httpx.AsyncClient(timeout=self._timeout)

    async def _request(
        self,
        method: str,
        path: str,
        *,
        entity: str,
        entity_id: str | None = None,
        params: dict[str, str] | None = None,
        json: dict[str, Any] | None = None,
    ) -> Any:
        """Send one request and return the decoded JSON body (None when empty)."""
        url = f"{self._base_url}{path}"
        client = await self._get_client()
        should_close = self._http_client is None

        logger.debug("%s %s params=%s", method, url, params)
        try:
            response = await client.request(
                method,
                url,
                headers=self._get_headers(),
                params=params,
                json=json,
                timeout=self._timeout,
            )
        except httpx.TimeoutException as exc:
            logger.warning("%s %s timed out after %.1fs", method, url, self._timeout)
            raise NetworkError(f"Request to {path} timed out") from exc
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            raise NetworkError(f"Farm API unreachable: {exc}") from exc
        finally:
            if should_close:
                await client.aclose()

        if response.is_success:
            if not response.content:
                return None
            try:
                return response.json()
            except ValueError as exc:
                raise NetworkError("Farm API returned invalid JSON", response.status_code) from exc

        self._raise_for_status(response, entity=entity, entity_id=entity_id)

    def _raise_for_status(
        self, response: httpx.Response, *, entity: str, entity_id: str | None
    ) -> None:
        """Translate a non-2xx response into a domain exception."""
        status = response.status_code
        message = self._error_message(response)
        logger.warning(
            "Farm API answered %d on %s %s: %s",
            status,
            response.request.method,
            response.request.url.path,
            message,
        )

        if status == 401:
            raise AuthorizationError()
        if status == 403:
            raise PermissionDeniedError(barn="", message=message or "Forbidden")
        if status == 404:
            raise NotFoundError(entity, entity_id or "")
        if status in (400, 422):
            raise ValidationError([], message=message or "Rejected by the farm API")
        raise NetworkError(message or response.reason_phrase, status)

    @staticmethod
    def _error_message(response: httpx.Response) -> str:
        try:
            data = response.json()
        except ValueError:
            return response.text
        if isinstance(data, dict):
            for key in ("message", "detail", "error"):
                if isinstance(data.get(key), str):
                    return data[key]
        return response.text

    @staticmethod
    def _parse(model: type, data: Any, *, many: bool = False) -> Any:
        """Validate a response body into DTOs; a malformed body is a NetworkError."""
        try:
            if many:
                if not isinstance(data, list):
                    raise NetworkError("Farm API returned a non-list collection")
                return [model.model_validate(item) for item in data]
            return model.model_validate(data)
        except PydanticValidationError as exc:
            raise NetworkError(f"Unexpected {model.__name__} payload: {exc}") from exc

    # ── Authentication ──────────────────────────────────────────────

    async def login(self, username: str, password: str) -> LoginResponse:
        try:
            data = await self._request(
                "POST",
                "/login",
                entity="User",
                json={"username": username, "password": password},
            )
        except AuthorizationError as exc:
            raise AuthenticationError() from exc
        return self._parse(LoginResponse, data)

    # ── Goats ───────────────────────────────────────────────────────

    async def list_goats(self, barn: Barn | None = None) -> list[Goat]:
        params = {"barn": barn.value} if barn is not None else None
        data = await self._request("GET", "/goats", entity="Goat", params=params)
        return [item.to_entity() for item in self._parse(GoatResponse, data, many=True)]

    async def get_goat(self, goat_id: str) -> Goat:
        data = await self._request("GET", f"/goats/{goat_id}", entity="Goat", entity_id=goat_id)
        return self._parse(GoatResponse, data).to_entity()

    async def create_goat(self, data: GoatCreate) -> Goat:
        body = await self._request("POST", "/goats", entity="Goat", json=data.model_dump(mode="json"))
        return self._parse(GoatResponse, body).to_entity()

    async def update_goat(self, goat_id: str, data: GoatCreate) -> Goat:
        body = await self._request(
            "PUT",
            f"/goats/{goat_id}",
            entity="Goat",
            entity_id=goat_id,
            json=data.model_dump(mode="json"),
        )
        return self._parse(GoatResponse, body).to_entity()

    async def delete_goat(self, goat_id: str) -> None:
        await self._request("DELETE", f"/goats/{goat_id}", entity="Goat", entity_id=goat_id)

    async def goat_stats(self) -> GoatStats:
        data = await self._request("GET", "/goats/stats", entity="GoatStats")
        return self._parse(GoatStatsResponse, data).to_entity()

    # ── Feeding logs ────────────────────────────────────────────────

    async def list_feeding_logs(
        self, *, year: int | None = None, month: int | None = None
    ) -> list[FeedingLog]:
        params: dict[str, str] = {}
        if year is not None:
            params["year"] = f"{year:04d}"
        if month is not None:
            params["month"] = f"{month:02d}"
        data = await self._request(
            "GET", "/feed-logs", entity="FeedingLog", params=params or None
        )
        return [item.to_entity() for item in self._parse(FeedingLogResponse, data, many=True)]

    async def create_feeding_log(self, data: FeedingLogCreate) -> FeedingLog:
        body = await self._request(
            "POST", "/feed-logs", entity="FeedingLog", json=data.model_dump(mode="json")
        )
        return self._parse(FeedingLogResponse, body).to_entity()

    async def update_feeding_log(self, log_id: str, data: FeedingLogCreate) -> FeedingLog:
        body = await self._request(
            "PUT",
            f"/feed-logs/{log_id}",
            entity="FeedingLog",
            entity_id=log_id,
            json=data.model_dump(mode="json"),
        )
        return self._parse(FeedingLogResponse, body).to_entity()

    async def delete_feeding_log(self, log_id: str) -> None:
        await self._request(
            "DELETE", f"/feed-logs/{log_id}", entity="FeedingLog", entity_id=log_id
        )
