"""In-memory list backing a view, changed only after the farm API confirms.

Each mutation is a command: the remote call is awaited first and the local
transition (append, replace by id, remove by id) is applied only when it
succeeds. A failed call leaves the list untouched.

While a mutation is in flight further mutations are refused, which is the
equivalent of disabling the submit button until the request returns.
"""

import logging
from collections.abc import Awaitable, Callable, Iterable
from typing import Generic, Protocol, TypeVar

from goatfarm.domain.exceptions import NotFoundError, SubmissionInProgressError

logger = logging.getLogger(__name__)


class _HasId(Protocol):
    id: str


E = TypeVar("E", bound=_HasId)


class RecordCollection(Generic[E]):
    """Locally cached records of one kind, in arrival order."""

    def __init__(self, name: str):
        self._name = name
        self._items: list[E] = []
        self._in_flight: str | None = None

    @property
    def items(self) -> list[E]:
        return list(self._items)

    @property
    def busy(self) -> bool:
        return self._in_flight is not None

    def __len__(self) -> int:
        return len(self._items)

    def get(self, record_id: str) -> E | None:
        return next((item for item in self._items if item.id == record_id), None)

    def replace_all(self, records: Iterable[E]) -> None:
        self._items = list(records)

    async def create(self, call: Callable[[], Awaitable[E]]) -> E:
        created = await self._run("create", call)
        self._items.append(created)
        return created

    async def update(self, record_id: str, call: Callable[[], Awaitable[E]]) -> E:
        updated = await self._run("update", call)
        self._items = [updated if item.id == record_id else item for item in self._items]
        return updated

    async def delete(self, record_id: str, call: Callable[[], Awaitable[None]]) -> None:
        """Delete remotely, then drop the id locally.

        A record the farm API no longer knows is already gone, so a
        NotFoundError removes it locally as well and is not re-raised.
        """
        try:
            await self._run("delete", call)
        except NotFoundError:
            logger.info("%s '%s' was already deleted remotely", self._name, record_id)
        self.remove_local(record_id)

    def remove_local(self, record_id: str) -> None:
        self._items = [item for item in self._items if item.id != record_id]

    async def _run(self, action: str, call: Callable[[], Awaitable]) -> object:
        if self._in_flight is not None:
            raise SubmissionInProgressError(f"{self._name} {self._in_flight}")
        self._in_flight = action
        try:
            return await call()
        finally:
            self._in_flight = None
