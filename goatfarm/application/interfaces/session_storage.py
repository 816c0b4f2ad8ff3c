"""Abstract key-value storage (port) for the persisted session."""

from abc import ABC, abstractmethod


class SessionStorage(ABC):
    """Port for the persistent store holding the ``token`` and ``user`` keys."""

    @abstractmethod
    def get(self, key: str) -> str | None:
        """Return the stored value or None when the key is absent."""
        ...

    @abstractmethod
    def set(self, key: str, value: str) -> None:
        """Store ``value`` under ``key``, replacing any previous value."""
        ...

    @abstractmethod
    def remove(self, key: str) -> None:
        """Delete ``key``; a missing key is not an error."""
        ...
