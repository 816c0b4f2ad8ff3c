"""Session storage adapters."""

from .session_storage import InMemorySessionStorage, JsonFileSessionStorage

__all__ = ["InMemorySessionStorage", "JsonFileSessionStorage"]
