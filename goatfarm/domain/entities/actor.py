"""Domain entity for the authenticated actor: an admin or a barn handler."""

from dataclasses import dataclass
from typing import Any, Union

from .barn import Barn

ADMIN_ROLE = "admin"


@dataclass(frozen=True)
class Admin:
    """Unrestricted actor: may manage records of every barn."""

    id: str
    username: str

    @property
    def role(self) -> str:
        return ADMIN_ROLE

    @property
    def barn(self) -> None:
        return None


@dataclass(frozen=True)
class Handler:
    """Actor restricted to exactly one barn."""

    id: str
    username: str
    barn: Barn

    @property
    def role(self) -> str:
        return self.barn.value


Actor = Union[Admin, Handler]


def actor_from_payload(payload: dict[str, Any]) -> Actor:
    """Build an actor from the farm API ``user`` object or a persisted snapshot.

    The API reports handlers either as ``role="barat"`` / ``role="timur"`` or
    as a non-admin role carrying a separate ``barn`` field.
    """
    if not isinstance(payload, dict):
        raise ValueError("User payload must be an object")

    user_id = payload.get("id")
    username = payload.get("username")
    if user_id is None or not username:
        raise ValueError("User payload is missing id or username")

    role = str(payload.get("role", "")).strip().lower()
    if role == ADMIN_ROLE:
        return Admin(id=str(user_id), username=str(username))

    try:
        barn = Barn.parse(role)
    except ValueError:
        barn_value = payload.get("barn")
        if not barn_value:
            raise ValueError(f"Unrecognized role without barn: {role!r}") from None
        barn = Barn.parse(barn_value)

    return Handler(id=str(user_id), username=str(username), barn=barn)


def actor_to_payload(actor: Actor) -> dict[str, Any]:
    """Serialize an actor into the snapshot persisted under the ``user`` key."""
    return {
        "id": actor.id,
        "username": actor.username,
        "role": actor.role,
        "barn": actor.barn.value if actor.barn is not None else None,
    }
