"""Pydantic DTOs for the login exchange and the session view."""

from typing import Any

from pydantic import BaseModel, Field

from goatfarm.domain.entities import Actor


class LoginRequest(BaseModel):
    """Credentials posted to ``/login``."""

    username: str = Field(..., min_length=1, examples=["barat"])
    password: str = Field(..., min_length=1)


class LoginResponse(BaseModel):
    """Answer of ``/login``: an opaque bearer token and the user object."""

    token: str = Field(..., min_length=1)
    user: dict[str, Any]


class SessionResponse(BaseModel):
    """Current session state as shown by the navigation chrome."""

    authenticated: bool
    id: str | None = None
    username: str | None = None
    role: str | None = None
    barn: str | None = None

    @classmethod
    def from_actor(cls, actor: Actor | None) -> "SessionResponse":
        if actor is None:
            return cls(authenticated=False)
        return cls(
            authenticated=True,
            id=actor.id,
            username=actor.username,
            role=actor.role,
            barn=actor.barn.value if actor.barn is not None else None,
        )
