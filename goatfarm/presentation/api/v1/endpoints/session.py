"""Login, logout and the current session."""

from fastapi import APIRouter, Depends, HTTPException, status

from goatfarm.application.schemas import LoginRequest, SessionResponse
from goatfarm.application.services import SessionService
from goatfarm.domain.exceptions import AuthenticationError
from goatfarm.infrastructure.dependencies import get_session_service

router = APIRouter(prefix="/session", tags=["Session"])


@router.get("", response_model=SessionResponse)
async def current_session(
    session: SessionService = Depends(get_session_service),
) -> SessionResponse:
    """Who is logged in, if anyone."""
    return SessionResponse.from_actor(session.actor)


@router.post("/login", response_model=SessionResponse)
async def login(
    data: LoginRequest,
    session: SessionService = Depends(get_session_service),
) -> SessionResponse:
    """Authenticate against the farm API and start a session."""
    try:
        actor = await session.login(data.username, data.password)
    except AuthenticationError as e:
        raise HTTPException(status_code=status.HTTP_401_UNAUTHORIZED, detail=e.message)
    return SessionResponse.from_actor(actor)


@router.post("/logout", response_model=SessionResponse)
async def logout(
    session: SessionService = Depends(get_session_service),
) -> SessionResponse:
    """End the session; always succeeds."""
    session.logout()
    return SessionResponse.from_actor(None)
