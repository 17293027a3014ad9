"""
Session cookie authentication.
"""

from fastapi import Depends, Request, Response

from comptable.config.settings import get_settings
from comptable.di.dependencies import get_session_store
from comptable.domain.exceptions import NotAuthenticatedError
from comptable.infrastructure.auth.session_store import SessionStore


async def get_current_login(
    request: Request,
    session_store: SessionStore = Depends(get_session_store),
) -> str:
    """
    Resolve the logged-in user from the session cookie.

    Args:
        request: Incoming request
        session_store: Session store from dependency injection

    Returns:
        Login of the authenticated user

    Raises:
        NotAuthenticatedError: If cookie missing, unknown or expired
    """
    token = request.cookies.get(get_settings().SESSION_COOKIE_NAME)
    login = await session_store.resolve(token) if token else None

    if login is None:
        raise NotAuthenticatedError()
    return login


async def open_session(
    response: Response, login: str, session_store: SessionStore
) -> str:
    """
    Create a session and attach its cookie to the response.

    Args:
        response: Outgoing response
        login: Authenticated login
        session_store: Session store

    Returns:
        Session token
    """
    settings = get_settings()
    # Expired sessions are otherwise only dropped when presented again
    await session_store.purge_expired()
    token = await session_store.create(login)
    response.set_cookie(
        key=settings.SESSION_COOKIE_NAME,
        value=token,
        max_age=settings.SESSION_TTL_SECONDS,
        httponly=True,
        samesite="lax",
        path="/",
    )
    return token
