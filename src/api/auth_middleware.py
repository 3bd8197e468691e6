"""
Session dependencies: every request gets a Session from the EXAUTH cookie.
"""

import logging
from typing import Generator

from fastapi import Depends, HTTPException, Request, status

from api.auth_context import get_auth_context
from auth.connection_pool_manager import PoolUnavailableError
from auth.models import User
from auth.session import Session, resolve_session

logger = logging.getLogger("uvicorn.error")


def get_session(request: Request) -> Generator[Session, None, None]:
    """
    Dependency: Session für den aktuellen Request.

    Liest das Session-Cookie, holt eine Verbindung aus dem Pool und gibt
    sie nach dem Request zurück. Ungültige oder fehlende Cookies ergeben
    eine anonyme Session.

    Raises:
        HTTPException: 503 wenn keine DB-Verbindung verfügbar ist
    """
    context = get_auth_context(request)
    session_key = request.cookies.get(context.cookie_name)

    try:
        session = resolve_session(context.pool_manager, session_key, **context.session_kwargs())
    except PoolUnavailableError as e:
        logger.error(f"Failed to get a db connection: {e}")
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Database connection unavailable"
        )

    try:
        yield session
    finally:
        session.close()


def require_user(session: Session = Depends(get_session)) -> User:
    """Dependency: logged-in user, 401 for anonymous sessions."""
    if session.user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated. Please log in."
        )
    return session.user
