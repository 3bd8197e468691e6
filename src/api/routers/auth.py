"""
Authentication API Router - Login und Session-Info.
"""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Request, Response, status
from pydantic import BaseModel

from api.auth_context import get_auth_context
from api.auth_middleware import get_session
from api.error_handling import handle_db_errors
from auth.models import User
from auth.session import Session


router = APIRouter(prefix="/auth", tags=["authentication"])


class LoginRequest(BaseModel):
    """Login-Request Model."""
    username: str
    password: str


class UserResponse(BaseModel):
    """Öffentliche Felder eines Users."""
    id: int
    username: str
    realname: str

    @classmethod
    def from_user(cls, user: User) -> "UserResponse":
        return cls(id=user.id, username=user.username, realname=user.realname)


class SessionResponse(BaseModel):
    """Session-Info Model."""
    authenticated: bool
    user: Optional[UserResponse] = None


@router.post("/login", response_model=UserResponse)
@handle_db_errors("user login")
def login(
    credentials: LoginRequest,
    request: Request,
    response: Response,
    session: Session = Depends(get_session),
):
    """
    User-Login mit Username und Passwort.

    Bei Erfolg wird das Session-Cookie gesetzt.
    """
    token = session.authenticate(credentials.username.strip(), credentials.password)
    if token is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid credentials"
        )

    context = get_auth_context(request)
    auth_config = context.config["auth"]
    response.set_cookie(
        key=context.cookie_name,
        value=token,
        httponly=True,
        secure=bool(auth_config.get("cookie_secure", False)),
        samesite="strict",
        max_age=auth_config.get("cookie_max_age"),
    )

    return UserResponse.from_user(session.user)


@router.get("/session", response_model=SessionResponse)
def get_session_info(session: Session = Depends(get_session)):
    """
    Gibt die Identität der aktuellen Session zurück (anonym oder User).
    """
    if session.user is None:
        return SessionResponse(authenticated=False)
    return SessionResponse(authenticated=True, user=UserResponse.from_user(session.user))
