"""
Centralized auth context storage for the app.
"""

from dataclasses import dataclass, field
from typing import Optional

from fastapi import HTTPException, Request, status

from auth.authenticator import Authenticator, PasswordAuthenticator
from auth.connection_pool_manager import ConnectionPoolManager
from auth.session_store import SessionStore
from auth.token_generator import TokenGenerator


@dataclass
class AuthContext:
    config: dict
    pool_manager: Optional[ConnectionPoolManager] = None
    session_store: SessionStore = field(default_factory=SessionStore)
    authenticator: Authenticator = field(default_factory=PasswordAuthenticator)
    token_generator: TokenGenerator = field(default_factory=TokenGenerator)

    @property
    def cookie_name(self) -> str:
        return self.config["auth"]["cookie_name"]

    def session_kwargs(self) -> dict:
        """Collaborators passed to every Session."""
        return {
            "store": self.session_store,
            "authenticator": self.authenticator,
            "token_generator": self.token_generator,
            "token_length": int(self.config["auth"]["token_length"]),
        }


def set_auth_context(app, context: AuthContext) -> None:
    """Attach auth context to the FastAPI app state."""
    app.state.auth_context = context


def get_auth_context(request: Request) -> AuthContext:
    """Fetch auth context from the FastAPI app state."""
    context: Optional[AuthContext] = getattr(request.app.state, "auth_context", None)
    if not context or context.pool_manager is None:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Authentication service not initialized",
        )
    return context
