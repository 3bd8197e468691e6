#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Request-scoped session (db connection + optional user).
#
"""
Request-scoped session (db connection + optional user).
"""

import logging
from typing import Optional

from mysql.connector.errors import Error as MySQLError

from auth.authenticator import Authenticator, PasswordAuthenticator
from auth.connection_pool_manager import ConnectionPoolManager
from auth.models import User
from auth.session_store import DuplicateTokenError, SessionPersistenceError, SessionStore
from auth.token_generator import SESSION_TOKEN_LENGTH, TokenGenerator

logger = logging.getLogger("uvicorn.error")


class Session:
    """
    Handed to every request handler.

    Holds a pooled database connection and the logged-in user, if any.
    One Session per request; close() returns the connection to the pool.
    """

    def __init__(
        self,
        db,
        user: Optional[User] = None,
        store: SessionStore | None = None,
        authenticator: Authenticator | None = None,
        token_generator: TokenGenerator | None = None,
        token_length: int = SESSION_TOKEN_LENGTH,
    ):
        self.db = db
        self.user = user
        self.store = store or SessionStore()
        self.authenticator = authenticator or PasswordAuthenticator()
        self.token_generator = token_generator or TokenGenerator()
        self.token_length = token_length

    @classmethod
    def from_key(cls, db, session_key: Optional[str], **kwargs) -> "Session":
        """
        Builds a Session for a connection and an optional cookie value.

        Args:
            db: Checked-out MySQL connection
            session_key: Cookie value, or None if the request had no cookie
            **kwargs: store, authenticator, token_generator, token_length

        Returns:
            Session, anonymous unless the key matches a stored session
        """
        session = cls(db, **kwargs)
        if session_key is not None:
            session.user = session.store.resolve(db, session_key)
        logger.info(f"Session resolved: {session.user!r}")
        return session

    @property
    def is_authenticated(self) -> bool:
        return self.user is not None

    def authenticate(self, username: str, password: str) -> Optional[str]:
        """
        Logs a user in on this session.

        If username and password are valid, a session row is stored and
        its token returned. Otherwise (or if storing fails) returns None
        and the session stays as it was.
        """
        try:
            user = self.authenticator.authenticate(self.db, username, password)
        except MySQLError as e:
            logger.error(f"Authentication lookup failed for {username}: {e}")
            return None

        if user is None:
            return None

        logger.info(f"User {user.username!r} authenticated")

        token = self.token_generator.random_token(self.token_length)
        try:
            self.store.create(self.db, user.id, token)
        except DuplicateTokenError as e:
            logger.error(f"Failed to create session for {user.username}: token collision ({e})")
            return None
        except SessionPersistenceError as e:
            logger.error(f"Failed to create session for {user.username}: {e}")
            return None

        self.user = user
        return token

    def close(self) -> None:
        """Returns the connection to the pool."""
        if self.db is not None:
            self.db.close()
            self.db = None

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()


def resolve_session(
    pool_manager: ConnectionPoolManager,
    session_key: Optional[str],
    **kwargs,
) -> Session:
    """
    Checks out a connection and resolves the session for a cookie value.

    Args:
        pool_manager: Application connection pool
        session_key: Cookie value or None
        **kwargs: Passed to Session

    Returns:
        Session owning the checked-out connection

    Raises:
        PoolUnavailableError: No connection available
    """
    conn = pool_manager.get_connection()
    try:
        return Session.from_key(conn, session_key, **kwargs)
    except BaseException:
        conn.close()
        raise
