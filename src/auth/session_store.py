#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Persistent session store (table sessions).
#
"""
Persistent session store (table sessions).
"""

import logging
from typing import Optional

from mysql.connector import errorcode
from mysql.connector.errors import Error as MySQLError, IntegrityError

from auth.models import User
from infrastructure.unit_of_work import UnitOfWork
from repositories.session_repository import SessionRepository

logger = logging.getLogger("uvicorn.error")


class SessionPersistenceError(Exception):
    """Session row could not be written."""
    pass


class DuplicateTokenError(SessionPersistenceError):
    """Session token already exists."""
    pass


class SessionStore:
    """
    Stores (user_id, token) pairs and resolves tokens back to users.

    Rows are never updated or deleted here.
    """

    def create(self, connection, user_id: int, token: str) -> None:
        """
        Inserts exactly one session row in its own transaction.

        Args:
            connection: Checked-out MySQL connection
            user_id: users.id of the authenticated user
            token: New session token

        Raises:
            DuplicateTokenError: Token collides with an existing session
            SessionPersistenceError: Insert failed or affected != 1 rows
        """
        try:
            with UnitOfWork(connection) as uow:
                affected = SessionRepository(uow).insert_session(user_id, token)
                if affected != 1:
                    raise SessionPersistenceError(f"Session insert affected {affected} rows")
        except IntegrityError as e:
            if e.errno == errorcode.ER_DUP_ENTRY:
                raise DuplicateTokenError("Session token already exists") from e
            raise SessionPersistenceError(f"Error creating session: {e}") from e
        except MySQLError as e:
            raise SessionPersistenceError(f"Error creating session: {e}") from e

    def resolve(self, connection, token: str) -> Optional[User]:
        """
        Looks up the user owning a session token (exact match).

        Args:
            connection: Checked-out MySQL connection
            token: Cookie value

        Returns:
            The User, or None when nothing matches or the lookup fails
        """
        if not token:
            return None

        cursor = connection.cursor(buffered=True)
        try:
            row = SessionRepository(cursor).find_user_by_token(token)
        except MySQLError:
            # logged by the repository; a failed lookup is an anonymous request
            return None
        finally:
            cursor.close()

        return User.from_row(row) if row else None
