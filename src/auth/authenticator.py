#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Username/password verification against the users table.
#
"""
Username/password verification against the users table.
"""

import logging
from functools import lru_cache
from typing import Optional, Protocol

import bcrypt

from auth.models import User
from repositories.user_repository import UserRepository

logger = logging.getLogger("uvicorn.error")


class Authenticator(Protocol):
    """Anything that maps (connection, username, password) to a User or None."""

    def authenticate(self, connection, username: str, password: str) -> Optional[User]:
        ...


def hash_password(password: str, rounds: int = 12) -> str:
    """bcrypt hash for storage in users.password_hash."""
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=rounds)).decode("utf-8")


@lru_cache(maxsize=1)
def _dummy_hash() -> bytes:
    return bcrypt.hashpw(b"exauth-unknown-user", bcrypt.gensalt())


class PasswordAuthenticator:
    """
    Checks a password against the bcrypt hash stored for the username.

    Unknown usernames and wrong passwords both return None; an unknown
    username still costs one bcrypt check.
    """

    def authenticate(self, connection, username: str, password: str) -> Optional[User]:
        """
        Args:
            connection: Checked-out MySQL connection
            username: Login name
            password: Plain-text password

        Returns:
            The User on success, otherwise None
        """
        cursor = connection.cursor(buffered=True)
        try:
            row = UserRepository(cursor).find_credentials(username)
        finally:
            cursor.close()

        if row is None:
            bcrypt.checkpw(password.encode("utf-8"), _dummy_hash())
            return None

        try:
            valid = bcrypt.checkpw(password.encode("utf-8"), row[3].encode("utf-8"))
        except ValueError as e:
            logger.warning(f"Unusable password hash for user {row[1]}: {e}")
            return None

        return User.from_row(row) if valid else None
