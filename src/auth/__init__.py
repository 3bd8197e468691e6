#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Authentication and session management module.
#
"""
Authentication and session management module.
"""

from .models import User
from .token_generator import TokenGenerator, random_token, SESSION_TOKEN_LENGTH, MIN_TOKEN_LENGTH
from .authenticator import Authenticator, PasswordAuthenticator, hash_password
from .session_store import SessionStore, SessionPersistenceError, DuplicateTokenError
from .connection_pool_manager import (
    ConnectionPoolManager,
    PoolCreationError,
    PoolUnavailableError,
    new_pool,
    parse_database_url,
)
from .session import Session, resolve_session

__all__ = [
    'User',
    'TokenGenerator',
    'random_token',
    'SESSION_TOKEN_LENGTH',
    'MIN_TOKEN_LENGTH',
    'Authenticator',
    'PasswordAuthenticator',
    'hash_password',
    'SessionStore',
    'SessionPersistenceError',
    'DuplicateTokenError',
    'ConnectionPoolManager',
    'PoolCreationError',
    'PoolUnavailableError',
    'new_pool',
    'parse_database_url',
    'Session',
    'resolve_session',
]
