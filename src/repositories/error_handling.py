#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: MySQL error logging for the session and user repositories.
#
"""
MySQL error logging for the repository layer.

Errors are logged with the repository and operation that failed and then
re-raised unchanged. The session store decides whether a failure is a failed
login, an anonymous request or something the API reports as unavailable.
"""

from __future__ import annotations

from functools import wraps
from typing import Callable, Any
import logging

from mysql.connector.errors import Error as MySQLError, OperationalError, InterfaceError

logger = logging.getLogger("uvicorn.error")


def _describe(exc: MySQLError) -> str:
    if isinstance(exc, (OperationalError, InterfaceError)):
        return "Database connection error"
    return "Database error"


def handle_repository_errors(
    operation_name: str = "database operation",
    error_message: str | None = None,
):
    """Log MySQL errors raised by a repository method, then re-raise them."""
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(self, *args, **kwargs) -> Any:
            try:
                return func(self, *args, **kwargs)
            except MySQLError as exc:
                message = error_message or _describe(exc)
                logger.error(
                    f"{message} in {type(self).__name__} ({operation_name}): "
                    f"[{exc.errno}] {exc.msg}"
                )
                raise
        return wrapper
    return decorator
