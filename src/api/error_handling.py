"""
Zentrale Fehlerbehandlung für die EXAUTH API
Bietet konsistente Error-Handling-Patterns für alle Router
"""

import logging
from functools import wraps
from typing import Callable, Any

from fastapi import HTTPException, status
from mysql.connector.errors import Error as MySQLError, OperationalError, InterfaceError

from auth.connection_pool_manager import PoolUnavailableError

logger = logging.getLogger("uvicorn.error")


def _to_http_exception(operation_name: str, exc: Exception) -> HTTPException:
    if isinstance(exc, (PoolUnavailableError, OperationalError, InterfaceError)):
        logger.error(f"Database connection error in {operation_name}: {exc}")
        return HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail=f"Database connection error during {operation_name}. Please try again."
        )
    if isinstance(exc, MySQLError):
        logger.exception(f"MySQL error in {operation_name}: {exc}")
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=f"Database error during {operation_name}"
        )
    logger.exception(f"Unexpected error in {operation_name}: {exc}")
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        detail=f"Internal server error during {operation_name}"
    )


def handle_db_errors(operation_name: str = "database operation"):
    """
    Decorator für einheitliche Fehlerbehandlung in API-Endpunkten.

    Args:
        operation_name: Name der Operation für Fehlermeldungen

    Verwendung:
        @router.post("/endpoint")
        @handle_db_errors("user login")
        def my_endpoint(session: Session = Depends(get_session)):
            # Code hier...
    """
    def decorator(func: Callable) -> Callable:
        @wraps(func)
        def wrapper(*args, **kwargs) -> Any:
            try:
                return func(*args, **kwargs)
            except HTTPException:
                # 401 etc. direkt durchreichen
                raise
            except Exception as exc:
                raise _to_http_exception(operation_name, exc)

        return wrapper

    return decorator
