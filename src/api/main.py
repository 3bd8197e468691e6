"""
FastAPI Main Application for the EXAUTH Web API
"""

import logging
import os
from contextlib import asynccontextmanager

from fastapi import FastAPI

from api.auth_context import AuthContext, set_auth_context
from api.routers import auth as auth_router
from auth.connection_pool_manager import ConnectionPoolManager, PoolCreationError, new_pool
from config import DEFAULT_CONFIG_PATH, get_config, with_defaults

logger = logging.getLogger("uvicorn.error")

CONFIG_PATH_ENV = "EXAUTH_CONFIG"


def build_pool(config: dict) -> ConnectionPoolManager:
    """
    Creates the connection pool from the database config section.

    Raises:
        PoolCreationError: No database URL configured, or pool creation failed
    """
    db_config = config["database"]
    if not db_config.get("url"):
        raise PoolCreationError("No database URL configured (database.url or EXAUTH_DATABASE_URL)")
    return new_pool(
        db_config["url"],
        pool_size=int(db_config["pool_size"]),
        pool_name=db_config["pool_name"],
        checkout_timeout=float(db_config["checkout_timeout"]),
    )


def create_app(config: dict | None = None, **collaborators) -> FastAPI:
    """
    Builds the FastAPI app.

    Args:
        config: Loaded configuration; read from EXAUTH_CONFIG (or
            cfg/config.yaml) at startup if omitted
        **collaborators: Optional AuthContext fields (pool_manager,
            session_store, authenticator, token_generator)
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        # the app does not start without a connection pool
        app_config = config
        if app_config is None:
            app_config = get_config(os.getenv(CONFIG_PATH_ENV, DEFAULT_CONFIG_PATH))
        app_config = with_defaults(app_config)

        context = AuthContext(config=app_config, **collaborators)
        if context.pool_manager is None:
            context.pool_manager = build_pool(app_config)
        set_auth_context(app, context)
        logger.info("✓ Auth context initialized")

        yield

        context.pool_manager.close()

    app = FastAPI(
        title="EXAUTH API",
        description="Cookie session authentication",
        version="1.0.0",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
        lifespan=lifespan,
    )

    app.include_router(auth_router.router, prefix="/api")

    @app.get("/api/health")
    def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "EXAUTH API",
            "version": "1.0.0"
        }

    return app


app = create_app()
