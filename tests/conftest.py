"""
Pytest Configuration and Shared Fixtures for the EXAUTH Test Suite.

This module provides:
- In-memory MySQL pool (no server needed)
- Test users
- Connection pool manager and API client setup
"""

import logging

import mysql.connector.pooling
import pytest
from fastapi.testclient import TestClient

from api.main import create_app
from auth.connection_pool_manager import ConnectionPoolManager
from auth.models import User
from config import with_defaults
from tests.fixtures.fake_mysql import ALICE_PASSWORD, TEST_DATABASE_URL, FakeDatabase, FakePool

# Configure logging
logging.basicConfig(
    level=logging.DEBUG,
    format='%(asctime)s - %(name)s - %(levelname)s - %(message)s'
)


# ============================================================================
# DATABASE FIXTURES
# ============================================================================

@pytest.fixture
def fake_db() -> FakeDatabase:
    return FakeDatabase()


@pytest.fixture
def created_pools(monkeypatch, fake_db) -> list:
    """Replaces MySQLConnectionPool with FakePool; returns the pools created."""
    pools = []

    def factory(**kwargs):
        pool = FakePool(fake_db, **kwargs)
        pools.append(pool)
        return pool

    monkeypatch.setattr(mysql.connector.pooling, "MySQLConnectionPool", factory)
    return pools


@pytest.fixture
def pool_manager(created_pools):
    manager = ConnectionPoolManager(
        TEST_DATABASE_URL,
        pool_size=2,
        pool_name="exauth_test",
        checkout_timeout=0.2,
        retry_interval=0.01,
    )
    yield manager
    manager.close()


@pytest.fixture
def fake_pool(pool_manager, created_pools) -> FakePool:
    return created_pools[-1]


@pytest.fixture
def connection(pool_manager):
    with pool_manager.connection() as conn:
        yield conn


# ============================================================================
# TEST USERS
# ============================================================================

@pytest.fixture
def alice(fake_db) -> User:
    user_id = fake_db.add_user("alice", ALICE_PASSWORD, realname="Alice Example")
    return User(id=user_id, username="alice", realname="Alice Example")


@pytest.fixture
def bob(fake_db) -> User:
    user_id = fake_db.add_user("bob", "hunter2", realname="Bob Builder")
    return User(id=user_id, username="bob", realname="Bob Builder")


# ============================================================================
# API CLIENT
# ============================================================================

@pytest.fixture
def app_config() -> dict:
    return with_defaults({"database": {"url": TEST_DATABASE_URL}})


@pytest.fixture
def api_client(app_config, pool_manager):
    app = create_app(app_config, pool_manager=pool_manager)
    with TestClient(app) as client:
        yield client
