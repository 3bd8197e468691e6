#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: API tests for login and cookie session resolution
#
import logging

import pytest
from fastapi import Depends
from fastapi.testclient import TestClient

from api.auth_middleware import get_session, require_user
from api.main import create_app
from auth.connection_pool_manager import PoolCreationError
from auth.session import Session
from tests.fixtures.fake_mysql import ALICE_PASSWORD

logger = logging.getLogger(__name__)

pytestmark = pytest.mark.integration

COOKIE = "EXAUTH"


def login(client, username="alice", password=ALICE_PASSWORD):
    return client.post("/api/auth/login", json={"username": username, "password": password})


class TestLogin:
    """POST /api/auth/login"""

    def test_login_sets_cookie(self, api_client, fake_db, alice):
        response = login(api_client)

        assert response.status_code == 200
        assert response.json() == {"id": alice.id, "username": "alice", "realname": "Alice Example"}

        token = response.cookies.get(COOKIE)
        assert token is not None
        assert len(token) == 48
        assert token.isalnum()
        assert fake_db.tokens_for(alice.id) == [token]

        set_cookie = response.headers["set-cookie"]
        assert "HttpOnly" in set_cookie
        assert "samesite=strict" in set_cookie.lower()
        logger.info("✓ Login issued session cookie")

    def test_wrong_password(self, api_client, fake_db, alice):
        response = login(api_client, password="wrongpass")

        assert response.status_code == 401
        assert COOKIE not in response.cookies
        assert fake_db.sessions == []

    def test_unknown_user(self, api_client, fake_db, alice):
        response = login(api_client, username="mallory")

        assert response.status_code == 401
        assert fake_db.sessions == []

    def test_username_is_trimmed(self, api_client, alice):
        assert login(api_client, username="  alice ").status_code == 200

    def test_missing_fields(self, api_client):
        response = api_client.post("/api/auth/login", json={"username": "alice"})
        assert response.status_code == 422

    def test_persistence_failure_is_failed_login(self, api_client, fake_db, alice):
        fake_db.insert_rowcount = 0

        response = login(api_client)

        assert response.status_code == 401
        assert COOKIE not in response.cookies

    def test_secure_cookie_from_config(self, app_config, pool_manager, alice):
        app_config["auth"]["cookie_secure"] = True
        app_config["auth"]["cookie_max_age"] = 3600
        app = create_app(app_config, pool_manager=pool_manager)

        with TestClient(app) as client:
            response = login(client)

        set_cookie = response.headers["set-cookie"].lower()
        assert "secure" in set_cookie
        assert "max-age=3600" in set_cookie

    def test_custom_cookie_name(self, app_config, pool_manager, alice):
        app_config["auth"]["cookie_name"] = "SID"
        app = create_app(app_config, pool_manager=pool_manager)

        with TestClient(app) as client:
            response = login(client)
            assert "SID" in response.cookies
            assert client.get("/api/auth/session").json()["authenticated"] is True


class TestSessionResolution:
    """GET /api/auth/session with and without cookie."""

    def test_no_cookie_is_anonymous(self, api_client):
        response = api_client.get("/api/auth/session")

        assert response.status_code == 200
        assert response.json() == {"authenticated": False, "user": None}

    def test_invalid_cookie_is_anonymous(self, api_client, alice):
        api_client.cookies.set(COOKIE, "not-a-real-token")
        response = api_client.get("/api/auth/session")

        assert response.status_code == 200
        assert response.json()["authenticated"] is False

    def test_login_then_resolve(self, api_client, alice):
        token = login(api_client).cookies.get(COOKIE)
        assert len(token) == 48

        response = api_client.get("/api/auth/session")

        assert response.status_code == 200
        assert response.json() == {
            "authenticated": True,
            "user": {"id": alice.id, "username": "alice", "realname": "Alice Example"},
        }
        logger.info("✓ Cookie resolved to alice")

    def test_both_tokens_resolve(self, api_client, alice):
        first = login(api_client).cookies.get(COOKIE)
        second = login(api_client).cookies.get(COOKIE)
        assert first != second

        for token in (first, second):
            api_client.cookies.clear()
            api_client.cookies.set(COOKIE, token)
            assert api_client.get("/api/auth/session").json()["user"]["username"] == "alice"

    def test_failed_login_keeps_anonymous(self, api_client, alice):
        assert login(api_client, password="wrongpass").status_code == 401
        assert api_client.get("/api/auth/session").json()["authenticated"] is False

    def test_connections_returned_after_requests(self, api_client, fake_pool, alice):
        login(api_client)
        for _ in range(5):
            api_client.get("/api/auth/session")
        login(api_client, password="wrongpass")

        assert fake_pool.available == fake_pool.pool_size


class TestPoolExhaustion:
    """Requests fail with 503 when no connection is available."""

    def test_exhausted_pool_is_server_error(self, api_client, pool_manager, alice):
        token = login(api_client).cookies.get(COOKIE)
        held = [pool_manager.get_connection(), pool_manager.get_connection()]

        response = api_client.get("/api/auth/session")

        assert token is not None
        assert response.status_code == 503
        assert response.json()["detail"] == "Database connection unavailable"

        for conn in held:
            conn.close()
        assert api_client.get("/api/auth/session").json()["authenticated"] is True

    def test_exhausted_pool_on_login(self, api_client, pool_manager, alice):
        held = [pool_manager.get_connection(), pool_manager.get_connection()]

        assert login(api_client).status_code == 503

        for conn in held:
            conn.close()


class TestDownstreamHandlers:
    """Session dependency used by other routes."""

    @pytest.fixture
    def client_with_routes(self, app_config, pool_manager):
        app = create_app(app_config, pool_manager=pool_manager)

        @app.get("/api/whoami")
        def whoami(session: Session = Depends(get_session)):
            return {"user": session.user.username if session.user else None}

        @app.get("/api/private")
        def private(user=Depends(require_user)):
            return {"username": user.username}

        with TestClient(app) as client:
            yield client

    def test_anonymous_handler(self, client_with_routes):
        assert client_with_routes.get("/api/whoami").json() == {"user": None}

    def test_require_user_rejects_anonymous(self, client_with_routes):
        response = client_with_routes.get("/api/private")
        assert response.status_code == 401

    def test_require_user_accepts_session(self, client_with_routes, alice):
        assert login(client_with_routes).status_code == 200
        assert client_with_routes.get("/api/private").json() == {"username": "alice"}


def test_health(api_client):
    assert api_client.get("/api/health").json()["status"] == "healthy"


def test_uninitialized_app_is_unavailable():
    app = create_app({"database": {"url": None}})
    client = TestClient(app)
    # lifespan not started: no auth context
    assert client.get("/api/auth/session").status_code == 503


class TestStartup:
    """Pool construction in the app lifespan."""

    def test_pool_built_from_config(self, app_config, created_pools, alice):
        with TestClient(create_app(app_config)) as client:
            assert login(client).status_code == 200
            assert created_pools[-1].pool_name == "exauth"

        assert len(created_pools) == 1

    def test_invalid_database_url_aborts_startup(self, app_config, created_pools):
        app_config["database"]["url"] = "sqlite:///tmp/exauth.db"

        with pytest.raises(PoolCreationError):
            with TestClient(create_app(app_config)):
                pass
        assert created_pools == []

    def test_short_token_length_aborts_startup(self, app_config, pool_manager, fake_db, alice):
        app_config["auth"]["token_length"] = 0

        with pytest.raises(ValueError, match="token_length"):
            with TestClient(create_app(app_config, pool_manager=pool_manager)) as client:
                login(client)
        assert fake_db.sessions == []

    def test_oversized_pool_aborts_startup(self, app_config, created_pools):
        app_config["database"]["pool_size"] = 64

        with pytest.raises(PoolCreationError, match="Pool size"):
            with TestClient(create_app(app_config)):
                pass
        assert created_pools == []

    def test_missing_database_url_aborts_startup(self, app_config, created_pools):
        app_config["database"]["url"] = None

        with pytest.raises(PoolCreationError, match="No database URL"):
            with TestClient(create_app(app_config)):
                pass
