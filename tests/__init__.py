"""
EXAUTH test suite.

- unit/ - token generation, pool checkout, session store, login, config, CLI
- integration/ - cookie login and session resolution through the FastAPI app
- fixtures/ - in-memory stand-ins for the mysql-connector pool
"""
