#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: Central configuration access.
#
"""
Central configuration access helpers.
"""

from typing import Any

from auth.token_generator import MIN_TOKEN_LENGTH
from utils import load_config


DEFAULT_CONFIG_PATH = "cfg/config.yaml"

DEFAULT_DATABASE_CONFIG: dict[str, Any] = {
    "url": None,
    "pool_name": "exauth",
    "pool_size": 5,
    "checkout_timeout": 30,
}

DEFAULT_AUTH_CONFIG: dict[str, Any] = {
    "cookie_name": "EXAUTH",
    "token_length": 48,
    "cookie_secure": False,
    "cookie_max_age": None,
}


def get_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict[str, Any]:
    return load_config(config_path=config_path)


def with_defaults(config: dict[str, Any] | None) -> dict[str, Any]:
    """
    Merge a loaded config over the database/auth defaults.

    Raises:
        ValueError: auth.token_length is below MIN_TOKEN_LENGTH
    """
    config = config or {}
    merged = {
        **config,
        "database": {**DEFAULT_DATABASE_CONFIG, **(config.get("database") or {})},
        "auth": {**DEFAULT_AUTH_CONFIG, **(config.get("auth") or {})},
    }

    token_length = int(merged["auth"]["token_length"])
    if token_length < MIN_TOKEN_LENGTH:
        raise ValueError(
            f"auth.token_length must be at least {MIN_TOKEN_LENGTH} (got {token_length})"
        )
    return merged
