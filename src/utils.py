#
# SPDX-License-Identifier: AGPL-3.0-only
# Copyright (c) 2026 m2-eng
# Author: m2-eng
# Co-Author: GitHub Copilot
# License: GNU Affero General Public License v3.0 (AGPL-3.0-only)
# Purpose: YAML configuration loading.
#
import os
import yaml

from pathlib import Path
from typing import Any

DATABASE_URL_ENV = "EXAUTH_DATABASE_URL"


def load_config(config_path: str = 'config.yaml', subconfig: str | None = None) -> dict[str, Any]:
   """
   Load configuration from YAML file.

   The database URL can be overridden with the EXAUTH_DATABASE_URL
   environment variable.

   Args:
      config_path: Path to config.yaml file.
      subconfig: Optional top-level section to return (e.g. 'database', 'auth').

   Returns:
      Configuration (or the requested section) as a dictionary.
   """
   try:
      config_file = Path(config_path)
      if not config_file.exists():
         raise FileNotFoundError(f"config.yaml not found at: {config_path}")

      with open(config_file, 'r', encoding='utf-8') as f:
         config = yaml.safe_load(f) or {}

      if not isinstance(config, dict):
         raise ValueError("config.yaml must contain a mapping")

      database_url = os.getenv(DATABASE_URL_ENV)
      if database_url:
         config.setdefault('database', {})['url'] = database_url

      if subconfig is None:
         return config
      if subconfig not in config:
         raise KeyError(f"Section '{subconfig}' not found in config.yaml")
      return config[subconfig] or {}

   except Exception as e:
      raise RuntimeError(f"Failed to load config.yaml: {e}")
