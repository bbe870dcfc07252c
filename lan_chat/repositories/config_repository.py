from __future__ import annotations

import json
import logging
import os
from typing import Any

from pydantic import ValidationError as SchemaError

from lan_chat.constants import CONFIG_FILE
from lan_chat.models import SyncSettings

logger = logging.getLogger(__name__)


class ConfigRepository:
    def __init__(self, config_file: str = CONFIG_FILE):
        self.config_file = config_file

    def load_config(self) -> dict[str, Any]:
        if os.path.exists(self.config_file):
            try:
                with open(self.config_file, "r", encoding="utf-8") as f:
                    data = json.load(f)
                    if isinstance(data, dict):
                        return data
            except (OSError, json.JSONDecodeError) as exc:
                logger.warning(
                    "Failed to load config from %s: %s", self.config_file, exc
                )
        return {}

    def load_settings(self, server_url: str | None = None) -> SyncSettings:
        data = self.load_config()
        if server_url:
            data["server_url"] = server_url
        try:
            return SyncSettings(**data)
        except SchemaError as exc:
            logger.warning(
                "Invalid settings in %s; using defaults: %s", self.config_file, exc
            )
        if server_url:
            return SyncSettings(server_url=server_url)
        return SyncSettings()
