from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any
from uuid import uuid4

import portalocker

from lan_chat.constants import (
    DEFAULT_THEME,
    LOCK_TIMEOUT_SECONDS,
    MAX_USERNAME_LENGTH,
    PREF_THEME,
    PREF_USERNAME,
    PREFERENCES_FILE,
    THEMES,
)
from lan_chat.models import LocalPreferences

logger = logging.getLogger(__name__)


class PreferenceRepository:
    """Durable key/value preferences scoped to this installation."""

    def __init__(self, path: str | Path = PREFERENCES_FILE):
        self.path = Path(path)
        self.lock_path = self.path.with_name(self.path.name + ".lock")

    def read_all(self) -> dict[str, Any]:
        if not self.path.exists():
            return {}
        try:
            with open(self.path, "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as exc:
            logger.warning("Failed to load preferences from %s: %s", self.path, exc)
            return {}
        if not isinstance(data, dict):
            return {}
        return data

    def get(self, key: str) -> Any | None:
        return self.read_all().get(key)

    def set(self, key: str, value: Any) -> bool:
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with portalocker.Lock(
                str(self.lock_path),
                mode="a",
                timeout=LOCK_TIMEOUT_SECONDS,
                fail_when_locked=False,
            ):
                data = self.read_all()
                if value is None:
                    data.pop(key, None)
                else:
                    data[key] = value
                self.write_atomic(data)
            return True
        except portalocker.exceptions.LockException as exc:
            logger.warning("Preferences file %s is locked: %s", self.path, exc)
        except OSError as exc:
            logger.warning("Failed saving preference %s: %s", key, exc)
        return False

    def write_atomic(self, data: dict[str, Any]) -> None:
        tmp_name = f".{self.path.name}.tmp-{os.getpid()}-{uuid4().hex[:8]}"
        tmp_path = self.path.with_name(tmp_name)
        try:
            with open(tmp_path, "w", encoding="utf-8") as f:
                json.dump(data, f, indent=2)
                f.flush()
                os.fsync(f.fileno())
            os.replace(tmp_path, self.path)
        finally:
            try:
                tmp_path.unlink(missing_ok=True)
            except OSError:
                pass

    def load(self) -> LocalPreferences:
        data = self.read_all()
        username = data.get(PREF_USERNAME)
        if not isinstance(username, str):
            username = None
        else:
            username = username.strip()
            if not username or len(username) > MAX_USERNAME_LENGTH:
                username = None
        theme = data.get(PREF_THEME)
        if theme not in THEMES:
            theme = DEFAULT_THEME
        return LocalPreferences(username=username, theme=theme)
