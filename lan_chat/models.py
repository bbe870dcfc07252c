from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from lan_chat.constants import (
    CLEAR_PATH,
    DEFAULT_SERVER_URL,
    DEFAULT_THEME,
    HTTP_TIMEOUT_SECONDS,
    MAX_MESSAGE_LENGTH,
    MAX_USERNAME_LENGTH,
    MESSAGE_POLL_UNITS,
    MESSAGES_PATH,
    PEER_POLL_UNITS,
    PEERS_PATH,
    STATUS_CLEAR_UNITS,
    TIME_UNIT_SECONDS,
)
from lan_chat.errors import ValidationError


class Severity(str, Enum):
    INFO = "info"
    ERROR = "error"


class Message(BaseModel):
    model_config = ConfigDict(frozen=True)

    author: str = Field(min_length=1, max_length=MAX_USERNAME_LENGTH)
    text: str = Field(min_length=1, max_length=MAX_MESSAGE_LENGTH)
    timestamp: str = ""
    id: int | str | None = None

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Message":
        # Server rows use "user"/"message"; local rows use "author"/"text".
        return cls(
            author=data.get("author", data.get("user", "")),
            text=data.get("text", data.get("message", "")),
            timestamp=str(data.get("timestamp", "")),
            id=data.get("id"),
        )


class Peer(BaseModel):
    model_config = ConfigDict(frozen=True)

    id: str = Field(min_length=1)
    address: str = ""

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Peer":
        return cls(**data)


class LocalPreferences(BaseModel):
    username: str | None = None
    theme: Literal["light", "dark"] = DEFAULT_THEME


class SyncSnapshot(BaseModel):
    last_message_count: int = 0
    last_peer_count: int = 0


class StatusReport(BaseModel):
    text: str
    severity: Severity = Severity.INFO
    token: int = 0


class SyncSettings(BaseModel):
    server_url: str = DEFAULT_SERVER_URL
    messages_path: str = MESSAGES_PATH
    peers_path: str = PEERS_PATH
    clear_path: str = CLEAR_PATH
    time_unit_seconds: float = Field(default=TIME_UNIT_SECONDS, gt=0)
    request_timeout_seconds: float = Field(default=HTTP_TIMEOUT_SECONDS, gt=0)

    @property
    def message_interval_seconds(self) -> float:
        return MESSAGE_POLL_UNITS * self.time_unit_seconds

    @property
    def peer_interval_seconds(self) -> float:
        return PEER_POLL_UNITS * self.time_unit_seconds

    @property
    def status_clear_seconds(self) -> float:
        return STATUS_CLEAR_UNITS * self.time_unit_seconds

    def url_for(self, path: str) -> str:
        return self.server_url.rstrip("/") + "/" + path.lstrip("/")


def validate_message_text(text: str) -> str:
    cleaned = (text or "").strip()
    if not cleaned:
        raise ValidationError("Message cannot be empty.")
    if len(cleaned) > MAX_MESSAGE_LENGTH:
        raise ValidationError(
            f"Message too long. Maximum {MAX_MESSAGE_LENGTH} characters."
        )
    return cleaned


def validate_username(name: str | None) -> str:
    cleaned = (name or "").strip()
    if not cleaned or len(cleaned) > MAX_USERNAME_LENGTH:
        raise ValidationError(
            f"Please enter a valid username (1-{MAX_USERNAME_LENGTH} characters)."
        )
    return cleaned
