from __future__ import annotations

import asyncio
import json
import logging
from http import client as httpclient
from typing import Any
from urllib import error as urlerror
from urllib import request as urlrequest

from pydantic import ValidationError as SchemaError

from lan_chat.errors import NetworkError, ServerError
from lan_chat.models import (
    Message,
    Peer,
    SyncSettings,
    validate_message_text,
    validate_username,
)

logger = logging.getLogger(__name__)


class HttpRemoteClient:
    """Talks to the LAN chat HTTP server.

    Each call is a single round trip with no retry. urllib blocks, so the
    request itself runs in a worker thread and the event loop stays free.
    """

    def __init__(self, settings: SyncSettings):
        self.settings = settings

    async def fetch_messages(self) -> list[Message]:
        data = await asyncio.to_thread(
            self.request_json, "GET", self.settings.messages_path
        )
        return self.parse_rows(data, Message.from_dict, "message")

    async def fetch_peers(self) -> list[Peer]:
        data = await asyncio.to_thread(
            self.request_json, "GET", self.settings.peers_path
        )
        return self.parse_rows(data, Peer.from_dict, "peer")

    async def submit_message(self, author: str | None, text: str) -> None:
        author = validate_username(author)
        text = validate_message_text(text)
        await asyncio.to_thread(
            self.request_json,
            "POST",
            self.settings.messages_path,
            {"user": author, "message": text},
        )

    async def clear_all(self) -> None:
        await asyncio.to_thread(self.request_json, "POST", self.settings.clear_path)

    def request_json(
        self, method: str, path: str, payload: dict[str, Any] | None = None
    ) -> Any:
        url = self.settings.url_for(path)
        body = json.dumps(payload).encode("utf-8") if payload is not None else None
        headers = {"Accept": "application/json"}
        if body is not None:
            headers["Content-Type"] = "application/json"
        request = urlrequest.Request(url=url, data=body, headers=headers, method=method)
        try:
            with urlrequest.urlopen(
                request, timeout=self.settings.request_timeout_seconds
            ) as response:
                status = response.status
                payload_bytes = response.read()
        except urlerror.HTTPError as exc:
            detail = exc.read().decode("utf-8", errors="replace")
            raise ServerError(exc.code, detail) from exc
        except httpclient.HTTPException as exc:
            raise NetworkError(f"{method} {url} failed: {exc!r}") from exc
        except OSError as exc:
            # URLError, refused connections and socket timeouts all land here.
            raise NetworkError(f"{method} {url} failed: {exc}") from exc

        try:
            raw = payload_bytes.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ServerError(status, "Response was not valid UTF-8.") from exc
        if not raw.strip():
            return None
        try:
            return json.loads(raw)
        except json.JSONDecodeError as exc:
            raise ServerError(status, "Response was not valid JSON.") from exc

    def parse_rows(self, data: Any, factory: Any, kind: str) -> list[Any]:
        if not isinstance(data, list):
            raise ServerError(200, f"Expected a list of {kind}s.")
        rows: list[Any] = []
        for entry in data:
            if not isinstance(entry, dict):
                logger.warning("Invalid %s row ignored.", kind)
                continue
            try:
                rows.append(factory(entry))
            except SchemaError as e:
                logger.warning("Invalid %s schema: %s", kind, e)
        return rows
