from collections.abc import Sequence
from typing import Protocol

from lan_chat.models import Message, Peer, Severity


class RemoteClient(Protocol):
    async def fetch_messages(self) -> list[Message]:
        ...

    async def fetch_peers(self) -> list[Peer]:
        ...

    async def submit_message(self, author: str | None, text: str) -> None:
        ...

    async def clear_all(self) -> None:
        ...


class Presenter(Protocol):
    """Render/status surface the engine calls into; never read back."""

    def render_messages(self, messages: Sequence[Message]) -> None:
        ...

    def render_peers(self, peers: Sequence[Peer]) -> None:
        ...

    def report_status(self, text: str, severity: Severity) -> None:
        ...

    def prompt_for_username(self) -> None:
        ...
