from __future__ import annotations

from collections.abc import Sequence
from typing import TYPE_CHECKING

from lan_chat.models import Message, Peer, Severity, SyncSnapshot

if TYPE_CHECKING:
    from lan_chat.remote.base import Presenter
    from lan_chat.services.status_service import StatusService


def describe_messages(count: int) -> str:
    if count > 0:
        return f"{count} messages loaded"
    return "No messages yet"


def describe_peers(count: int) -> str:
    return f"{count} peer{'' if count == 1 else 's'} online"


class ChangeDetector:
    """Gates rendering on element count alone.

    A poll whose result has the same length as the last rendered one is
    treated as unchanged, even if its content differs.
    """

    def __init__(self, presenter: "Presenter", status_service: "StatusService"):
        self.presenter = presenter
        self.status_service = status_service
        self.snapshot = SyncSnapshot()

    def apply_messages(self, messages: Sequence[Message]) -> bool:
        count = len(messages)
        if count == self.snapshot.last_message_count:
            return False
        self.snapshot = self.snapshot.model_copy(update={"last_message_count": count})
        self.presenter.render_messages(messages)
        self.status_service.report(describe_messages(count), Severity.INFO)
        return True

    def apply_peers(self, peers: Sequence[Peer]) -> bool:
        count = len(peers)
        if count == self.snapshot.last_peer_count:
            return False
        self.snapshot = self.snapshot.model_copy(update={"last_peer_count": count})
        self.presenter.render_peers(peers)
        self.status_service.report(describe_peers(count), Severity.INFO)
        return True
