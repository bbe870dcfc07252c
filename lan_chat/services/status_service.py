from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from lan_chat.constants import READY_STATUS
from lan_chat.models import Severity, StatusReport, SyncSettings

if TYPE_CHECKING:
    from lan_chat.remote.base import Presenter

logger = logging.getLogger(__name__)


class StatusService:
    """Forwards status reports and reverts info statuses to "Ready".

    Each report gets a fresh token; a pending revert only fires while its
    token is still the current one, so a newer status is never wiped by
    an older timer. Errors stay until something replaces them.
    """

    def __init__(self, presenter: "Presenter", settings: SyncSettings):
        self.presenter = presenter
        self.settings = settings
        self.current = StatusReport(text=READY_STATUS)
        self._token = 0
        self._revert_handle: asyncio.TimerHandle | None = None

    def report(self, text: str, severity: Severity = Severity.INFO) -> StatusReport:
        self._token += 1
        self.current = StatusReport(text=text, severity=severity, token=self._token)
        if self._revert_handle is not None:
            self._revert_handle.cancel()
            self._revert_handle = None
        self.presenter.report_status(text, severity)
        if severity is Severity.INFO:
            self._schedule_revert(self._token)
        return self.current

    def error(self, text: str) -> StatusReport:
        return self.report(text, Severity.ERROR)

    def _schedule_revert(self, token: int) -> None:
        try:
            loop = asyncio.get_running_loop()
        except RuntimeError:
            logger.debug("No running loop; status %s will not auto-clear.", token)
            return
        self._revert_handle = loop.call_later(
            self.settings.status_clear_seconds, self._revert_if_current, token
        )

    def _revert_if_current(self, token: int) -> None:
        self._revert_handle = None
        if token != self._token:
            return
        self._token += 1
        self.current = StatusReport(text=READY_STATUS, token=self._token)
        self.presenter.report_status(READY_STATUS, Severity.INFO)

    def cancel_pending(self) -> None:
        if self._revert_handle is not None:
            self._revert_handle.cancel()
            self._revert_handle = None
