from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING

from lan_chat.constants import PREF_THEME, PREF_USERNAME, THEMES
from lan_chat.errors import PreconditionError, SyncError, ValidationError
from lan_chat.models import (
    LocalPreferences,
    SyncSnapshot,
    validate_message_text,
    validate_username,
)
from lan_chat.services.poll_scheduler import Cadence

if TYPE_CHECKING:
    from lan_chat.remote.base import Presenter, RemoteClient
    from lan_chat.repositories.preference_repository import PreferenceRepository
    from lan_chat.services.change_detector import ChangeDetector
    from lan_chat.services.poll_scheduler import PollScheduler
    from lan_chat.services.status_service import StatusService

logger = logging.getLogger(__name__)


class SyncEngine:
    """Lifecycle and user intents for the presentation layer.

    Every failure is caught here or in the scheduler and turned into a
    status report; callers never see a raised SyncError except from the
    preference setters, where the input came straight from the user.
    """

    def __init__(
        self,
        client: "RemoteClient",
        presenter: "Presenter",
        preferences: "PreferenceRepository",
        status_service: "StatusService",
        detector: "ChangeDetector",
        scheduler: "PollScheduler",
    ):
        self.client = client
        self.presenter = presenter
        self.preferences = preferences
        self.status_service = status_service
        self.detector = detector
        self.scheduler = scheduler
        self.last_error: SyncError | None = None

    @property
    def local_preferences(self) -> LocalPreferences:
        return self.preferences.load()

    @property
    def snapshot(self) -> SyncSnapshot:
        return self.detector.snapshot

    @property
    def is_active(self) -> bool:
        return self.scheduler.is_active

    def start(self) -> bool:
        started = self.scheduler.start()
        if started and not self.local_preferences.username:
            self.presenter.prompt_for_username()
        return started

    def stop(self) -> bool:
        stopped = self.scheduler.stop()
        if stopped:
            self.status_service.cancel_pending()
        return stopped

    async def close(self) -> None:
        self.stop()
        await self.scheduler.wait_idle()
        self.status_service.cancel_pending()

    def submit(self, text: str) -> asyncio.Task[bool] | None:
        username = self.local_preferences.username
        if not username:
            self._reject(
                PreconditionError("username"),
                "Set a username before sending messages.",
            )
            self.presenter.prompt_for_username()
            return None
        try:
            cleaned = validate_message_text(text)
        except ValidationError as exc:
            self._reject(exc, str(exc))
            return None
        return self.scheduler.track(
            self._submit(username, cleaned, self.scheduler.generation)
        )

    def request_clear(self) -> asyncio.Task[bool]:
        return self.scheduler.track(self._clear(self.scheduler.generation))

    def set_username(self, name: str) -> bool:
        try:
            cleaned = validate_username(name)
        except ValidationError as exc:
            self._reject(exc, str(exc))
            raise
        if not self.preferences.set(PREF_USERNAME, cleaned):
            self.status_service.error("Failed to save username")
            return False
        self.status_service.report("Username saved")
        return True

    def set_theme(self, theme: str) -> bool:
        target = (theme or "").strip().lower()
        if target not in THEMES:
            exc = ValidationError(f"Unknown theme '{target}'.")
            self._reject(exc, str(exc))
            raise exc
        if not self.preferences.set(PREF_THEME, target):
            self.status_service.error("Failed to save theme")
            return False
        self.status_service.report("Theme changed")
        return True

    def _reject(self, exc: SyncError, text: str) -> None:
        self.last_error = exc
        logger.info("Rejected locally: %s", exc)
        self.status_service.error(text)

    async def _submit(self, author: str, text: str, generation: int) -> bool:
        try:
            await self.client.submit_message(author, text)
        except SyncError as exc:
            if self.scheduler.is_current(generation):
                self.last_error = exc
                logger.warning("Failed to send message: %s", exc)
                self.status_service.error("Failed to send message")
            return False
        except Exception:
            if self.scheduler.is_current(generation):
                logger.exception("Unexpected failure sending message")
                self.status_service.error("Failed to send message")
            return False
        if self.scheduler.is_current(generation):
            self.status_service.report("Message sent")
            self.scheduler.poll_now(Cadence.MESSAGES)
        return True

    async def _clear(self, generation: int) -> bool:
        try:
            await self.client.clear_all()
        except SyncError as exc:
            if self.scheduler.is_current(generation):
                self.last_error = exc
                logger.warning("Failed to clear messages: %s", exc)
                self.status_service.error("Failed to clear messages")
            return False
        except Exception:
            if self.scheduler.is_current(generation):
                logger.exception("Unexpected failure clearing messages")
                self.status_service.error("Failed to clear messages")
            return False
        if self.scheduler.is_current(generation):
            self.status_service.report("Messages cleared")
            self.scheduler.poll_now(Cadence.MESSAGES)
        return True
