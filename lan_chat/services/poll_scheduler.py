from __future__ import annotations

import asyncio
import logging
from collections.abc import Coroutine
from dataclasses import dataclass, replace
from enum import Enum
from typing import TYPE_CHECKING, Any

from lan_chat.errors import SyncError
from lan_chat.models import SyncSettings

if TYPE_CHECKING:
    from lan_chat.remote.base import RemoteClient
    from lan_chat.services.change_detector import ChangeDetector
    from lan_chat.services.status_service import StatusService

logger = logging.getLogger(__name__)


class Cadence(str, Enum):
    MESSAGES = "messages"
    PEERS = "peers"


class SchedulerState(str, Enum):
    ACTIVE = "active"
    SUSPENDED = "suspended"


FAILURE_STATUS = {
    Cadence.MESSAGES: "Failed to load messages - Check connection or server",
    Cadence.PEERS: "Failed to load peers - Check connection or server",
}


@dataclass
class SyncMetrics:
    dispatched: int = 0
    applied: int = 0
    stale_dropped: int = 0
    suspended_dropped: int = 0
    failures: int = 0


class PollScheduler:
    """Runs the message and peer cadences on the current event loop.

    Requests may overlap. Every dispatch is tagged with the scheduler
    generation and a per-cadence sequence number; a result is applied
    only if the generation is unchanged (no stop/start in between) and
    no later request of the same cadence has been applied already.
    """

    def __init__(
        self,
        client: "RemoteClient",
        detector: "ChangeDetector",
        status_service: "StatusService",
        settings: SyncSettings,
    ):
        self.client = client
        self.detector = detector
        self.status_service = status_service
        self.settings = settings
        self.state = SchedulerState.SUSPENDED
        self.generation = 0
        self.metrics = SyncMetrics()
        self._dispatched_seq = {cadence: 0 for cadence in Cadence}
        self._applied_seq = {cadence: 0 for cadence in Cadence}
        self._timers: dict[Cadence, asyncio.Task[None]] = {}
        self._inflight: set[asyncio.Task[Any]] = set()

    @property
    def is_active(self) -> bool:
        return self.state is SchedulerState.ACTIVE

    @property
    def timer_count(self) -> int:
        return sum(1 for task in self._timers.values() if not task.done())

    def interval_for(self, cadence: Cadence) -> float:
        if cadence is Cadence.MESSAGES:
            return self.settings.message_interval_seconds
        return self.settings.peer_interval_seconds

    def start(self) -> bool:
        if self.is_active:
            return False
        loop = asyncio.get_running_loop()
        self.state = SchedulerState.ACTIVE
        self.generation += 1
        logger.debug("Polling started (generation %s).", self.generation)
        for cadence in Cadence:
            self.poll_now(cadence)
        for cadence in Cadence:
            self._timers[cadence] = loop.create_task(
                self._run_cadence(cadence, self.interval_for(cadence))
            )
        return True

    def stop(self) -> bool:
        if not self.is_active:
            return False
        self.state = SchedulerState.SUSPENDED
        self.generation += 1
        for task in self._timers.values():
            task.cancel()
        self._timers.clear()
        logger.debug("Polling suspended (generation %s).", self.generation)
        return True

    async def _run_cadence(self, cadence: Cadence, interval: float) -> None:
        while True:
            await asyncio.sleep(interval)
            self.poll_now(cadence)

    def poll_now(self, cadence: Cadence) -> asyncio.Task[None] | None:
        if not self.is_active:
            logger.debug("Ignoring %s poll while suspended.", cadence.value)
            return None
        self._dispatched_seq[cadence] += 1
        return self.track(
            self._poll(cadence, self._dispatched_seq[cadence], self.generation)
        )

    def track(self, coro: Coroutine[Any, Any, Any]) -> asyncio.Task[Any]:
        task = asyncio.get_running_loop().create_task(coro)
        self._inflight.add(task)
        task.add_done_callback(self._inflight.discard)
        return task

    async def wait_idle(self) -> None:
        while self._inflight:
            await asyncio.gather(*list(self._inflight), return_exceptions=True)

    def is_current(self, generation: int) -> bool:
        return generation == self.generation

    def _accept(self, cadence: Cadence, sequence: int, generation: int) -> bool:
        if not self.is_current(generation):
            self.metrics.suspended_dropped += 1
            logger.debug(
                "Dropped %s response #%s from generation %s.",
                cadence.value,
                sequence,
                generation,
            )
            return False
        if sequence < self._applied_seq[cadence]:
            self.metrics.stale_dropped += 1
            logger.debug(
                "Dropped stale %s response #%s (already applied #%s).",
                cadence.value,
                sequence,
                self._applied_seq[cadence],
            )
            return False
        return True

    async def _poll(self, cadence: Cadence, sequence: int, generation: int) -> None:
        self.metrics.dispatched += 1
        try:
            if cadence is Cadence.MESSAGES:
                result: Any = await self.client.fetch_messages()
            else:
                result = await self.client.fetch_peers()
        except SyncError as exc:
            if self._accept(cadence, sequence, generation):
                self.metrics.failures += 1
                logger.warning("Failed to load %s: %s", cadence.value, exc)
                self.status_service.error(FAILURE_STATUS[cadence])
            return
        except Exception:
            if self._accept(cadence, sequence, generation):
                self.metrics.failures += 1
                logger.exception("Unexpected failure polling %s", cadence.value)
                self.status_service.error(FAILURE_STATUS[cadence])
            return

        if not self._accept(cadence, sequence, generation):
            return
        self._applied_seq[cadence] = sequence
        self.metrics.applied += 1
        if cadence is Cadence.MESSAGES:
            self.detector.apply_messages(result)
        else:
            self.detector.apply_peers(result)

    def snapshot_metrics(self) -> SyncMetrics:
        return replace(self.metrics)
