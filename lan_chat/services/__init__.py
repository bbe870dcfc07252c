from lan_chat.services.change_detector import ChangeDetector
from lan_chat.services.poll_scheduler import (
    Cadence,
    PollScheduler,
    SchedulerState,
    SyncMetrics,
)
from lan_chat.services.status_service import StatusService
from lan_chat.services.sync_engine import SyncEngine

__all__ = [
    "Cadence",
    "ChangeDetector",
    "PollScheduler",
    "SchedulerState",
    "StatusService",
    "SyncEngine",
    "SyncMetrics",
]
