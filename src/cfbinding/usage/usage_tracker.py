"""Usage telemetry for binding operations."""

from typing import Any, Dict, List

from cfbinding.config.logging_config import get_logger

log = get_logger(__name__)

CHISEL_TASK_EVENT = "Chisel Task"
CF_TOOLS_CATEGORY = "CF tools"


class LoggingUsageTracker:
    """Records usage events in the log and keeps a per-event counter.

    Transport to a telemetry backend belongs to the host application; this
    tracker only makes the events observable.
    """

    def __init__(self):
        self.counts: Dict[str, int] = {}

    async def track_chisel_task(self, label: str, categories: List[str]) -> None:
        self.track(label, categories)

    def track(self, event: str, categories: List[str], **properties: Any) -> None:
        self.counts[event] = self.counts.get(event, 0) + 1
        log.debug(f"Usage event '{event}' categories={categories} properties={properties}")
