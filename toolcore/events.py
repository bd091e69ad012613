"""
Tool Core - Events.

============================================================
RESPONSIBILITY
============================================================
Named events exchanged between subsystems and the orchestrator.

- EventKind enumerates every event the orchestrator reacts to
- Event is an immutable tagged value (kind + payload)
- EventBus is the single dispatch queue of the invocation

Subsystems only post. The orchestrator is the only consumer.

============================================================
"""

import asyncio
import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, List, Mapping, Optional


logger = logging.getLogger(__name__)


# ============================================================
# EVENT KINDS
# ============================================================

class EventKind(Enum):
    """Every event kind the tool emits."""

    COMMAND_FINISHED = "command_finished"
    COMMAND_ERROR = "command_error"

    LICENSE_SUCCESS = "license_success"
    LICENSE_ERROR = "license_error"
    LICENSE_EULA_REQUIRED = "license_eula_required"
    LICENSE_ACTIVATION_REQUIRED = "license_activation_required"

    LICENSE_ACTIVATION_SUCCESS = "license_activation_success"
    LICENSE_ACTIVATION_ERROR = "license_activation_error"

    LICENSE_DEACTIVATION_SUCCESS = "license_deactivation_success"
    LICENSE_DEACTIVATION_ERROR = "license_deactivation_error"

    @property
    def is_command_event(self) -> bool:
        """Check if event comes from a running command."""
        return self in (EventKind.COMMAND_FINISHED, EventKind.COMMAND_ERROR)

    @property
    def is_license_event(self) -> bool:
        """Check if event comes from the license subsystem."""
        return not self.is_command_event


# ============================================================
# EVENT
# ============================================================

@dataclass(frozen=True)
class Event:
    """A single event with its payload."""

    kind: EventKind
    data: Mapping[str, Any] = field(default_factory=dict)
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @property
    def message(self) -> str:
        """Payload message field, empty when absent."""
        value = self.data.get("message")
        return str(value) if value else ""

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to dictionary."""
        return {
            "kind": self.kind.value,
            "data": dict(self.data),
            "timestamp": self.timestamp.isoformat(),
        }


# ============================================================
# EVENT BUS
# ============================================================

class EventBus:
    """
    FIFO queue of events for one invocation.

    post() never blocks, so it is safe to call from any
    handler running on the loop.
    """

    def __init__(self, max_history: int = 100):
        self._queue: Optional[asyncio.Queue] = None
        self._history: List[Event] = []
        self._max_history = max_history

    @property
    def queue(self) -> asyncio.Queue:
        # Created lazily so it binds to the loop that consumes it
        if self._queue is None:
            self._queue = asyncio.Queue()
        return self._queue

    @property
    def history(self) -> List[Event]:
        """Events posted so far, oldest first."""
        return list(self._history)

    @property
    def pending(self) -> int:
        """Number of events not yet consumed."""
        return self.queue.qsize()

    def post(self, kind: EventKind, **data: Any) -> Event:
        """Post an event."""
        event = Event(kind=kind, data=data)
        self._history.append(event)
        if len(self._history) > self._max_history:
            self._history = self._history[-self._max_history:]

        logger.debug(f"Event posted | kind={kind.value} | data={data}")
        self.queue.put_nowait(event)
        return event

    async def next_event(self) -> Event:
        """Wait for the next event."""
        return await self.queue.get()


__all__ = [
    "EventKind",
    "Event",
    "EventBus",
]
