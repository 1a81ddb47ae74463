"""
Audit logger for generator lifecycle and sampling events.

Responsibility boundaries:
- Handles structured event logging.
- Should write immutable records.
- Never configures handlers; the host application owns logging output.

Mutation constraints:
- Only the most recent `max_events` records are retained; older ones are
  dropped from memory but were already emitted to `logging`.
"""

import logging
from collections import deque
from dataclasses import dataclass
from types import MappingProxyType
from typing import Any, Deque, Dict, List, Mapping, Optional, Tuple

from rng_facade.core.errors import InvalidParameterError

DEFAULT_MAX_EVENTS = 1000

_WARNING_EVENTS = frozenset({"sampling_timeout"})


@dataclass(frozen=True)
class AuditEvent:
    event_type: str
    data: Mapping[str, Any]


class AuditLogger:
    """
    A centralized logger for audit purposes.
    """

    def __init__(self, name: str = "rng_facade", max_events: int = DEFAULT_MAX_EVENTS) -> None:
        if isinstance(max_events, bool) or not isinstance(max_events, int) or max_events < 1:
            raise InvalidParameterError(f"max_events must be a positive int, got {max_events!r}.")
        self._logger = logging.getLogger(name)
        self._events: Deque[AuditEvent] = deque(maxlen=max_events)

    @property
    def name(self) -> str:
        return self._logger.name

    @property
    def max_events(self) -> int:
        return self._events.maxlen

    @property
    def events(self) -> Tuple[AuditEvent, ...]:
        return tuple(self._events)

    def log_event(self, event_type: str, data: Dict[str, Any]) -> None:
        """
        Log a specific event.

        Args:
            event_type: The category of the event.
            data: The event payload.
        """
        event = AuditEvent(event_type, MappingProxyType(dict(data)))
        self._events.append(event)
        level = logging.WARNING if event_type in _WARNING_EVENTS else logging.DEBUG
        self._logger.log(level, "%s %s", event_type, dict(event.data))

    def events_of(self, event_type: str) -> List[AuditEvent]:
        """Return retained events of one category, oldest first."""
        return [e for e in self._events if e.event_type == event_type]

    def clear(self) -> None:
        self._events.clear()


_DEFAULT_LOGGER: Optional[AuditLogger] = None


def get_audit_logger() -> AuditLogger:
    """Return the module-wide audit logger, creating it on first use."""
    global _DEFAULT_LOGGER
    if _DEFAULT_LOGGER is None:
        _DEFAULT_LOGGER = AuditLogger()
    return _DEFAULT_LOGGER
