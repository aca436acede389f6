"""Timestamped Kubernetes event model."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta

from kss.constants.enums import EventType


@dataclass(frozen=True)
class EventInfo:
    """One event for a resource, with its offset from the resource creation."""

    timestamp: datetime
    type: str
    reason: str
    message: str
    count: int = 1
    offset: timedelta = timedelta(0)

    @property
    def is_warning(self) -> bool:
        return self.type == EventType.WARNING.value
