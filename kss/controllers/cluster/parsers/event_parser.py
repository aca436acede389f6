"""Event parser - turns raw event items into a sorted, offset timeline."""

from __future__ import annotations

from contextlib import suppress
from datetime import datetime, timedelta
from typing import Any

from kss.models.events.event_info import EventInfo
from kss.utils.time_format import parse_timestamp


class EventParser:
    """Parses Kubernetes event items into ``EventInfo`` records."""

    @staticmethod
    def _parse_event_count(event: dict[str, Any]) -> int:
        """Parse event count across core/events.k8s.io shapes."""
        raw_value = (
            event.get("count")
            or event.get("deprecatedCount")
            or (event.get("series") or {}).get("count")
            or 1
        )
        with suppress(ValueError, TypeError):
            return max(1, int(raw_value))
        return 1

    @staticmethod
    def _event_timestamp(event: dict[str, Any]) -> datetime | None:
        return parse_timestamp(
            event.get("lastTimestamp")
            or event.get("eventTime")
            or event.get("firstTimestamp")
        )

    def parse(
        self,
        items: list[dict[str, Any]],
        created_at: datetime | None = None,
    ) -> list[EventInfo]:
        """Drop untimestamped events, sort ascending and compute offsets.

        Offsets are measured from ``created_at`` when known, otherwise from
        the earliest event. Negative offsets clamp to zero.
        """
        stamped: list[tuple[datetime, dict[str, Any]]] = []
        for event in items:
            if not isinstance(event, dict):
                continue
            timestamp = self._event_timestamp(event)
            if timestamp is not None:
                stamped.append((timestamp, event))
        stamped.sort(key=lambda pair: pair[0])
        if not stamped:
            return []

        origin = created_at or stamped[0][0]
        return [
            EventInfo(
                timestamp=timestamp,
                type=str(event.get("type") or ""),
                reason=str(event.get("reason") or ""),
                message=str(event.get("message") or "").strip(),
                count=self._parse_event_count(event),
                offset=max(timedelta(0), timestamp - origin),
            )
            for timestamp, event in stamped
        ]
