"""Event fetcher for cluster controller - fetches event data for one resource."""

from __future__ import annotations

import logging
from collections.abc import Awaitable, Callable
from datetime import datetime

from kss.constants.timeouts import CLUSTER_REQUEST_TIMEOUT
from kss.controllers.cluster.parsers import EventParser, ResourceParser
from kss.models.events.event_info import EventInfo

logger = logging.getLogger(__name__)

RunKubectl = Callable[[tuple[str, ...]], Awaitable[str]]


class EventFetcher:
    """Fetches events whose involved object is a named resource."""

    _EVENT_QUERY_TIMEOUT = CLUSTER_REQUEST_TIMEOUT

    def __init__(self, run_kubectl_func: RunKubectl) -> None:
        """Initialize with kubectl runner function.

        Args:
            run_kubectl_func: Async function to run kubectl commands
        """
        self._run_kubectl = run_kubectl_func
        self._parser = EventParser()

    def _build_events_args(self, name: str, kind: str) -> tuple[str, ...]:
        """Build event query arguments scoped to one involved object."""
        return (
            "get",
            "events",
            f"--field-selector=involvedObject.name={name},involvedObject.kind={kind}",
            "-o",
            "json",
            f"--request-timeout={self._EVENT_QUERY_TIMEOUT}",
        )

    async def fetch_events(
        self,
        name: str,
        kind: str,
        created_at: datetime | None = None,
    ) -> list[EventInfo]:
        """Fetch, filter, sort and offset events for ``kind/name``."""
        output = await self._run_kubectl(self._build_events_args(name, kind))
        if not output.strip():
            return []
        data = ResourceParser.load_json(output, f"events for {kind} {name}")
        items = data.get("items") or []
        events = self._parser.parse(items, created_at)
        logger.debug("Fetched %d timestamped events for %s %s", len(events), kind, name)
        return events

    async def fetch_events_raw(self, name: str, kind: str) -> str:
        """Return the unparsed events JSON for ``kind/name``."""
        return await self._run_kubectl(self._build_events_args(name, kind))
