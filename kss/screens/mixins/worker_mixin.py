"""WorkerMixin - fetch worker bookkeeping for dashboard screens.

Every dashboard fetch runs in its own non-exclusive Textual worker, grouped by
the request slot it belongs to. A newer request never cancels an older one;
the screen's state discards stale completions instead. This mixin only names
the workers, times them and tears them down with the screen.
"""

from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from contextlib import suppress
from typing import Any

from textual._context import NoActiveAppError
from textual.worker import Worker, WorkerState

logger = logging.getLogger(__name__)

_FINISHED = frozenset({WorkerState.SUCCESS, WorkerState.CANCELLED, WorkerState.ERROR})


class WorkerMixin:
    """Mixin for screens that fan out concurrent fetch workers.

    Usage:
        ```python
        class MyScreen(WorkerMixin, Screen):
            def on_mount(self) -> None:
                self.start_worker(self._load, name="resources-1", group="resources")
        ```
    """

    def __init__(self, *args: Any, **kwargs: Any) -> None:
        super().__init__(*args, **kwargs)
        self._fetch_started: dict[str, float] = {}

    def start_worker(
        self,
        worker_func: Callable[[], Awaitable[Any]],
        *,
        name: str,
        group: str = "default",
    ) -> Worker[Any]:
        """Run ``worker_func`` alongside any workers already in flight.

        Workers must report failures through a message rather than raise.
        """
        self._fetch_started[name] = time.monotonic()
        logger.debug("Starting worker '%s' in group '%s'", name, group)
        return self.run_worker(  # type: ignore[attr-defined]
            worker_func,
            name=name,
            group=group,
            exclusive=False,
            exit_on_error=False,
        )

    def cancel_workers(self) -> None:
        with suppress(NoActiveAppError):
            self.workers.cancel_node(self)  # type: ignore[attr-defined]
        self._fetch_started.clear()

    def on_unmount(self) -> None:
        self.cancel_workers()

    def on_worker_state_changed(self, event: Worker.StateChanged) -> None:
        if event.state not in _FINISHED:
            return

        worker = event.worker
        started = self._fetch_started.pop(worker.name, None)
        elapsed_ms = (time.monotonic() - started) * 1000 if started is not None else 0.0

        # A raising worker means a fetch path skipped its completion message.
        if event.state is WorkerState.ERROR:
            logger.error(
                "Worker '%s' [%s] raised %r after %.1fms",
                worker.name,
                worker.group,
                worker.error,
                elapsed_ms,
            )
        else:
            logger.debug(
                "Worker '%s' [%s] %s after %.1fms",
                worker.name,
                worker.group,
                event.state.name.lower(),
                elapsed_ms,
            )


__all__ = ["WorkerMixin"]
