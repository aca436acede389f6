"""Log fetcher for cluster controller - tail-limited container logs."""

from __future__ import annotations

from collections.abc import Awaitable, Callable

RunKubectl = Callable[[tuple[str, ...]], Awaitable[str]]


class LogFetcher:
    """Fetches logs for one container, optionally from its previous instance."""

    def __init__(self, run_kubectl_func: RunKubectl) -> None:
        self._run_kubectl = run_kubectl_func

    @staticmethod
    def _build_logs_args(
        pod_name: str, container: str, max_lines: int, previous: bool
    ) -> tuple[str, ...]:
        args = ["logs", f"--tail={max_lines}", pod_name, "-c", container]
        if previous:
            args.append("-p")
        return tuple(args)

    async def fetch_logs(
        self,
        pod_name: str,
        container: str,
        max_lines: int,
        previous: bool = False,
    ) -> str:
        output = await self._run_kubectl(
            self._build_logs_args(pod_name, container, max_lines, previous)
        )
        return output.strip()
