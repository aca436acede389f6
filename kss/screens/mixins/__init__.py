"""Screen mixins."""

from kss.screens.mixins.worker_mixin import WorkerMixin

__all__ = ["WorkerMixin"]
