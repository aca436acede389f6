"""Interactive Kubernetes diagnosis dashboard."""

__version__ = "0.1.0"
