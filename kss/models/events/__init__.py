"""Event models."""

from kss.models.events.event_info import EventInfo

__all__ = ["EventInfo"]
