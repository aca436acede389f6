"""Parsers for kubectl JSON output."""

from kss.controllers.cluster.parsers.event_parser import EventParser
from kss.controllers.cluster.parsers.resource_parser import ResourceParser

__all__ = ["EventParser", "ResourceParser"]
