"""Fetchers for cluster controller."""

from kss.controllers.cluster.fetchers.event_fetcher import EventFetcher
from kss.controllers.cluster.fetchers.log_fetcher import LogFetcher
from kss.controllers.cluster.fetchers.resource_fetcher import ResourceFetcher

__all__ = ["EventFetcher", "LogFetcher", "ResourceFetcher"]
