"""Cluster controller and its fetchers."""

from kss.controllers.cluster.controller import ClusterController

__all__ = ["ClusterController"]
