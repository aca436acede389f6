"""Controllers that talk to the cluster control plane."""

from kss.controllers.base import BaseController, CollaboratorError
from kss.controllers.cluster import ClusterController

__all__ = [
    "BaseController",
    "ClusterController",
    "CollaboratorError",
]
