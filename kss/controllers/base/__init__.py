"""Base controller abstractions."""

from kss.controllers.base.base_controller import BaseController, CollaboratorError

__all__ = ["BaseController", "CollaboratorError"]
