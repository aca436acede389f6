"""Resource parser - turns kubectl JSON into validated resource models."""

from __future__ import annotations

import json
import logging
from typing import Any, TypeVar

from pydantic import BaseModel, ValidationError

from kss.controllers.base import CollaboratorError

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


class ResourceParser:
    """Parses kubectl ``-o json`` output into pydantic models."""

    @staticmethod
    def load_json(output: str, what: str) -> dict[str, Any]:
        """Decode kubectl JSON output, raising ``CollaboratorError`` when malformed."""
        try:
            data = json.loads(output)
        except json.JSONDecodeError as exc:
            logger.debug("Error parsing %s JSON", what, exc_info=True)
            raise CollaboratorError(f"could not parse {what}: {exc}") from exc
        if not isinstance(data, dict):
            raise CollaboratorError(f"could not parse {what}: expected a JSON object")
        return data

    @classmethod
    def parse(cls, output: str, model: type[ModelT], what: str) -> ModelT:
        data = cls.load_json(output, what)
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise CollaboratorError(f"could not parse {what}: {exc}") from exc
