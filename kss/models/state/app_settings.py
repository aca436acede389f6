"""Application settings models."""

from pydantic import BaseModel, ConfigDict, Field

from kss.constants.defaults import (
    AUTO_REFRESH_DEFAULT,
    GEMINI_MODEL_DEFAULT,
    KIND_DEFAULT,
    PERSONA_DEFAULT,
    REFRESH_INTERVAL_DEFAULT,
)
from kss.constants.limits import (
    DOCTOR_LOG_LINES,
    PIPELINE_LOG_LINES,
    REFRESH_INTERVAL_MIN,
)
from kss.constants.timeouts import KUBECTL_COMMAND_TIMEOUT


class AppSettings(BaseModel):
    """Application settings model with validation."""

    model_config = ConfigDict(populate_by_name=True)

    # Cluster scope
    namespace: str = ""
    context: str = ""
    kind: str = KIND_DEFAULT  # pod|pipelinerun

    # Dashboard refresh
    auto_refresh: bool = AUTO_REFRESH_DEFAULT
    refresh_interval: int = Field(default=REFRESH_INTERVAL_DEFAULT, ge=REFRESH_INTERVAL_MIN)

    # Logs
    max_log_lines: int = Field(default=DOCTOR_LOG_LINES, ge=1)
    pipeline_log_lines: int = Field(default=PIPELINE_LOG_LINES, ge=1)
    kubectl_timeout: int = Field(default=KUBECTL_COMMAND_TIMEOUT, ge=1)

    # AI explanation
    persona: str = PERSONA_DEFAULT
    gemini_model: str = GEMINI_MODEL_DEFAULT


class ConfigError(Exception):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when settings fail to load."""


class ConfigSaveError(ConfigError):
    """Raised when settings fail to save."""
