"""AI explanation of failing resources."""

from kss.ai.context import build_pipeline_run_prompt, build_pod_prompt
from kss.ai.gemini import (
    ExplainError,
    GeminiClient,
    NoCandidatesError,
    api_key_from_env,
)
from kss.ai.personas import PERSONAS, persona_display_name, persona_instructions

__all__ = [
    "PERSONAS",
    "ExplainError",
    "GeminiClient",
    "NoCandidatesError",
    "api_key_from_env",
    "build_pipeline_run_prompt",
    "build_pod_prompt",
    "persona_display_name",
    "persona_instructions",
]
