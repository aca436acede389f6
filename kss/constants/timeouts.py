"""Timeout constants for the dashboard.

All timeout values for kubectl calls and AI requests.
"""

from typing import Final

# ============================================================================
# API/Cluster timeouts (string format for kubectl)
# ============================================================================

CLUSTER_REQUEST_TIMEOUT: Final = "30s"

# Process-level command timeout (must be greater than request timeout)
KUBECTL_COMMAND_TIMEOUT: Final = 45

# ============================================================================
# AI timeouts (float, in seconds)
# ============================================================================

GEMINI_REQUEST_TIMEOUT: Final = 60.0

__all__ = [
    "CLUSTER_REQUEST_TIMEOUT",
    "GEMINI_REQUEST_TIMEOUT",
    "KUBECTL_COMMAND_TIMEOUT",
]
