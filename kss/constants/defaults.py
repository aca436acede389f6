"""Default values for settings.

All default values used in AppSettings model and validation fallback values.
"""

from typing import Final

# ============================================================================
# Dashboard defaults
# ============================================================================

KIND_DEFAULT: Final = "pod"
REFRESH_INTERVAL_DEFAULT: Final = 30
AUTO_REFRESH_DEFAULT: Final = False

# ============================================================================
# Report defaults
# ============================================================================

WATCH_INTERVAL_DEFAULT: Final = 2

# ============================================================================
# AI defaults
# ============================================================================

PERSONA_DEFAULT: Final = "butler"
GEMINI_MODEL_DEFAULT: Final = "gemini-2.5-flash-lite"

# ============================================================================
# Logging defaults
# ============================================================================

LOG_LEVEL_DEFAULT: Final = "WARNING"

__all__ = [
    "AUTO_REFRESH_DEFAULT",
    "GEMINI_MODEL_DEFAULT",
    "KIND_DEFAULT",
    "LOG_LEVEL_DEFAULT",
    "PERSONA_DEFAULT",
    "REFRESH_INTERVAL_DEFAULT",
    "WATCH_INTERVAL_DEFAULT",
]
