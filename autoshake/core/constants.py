"""Global constants for the capture loop, detector and configuration."""

from typing import Final

# Loop timing
IDLE_INTERVAL_SEC: Final[float] = 0.1
"""Sleep between activation checks while the flag is off"""

ACTIVE_INTERVAL_SEC: Final[float] = 0.05
"""Sleep after a sampling cycle without detection (or a skipped cycle)"""

COOLDOWN_SEC: Final[float] = 0.5
"""Sleep after a positive detection to avoid double triggers"""

# Detection policy (fixed, not configurable)
BRIGHT_THRESHOLD: Final[int] = 240
"""Minimum luma (inclusive) for a pixel to count as bright"""

MIN_MARKER_SPAN_PX: Final[int] = 40
"""Bounding box span must be strictly greater than this on both axes"""

# Display selection
DISPLAY_INDEX: Final[int] = 0
"""Index into the enumerated physical displays (first one wins)"""

# Luma conversion weights (ITU-R BT.601)
LUMA_WEIGHT_R: Final[float] = 0.299
LUMA_WEIGHT_G: Final[float] = 0.587
LUMA_WEIGHT_B: Final[float] = 0.114

# Configuration defaults
CONFIG_FILENAME: Final[str] = "auto_shake.json"

DEFAULT_CAPTURE_WIDTH: Final[int] = 1162
DEFAULT_CAPTURE_HEIGHT: Final[int] = 586
DEFAULT_CAPTURE_X: Final[int] = 122
DEFAULT_CAPTURE_Y: Final[int] = 40

DEFAULT_HOTKEY_TOGGLE_BOX: Final[str] = "F3"
DEFAULT_HOTKEY_TOGGLE_ACTION: Final[str] = "F4"
DEFAULT_HOTKEY_EXIT_APP: Final[str] = "F5"

DEFAULT_STATUS_X: Final[int] = 85
DEFAULT_STATUS_Y: Final[int] = 1

# Logging
LOG_BUFFER_SIZE: Final[int] = 200
"""Circular log buffer capacity"""

# Region box overlay
REGION_HANDLE_PX: Final[int] = 14
"""Size of the resize handle in the bottom-right corner of the region box"""

REGION_NUDGE_PX: Final[int] = 1
REGION_NUDGE_FAST_PX: Final[int] = 10
