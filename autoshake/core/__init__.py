"""Core capture loop and utilities.

This package provides the core functionality for AutoShake:
- Data models (CaptureRegion, Display, FrameSnapshot, State, AppConfig)
- Shared activation flag and configuration record
- Screen capture and luma region extraction
- Bright marker detection
- Capture loop state machine and its Qt worker
- Config file persistence and logging
- Platform-specific adapters
"""

from .constants import (
    ACTIVE_INTERVAL_SEC,
    BRIGHT_THRESHOLD,
    CONFIG_FILENAME,
    COOLDOWN_SEC,
    IDLE_INTERVAL_SEC,
    LOG_BUFFER_SIZE,
    MIN_MARKER_SPAN_PX,
)
from .model import (
    AppConfig,
    BoundingBox,
    CaptureConfig,
    CaptureRegion,
    ClipRect,
    Display,
    FrameSnapshot,
    HotkeysConfig,
    State,
    UiConfig,
)
from .shared import ActivationFlag, SharedConfig

__all__ = [
    # Constants
    "IDLE_INTERVAL_SEC",
    "ACTIVE_INTERVAL_SEC",
    "COOLDOWN_SEC",
    "BRIGHT_THRESHOLD",
    "MIN_MARKER_SPAN_PX",
    "CONFIG_FILENAME",
    "LOG_BUFFER_SIZE",
    # Models
    "State",
    "CaptureRegion",
    "ClipRect",
    "Display",
    "FrameSnapshot",
    "BoundingBox",
    "CaptureConfig",
    "HotkeysConfig",
    "UiConfig",
    "AppConfig",
    # Shared state
    "ActivationFlag",
    "SharedConfig",
]
