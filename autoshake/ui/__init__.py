"""UI components for AutoShake.

This package provides PySide6-based overlays:
- StatusOverlay: Always-on-top activation/state label
- RegionOverlay: Capture region viewer/editor
- StatusIndicator: Colored state dot with text
"""

from .region_overlay import DragMode, RegionOverlay
from .status_overlay import StatusOverlay
from .widgets import StatusIndicator

__all__ = [
    "StatusOverlay",
    "RegionOverlay",
    "DragMode",
    "StatusIndicator",
]
