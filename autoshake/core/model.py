"""Core data models for AutoShake.

Defines the capture region, display and frame types, the loop state
machine enum and the persisted application configuration.
"""

from dataclasses import asdict, dataclass, field, fields, replace
from enum import Enum, auto
from typing import Any, Optional

import numpy as np

from .constants import (
    DEFAULT_CAPTURE_HEIGHT,
    DEFAULT_CAPTURE_WIDTH,
    DEFAULT_CAPTURE_X,
    DEFAULT_CAPTURE_Y,
    DEFAULT_HOTKEY_EXIT_APP,
    DEFAULT_HOTKEY_TOGGLE_ACTION,
    DEFAULT_HOTKEY_TOGGLE_BOX,
    DEFAULT_STATUS_X,
    DEFAULT_STATUS_Y,
)


class State(Enum):
    """Capture loop states."""

    Idle = auto()
    """Activation flag is off, or the last cycle was skipped"""

    Sampling = auto()
    """Running one capture-extract-detect cycle"""

    Cooldown = auto()
    """Sleeping after a positive detection"""


@dataclass(frozen=True)
class CaptureRegion:
    """Rectangle requested for sampling, relative to the selected display.

    Attributes:
        x: Left edge (negative values are clamped at extraction time)
        y: Top edge (negative values are clamped at extraction time)
        width: Nominal width
        height: Nominal height
    """

    x: int
    y: int
    width: int
    height: int

    def moved(self, dx: int, dy: int) -> "CaptureRegion":
        """Return a copy shifted by (dx, dy)."""
        return replace(self, x=self.x + dx, y=self.y + dy)

    def resized(self, dw: int, dh: int) -> "CaptureRegion":
        """Return a copy grown by (dw, dh); size never drops below 1x1."""
        return replace(
            self,
            width=max(1, self.width + dw),
            height=max(1, self.height + dh),
        )


@dataclass(frozen=True)
class ClipRect:
    """Rectangle actually read from a snapshot after clipping."""

    x: int
    y: int
    width: int
    height: int

    @property
    def is_empty(self) -> bool:
        return self.width == 0 or self.height == 0


@dataclass(frozen=True)
class Display:
    """A physical display as enumerated by the capture backend.

    Attributes:
        index: Position in the enumeration (0 = first display)
        left: Left edge in virtual desktop coordinates
        top: Top edge in virtual desktop coordinates
        width: Width in pixels
        height: Height in pixels
    """

    index: int
    left: int
    top: int
    width: int
    height: int

    def as_monitor(self) -> dict[str, int]:
        """Return the mss monitor dict for this display."""
        return {
            "left": self.left,
            "top": self.top,
            "width": self.width,
            "height": self.height,
        }


@dataclass(frozen=True, eq=False)
class FrameSnapshot:
    """Full-frame color image of one display at one instant.

    Attributes:
        pixels: BGRA (or BGR) uint8 array of shape (height, width, channels),
            read-only view over the array passed in
        display: Display the frame was grabbed from
    """

    pixels: np.ndarray
    display: Optional[Display] = None

    def __post_init__(self) -> None:
        # Read-only view; the caller's array keeps its own flags
        view = self.pixels.view()
        view.setflags(write=False)
        object.__setattr__(self, "pixels", view)

    @property
    def width(self) -> int:
        return int(self.pixels.shape[1])

    @property
    def height(self) -> int:
        return int(self.pixels.shape[0])


@dataclass(frozen=True)
class BoundingBox:
    """Axis-aligned bounding box of pixels matching a predicate.

    width/height are point-to-point spans (max - min), not inclusive counts.
    """

    min_x: int
    min_y: int
    max_x: int
    max_y: int

    @property
    def width(self) -> int:
        return self.max_x - self.min_x

    @property
    def height(self) -> int:
        return self.max_y - self.min_y


# Persisted configuration


@dataclass
class CaptureConfig:
    """Capture rectangle section of the config file."""

    capture_width: int = DEFAULT_CAPTURE_WIDTH
    capture_height: int = DEFAULT_CAPTURE_HEIGHT
    capture_x: int = DEFAULT_CAPTURE_X
    capture_y: int = DEFAULT_CAPTURE_Y

    @property
    def region(self) -> CaptureRegion:
        return CaptureRegion(
            x=self.capture_x,
            y=self.capture_y,
            width=self.capture_width,
            height=self.capture_height,
        )


@dataclass
class HotkeysConfig:
    """Hotkey names, e.g. "F3" or "ctrl+shift+a"."""

    toggle_box: str = DEFAULT_HOTKEY_TOGGLE_BOX
    toggle_action: str = DEFAULT_HOTKEY_TOGGLE_ACTION
    exit_app: str = DEFAULT_HOTKEY_EXIT_APP


@dataclass
class UiConfig:
    """Status overlay settings."""

    enable_overlay: bool = True
    status_x: int = DEFAULT_STATUS_X
    status_y: int = DEFAULT_STATUS_Y


def _section_from_dict(cls: type, data: Any) -> Any:
    """Build a config section, keeping defaults for missing keys.

    Raises:
        ValueError: If data is not a mapping or a value has the wrong type
    """
    if not isinstance(data, dict):
        raise ValueError(f"section {cls.__name__} must be a table, got {type(data).__name__}")

    defaults = cls()
    values = {}
    for f in fields(cls):
        if f.name not in data:
            continue
        value = data[f.name]
        expected = type(getattr(defaults, f.name))
        # bool is a subclass of int; reject it for int fields
        if expected is int and (isinstance(value, bool) or not isinstance(value, int)):
            raise ValueError(f"{cls.__name__}.{f.name} must be an integer")
        if not isinstance(value, expected):
            raise ValueError(f"{cls.__name__}.{f.name} must be {expected.__name__}")
        values[f.name] = value
    return cls(**values)


@dataclass
class AppConfig:
    """Complete persisted configuration.

    Attributes:
        capture: Capture rectangle
        hotkeys: Global hotkey names
        ui: Status overlay settings
    """

    capture: CaptureConfig = field(default_factory=CaptureConfig)
    hotkeys: HotkeysConfig = field(default_factory=HotkeysConfig)
    ui: UiConfig = field(default_factory=UiConfig)

    @property
    def region(self) -> CaptureRegion:
        return self.capture.region

    def with_region(self, region: CaptureRegion) -> "AppConfig":
        """Return a copy with the capture rectangle replaced."""
        return replace(
            self.copy(),
            capture=CaptureConfig(
                capture_width=region.width,
                capture_height=region.height,
                capture_x=region.x,
                capture_y=region.y,
            ),
        )

    def copy(self) -> "AppConfig":
        return AppConfig(
            capture=replace(self.capture),
            hotkeys=replace(self.hotkeys),
            ui=replace(self.ui),
        )

    def to_dict(self) -> dict[str, dict[str, Any]]:
        return asdict(self)

    @classmethod
    def from_dict(cls, data: Any) -> "AppConfig":
        """Parse a config mapping.

        Missing sections and keys fall back to defaults, unknown keys
        are ignored.

        Raises:
            ValueError: If the data or a section is malformed
        """
        if not isinstance(data, dict):
            raise ValueError("config root must be a table")
        return cls(
            capture=_section_from_dict(CaptureConfig, data.get("capture", {})),
            hotkeys=_section_from_dict(HotkeysConfig, data.get("hotkeys", {})),
            ui=_section_from_dict(UiConfig, data.get("ui", {})),
        )
