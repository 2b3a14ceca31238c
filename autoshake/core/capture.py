"""Screen capture and region extraction.

Grabs full frames of a display with mss and turns a requested capture
rectangle into a clipped single-channel luma image.
"""

import threading
from typing import Optional

import mss
import numpy as np

from .constants import LUMA_WEIGHT_B, LUMA_WEIGHT_G, LUMA_WEIGHT_R
from .logging import Logger, get_logger
from .model import CaptureRegion, ClipRect, Display, FrameSnapshot

# mss keeps Windows GDI handles in thread-local storage, so an instance
# created on one thread fails on another. Each thread gets its own.
_thread_local = threading.local()


def _get_mss() -> "mss.base.MSSBase":
    """Get or create the calling thread's mss instance."""
    sct = getattr(_thread_local, "mss_instance", None)
    if sct is None:
        sct = mss.mss()
        _thread_local.mss_instance = sct
    return sct


def _reset_mss() -> None:
    """Drop the calling thread's mss instance (after a capture error)."""
    sct = getattr(_thread_local, "mss_instance", None)
    _thread_local.mss_instance = None
    if sct is not None:
        try:
            sct.close()
        except Exception:
            pass  # instance is already broken


class MssFrameSource:
    """Display enumeration and full-frame capture backed by mss.

    Both operations fail softly: errors are logged and reported as an
    empty display list or a missing snapshot, never raised.
    """

    def __init__(self, logger: Optional[Logger] = None) -> None:
        self._logger = logger or get_logger()

    def list_displays(self) -> list[Display]:
        """Enumerate physical displays in backend order.

        Returns:
            Displays (mss monitors[1:]); empty if none or on error
        """
        try:
            monitors = _get_mss().monitors
        except Exception as e:
            self._logger.warning(f"Display enumeration failed: {e}")
            _reset_mss()
            return []

        # monitors[0] is the combined virtual screen
        return [
            Display(
                index=i,
                left=m["left"],
                top=m["top"],
                width=m["width"],
                height=m["height"],
            )
            for i, m in enumerate(monitors[1:])
        ]

    def capture(self, display: Display) -> Optional[FrameSnapshot]:
        """Grab a full frame of the display.

        Returns:
            BGRA snapshot, or None on a transient capture error
        """
        try:
            screenshot = _get_mss().grab(display.as_monitor())
            # Shape: (height, width, 4), BGRA
            pixels = np.array(screenshot, dtype=np.uint8)
        except Exception as e:
            self._logger.warning(f"Capture of display {display.index} failed: {e}")
            _reset_mss()
            return None

        return FrameSnapshot(pixels=pixels, display=display)


def clip_region(region: CaptureRegion, width: int, height: int) -> ClipRect:
    """Clip a requested region to a width x height image.

    Negative corners clamp to 0, corners past the image clamp to its
    edge, and the size shrinks to whatever fits.

    Args:
        region: Requested rectangle
        width: Image width
        height: Image height

    Returns:
        Clipped rectangle (possibly empty)
    """
    cx = min(max(region.x, 0), width)
    cy = min(max(region.y, 0), height)
    cw = max(0, min(region.width, width - cx))
    ch = max(0, min(region.height, height - cy))
    return ClipRect(x=cx, y=cy, width=cw, height=ch)


def to_luma(image: np.ndarray) -> np.ndarray:
    """Convert a BGR/BGRA image to luma.

    Uses ITU-R BT.601 weights: Y = round(0.299*R + 0.587*G + 0.114*B),
    clipped to [0, 255].

    Args:
        image: uint8 array of shape (h, w, 3|4) in mss channel order,
            or an already single-channel (h, w) array

    Returns:
        New uint8 array of shape (h, w)
    """
    if image.ndim == 2:
        return image.astype(np.uint8, copy=True)

    b = image[:, :, 0].astype(np.float64)
    g = image[:, :, 1].astype(np.float64)
    r = image[:, :, 2].astype(np.float64)

    luma = LUMA_WEIGHT_R * r + LUMA_WEIGHT_G * g + LUMA_WEIGHT_B * b
    return np.clip(np.rint(luma), 0, 255).astype(np.uint8)


def extract_luma(
    snapshot: FrameSnapshot,
    region: CaptureRegion,
) -> Optional[np.ndarray]:
    """Crop the region out of a snapshot as a luma image.

    Args:
        snapshot: Full display frame
        region: Requested rectangle in display coordinates

    Returns:
        Luma image of the clipped rectangle, or None when nothing of the
        region lies on the snapshot
    """
    clip = clip_region(region, snapshot.width, snapshot.height)
    if clip.is_empty:
        return None

    # numpy uses [y, x] indexing (row, column)
    cropped = snapshot.pixels[clip.y:clip.y + clip.height, clip.x:clip.x + clip.width]
    return to_luma(cropped)
