"""Bright marker detection on luma images.

The detector takes one bounding box over every bright pixel in the image
and reports a marker when that box spans more than MIN_MARKER_SPAN_PX on
both axes. There is no connected-component analysis: scattered bright
specks far apart count the same as one large blob.
"""

from typing import Optional

import numpy as np

from .constants import BRIGHT_THRESHOLD, MIN_MARKER_SPAN_PX
from .model import BoundingBox


def find_bright_bbox(
    luma: np.ndarray,
    threshold: int = BRIGHT_THRESHOLD,
) -> Optional[BoundingBox]:
    """Bounding box of all pixels with luma >= threshold.

    Args:
        luma: Single-channel uint8 image
        threshold: Inclusive brightness threshold

    Returns:
        Bounding box, or None if no pixel qualifies
    """
    mask = luma >= threshold
    rows = np.flatnonzero(mask.any(axis=1))
    if rows.size == 0:
        return None
    cols = np.flatnonzero(mask.any(axis=0))

    return BoundingBox(
        min_x=int(cols[0]),
        min_y=int(rows[0]),
        max_x=int(cols[-1]),
        max_y=int(rows[-1]),
    )


def is_marker_present(luma: np.ndarray) -> bool:
    """Check whether the image contains a large enough bright region."""
    bbox = find_bright_bbox(luma)
    if bbox is None:
        return False
    return bbox.width > MIN_MARKER_SPAN_PX and bbox.height > MIN_MARKER_SPAN_PX
