"""Capture region validation.

The loop clips any region to the captured frame, so an off-screen region
is never an error at runtime. These checks exist to tell the user early
that (part of) the configured rectangle will not be sampled.
"""

from dataclasses import dataclass, field

from ..model import CaptureRegion, Display


@dataclass
class ValidationResult:
    """Result of a validation check.

    Attributes:
        valid: True if the region will be sampled at all
        warnings: Human-readable problems found
    """

    valid: bool
    warnings: list[str] = field(default_factory=list)

    @classmethod
    def success(cls) -> "ValidationResult":
        return cls(valid=True, warnings=[])

    def __bool__(self) -> bool:
        return self.valid


def validate_region(region: CaptureRegion, display: Display) -> ValidationResult:
    """Check a capture region against the display it is sampled from.

    Args:
        region: Configured capture rectangle (display-relative)
        display: Display the loop captures

    Returns:
        valid=False when nothing of the region lies on the display;
        warnings for negative corners or parts hanging off the display
    """
    result = ValidationResult.success()

    if region.width <= 0 or region.height <= 0:
        result.valid = False
        result.warnings.append(
            f"Capture region has no area ({region.width}x{region.height})"
        )
        return result

    if region.x >= display.width or region.y >= display.height:
        result.valid = False
        result.warnings.append(
            f"Capture region origin ({region.x}, {region.y}) is outside "
            f"display {display.index} ({display.width}x{display.height})"
        )
        return result

    if region.x < 0 or region.y < 0:
        result.warnings.append(
            f"Capture region origin ({region.x}, {region.y}) is negative and "
            "will be clamped to 0"
        )

    if region.x + region.width > display.width or region.y + region.height > display.height:
        result.warnings.append(
            f"Capture region {region.width}x{region.height} at ({region.x}, {region.y}) "
            f"extends past display {display.index} ({display.width}x{display.height}) "
            "and will be clipped"
        )

    return result
