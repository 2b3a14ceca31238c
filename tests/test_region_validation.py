"""Tests for capture region validation.

Verifies that:
- Regions fully on the display pass without warnings
- Negative corners and overhanging regions pass with warnings
- Regions with no area or an origin past the display are invalid
"""

import pytest

from autoshake.core.model import CaptureRegion, Display
from autoshake.core.os_adapter.validation import ValidationResult, validate_region


@pytest.fixture
def full_hd() -> Display:
    """Standard 1920x1080 primary display."""
    return Display(index=0, left=0, top=0, width=1920, height=1080)


@pytest.fixture
def small_display() -> Display:
    return Display(index=0, left=0, top=0, width=1024, height=768)


class TestValidationResult:
    """Test ValidationResult helper class."""

    def test_success_is_valid(self) -> None:
        result = ValidationResult.success()
        assert result.valid is True
        assert result.warnings == []
        assert bool(result) is True

    def test_invalid_is_falsy(self) -> None:
        assert not ValidationResult(valid=False, warnings=["x"])


class TestValidRegions:
    """Regions that will be sampled."""

    def test_default_region_on_full_hd(self, full_hd: Display) -> None:
        result = validate_region(CaptureRegion(122, 40, 1162, 586), full_hd)
        assert result.valid
        assert result.warnings == []

    def test_region_filling_display(self, full_hd: Display) -> None:
        result = validate_region(CaptureRegion(0, 0, 1920, 1080), full_hd)
        assert result.valid
        assert result.warnings == []

    def test_negative_origin_warns(self, full_hd: Display) -> None:
        result = validate_region(CaptureRegion(-10, 5, 100, 100), full_hd)
        assert result.valid
        assert len(result.warnings) == 1
        assert "clamped" in result.warnings[0]

    def test_overhang_warns(self, small_display: Display) -> None:
        """Default region is wider than a 1024px display."""
        result = validate_region(CaptureRegion(122, 40, 1162, 586), small_display)
        assert result.valid
        assert len(result.warnings) == 1
        assert "clipped" in result.warnings[0]

    def test_negative_and_overhang(self, small_display: Display) -> None:
        result = validate_region(CaptureRegion(-5, -5, 2000, 2000), small_display)
        assert result.valid
        assert len(result.warnings) == 2


class TestInvalidRegions:
    """Regions that will never be sampled."""

    @pytest.mark.parametrize(
        "region",
        [
            CaptureRegion(1920, 0, 10, 10),
            CaptureRegion(0, 1080, 10, 10),
            CaptureRegion(5000, 5000, 10, 10),
        ],
    )
    def test_origin_outside_display(self, full_hd: Display, region: CaptureRegion) -> None:
        result = validate_region(region, full_hd)
        assert not result.valid
        assert "outside" in result.warnings[0]

    @pytest.mark.parametrize(
        "region",
        [
            CaptureRegion(0, 0, 0, 10),
            CaptureRegion(0, 0, 10, 0),
            CaptureRegion(0, 0, -5, 10),
        ],
    )
    def test_no_area(self, full_hd: Display, region: CaptureRegion) -> None:
        result = validate_region(region, full_hd)
        assert not result.valid
        assert "no area" in result.warnings[0]
