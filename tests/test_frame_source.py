"""Tests for the mss-backed frame source with mss mocked out."""

from unittest.mock import MagicMock

import numpy as np
import pytest

from autoshake.core import capture
from autoshake.core.capture import MssFrameSource
from autoshake.core.logging import Logger, LogLevel
from autoshake.core.model import Display


@pytest.fixture
def fake_mss(monkeypatch: pytest.MonkeyPatch) -> MagicMock:
    """Replace the thread-local mss instance with a mock."""
    sct = MagicMock()
    sct.monitors = [
        {"left": -1920, "top": 0, "width": 3840, "height": 1080},
        {"left": 0, "top": 0, "width": 1920, "height": 1080},
        {"left": -1920, "top": 0, "width": 1920, "height": 1080},
    ]
    monkeypatch.setattr(capture, "_get_mss", lambda: sct)
    monkeypatch.setattr(capture, "_reset_mss", MagicMock())
    return sct


class TestListDisplays:
    """Tests for MssFrameSource.list_displays()."""

    def test_skips_virtual_screen(self, fake_mss: MagicMock, logger: Logger) -> None:
        displays = MssFrameSource(logger).list_displays()
        assert displays == [
            Display(index=0, left=0, top=0, width=1920, height=1080),
            Display(index=1, left=-1920, top=0, width=1920, height=1080),
        ]

    def test_no_physical_displays(self, fake_mss: MagicMock, logger: Logger) -> None:
        fake_mss.monitors = [{"left": 0, "top": 0, "width": 0, "height": 0}]
        assert MssFrameSource(logger).list_displays() == []

    def test_enumeration_error_returns_empty(
        self,
        monkeypatch: pytest.MonkeyPatch,
        logger: Logger,
    ) -> None:
        def broken() -> None:
            raise RuntimeError("XOpenDisplay failed")

        reset = MagicMock()
        monkeypatch.setattr(capture, "_get_mss", broken)
        monkeypatch.setattr(capture, "_reset_mss", reset)

        assert MssFrameSource(logger).list_displays() == []
        reset.assert_called_once()
        warnings = [e for e in logger.buffer.get_all() if e.level == LogLevel.WARNING]
        assert "XOpenDisplay" in warnings[0].message


class TestCapture:
    """Tests for MssFrameSource.capture()."""

    def test_grabs_display_monitor(self, fake_mss: MagicMock, logger: Logger) -> None:
        frame = np.full((4, 6, 4), 7, dtype=np.uint8)
        fake_mss.grab.return_value = frame
        display = Display(index=1, left=-1920, top=0, width=6, height=4)

        snapshot = MssFrameSource(logger).capture(display)

        fake_mss.grab.assert_called_once_with(
            {"left": -1920, "top": 0, "width": 6, "height": 4}
        )
        assert snapshot is not None
        assert snapshot.display == display
        assert (snapshot.width, snapshot.height) == (6, 4)
        np.testing.assert_array_equal(snapshot.pixels, frame)

    def test_grab_error_returns_none(self, fake_mss: MagicMock, logger: Logger) -> None:
        fake_mss.grab.side_effect = RuntimeError("screen locked")
        display = Display(index=0, left=0, top=0, width=10, height=10)

        assert MssFrameSource(logger).capture(display) is None
        capture._reset_mss.assert_called_once()
