"""Tests for the activation flag and shared configuration.

Verifies that:
- toggle() flips the flag atomically across threads
- Reads of the capture region are copies, never torn
- snapshot() is independent of later writes
"""

import threading

from autoshake.core.model import AppConfig, CaptureRegion
from autoshake.core.shared import ActivationFlag, SharedConfig


class TestActivationFlag:
    """Tests for ActivationFlag."""

    def test_defaults_to_off(self) -> None:
        assert ActivationFlag().get() is False
        assert not ActivationFlag()

    def test_initial_value(self) -> None:
        assert ActivationFlag(True).get() is True

    def test_set(self) -> None:
        flag = ActivationFlag()
        flag.set(True)
        assert flag.get() is True
        flag.set(False)
        assert flag.get() is False

    def test_toggle_returns_new_value(self) -> None:
        flag = ActivationFlag()
        assert flag.toggle() is True
        assert flag.get() is True
        assert flag.toggle() is False
        assert flag.get() is False

    def test_concurrent_toggles_are_not_lost(self) -> None:
        """An even number of toggles from many threads leaves the flag off."""
        flag = ActivationFlag()
        per_thread = 500

        def worker() -> None:
            for _ in range(per_thread):
                flag.toggle()

        threads = [threading.Thread(target=worker) for _ in range(8)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert flag.get() is False


class TestSharedConfig:
    """Tests for SharedConfig."""

    def test_defaults(self) -> None:
        assert SharedConfig().read() == CaptureRegion(x=122, y=40, width=1162, height=586)

    def test_write_then_read(self) -> None:
        shared = SharedConfig()
        shared.write(CaptureRegion(1, 2, 3, 4))
        assert shared.read() == CaptureRegion(1, 2, 3, 4)

    def test_constructor_copies_config(self) -> None:
        config = AppConfig()
        shared = SharedConfig(config)
        config.capture.capture_x = 999
        assert shared.read().x == 122

    def test_snapshot_is_independent(self) -> None:
        shared = SharedConfig()
        snap = shared.snapshot()
        shared.write(CaptureRegion(5, 5, 50, 50))
        assert snap.region == CaptureRegion(122, 40, 1162, 586)

    def test_snapshot_mutation_does_not_leak(self) -> None:
        shared = SharedConfig()
        shared.snapshot().capture.capture_width = 1
        assert shared.read().width == 1162

    def test_write_keeps_other_sections(self) -> None:
        config = AppConfig()
        config.hotkeys.toggle_action = "F9"
        shared = SharedConfig(config)
        shared.write(CaptureRegion(0, 0, 10, 10))
        assert shared.snapshot().hotkeys.toggle_action == "F9"

    def test_no_torn_reads(self) -> None:
        """Concurrent writers alternate between two regions; every read
        must equal one of them exactly."""
        a = CaptureRegion(0, 0, 10, 10)
        b = CaptureRegion(500, 600, 70, 80)
        shared = SharedConfig(AppConfig().with_region(a))
        stop = threading.Event()
        seen: set[CaptureRegion] = set()

        def writer() -> None:
            while not stop.is_set():
                shared.write(b)
                shared.write(a)

        thread = threading.Thread(target=writer)
        thread.start()
        try:
            for _ in range(2000):
                seen.add(shared.read())
        finally:
            stop.set()
            thread.join()

        assert seen <= {a, b}
