"""State shared between the capture worker and the hotkey/UI threads.

Only two cells are shared: the activation flag and the configuration
record. Both are passed into the capture loop explicitly.
"""

import threading
from typing import Optional

from .model import AppConfig, CaptureRegion


class ActivationFlag:
    """Process-wide on/off switch for the capture loop.

    Backed by threading.Event, so get/set/toggle are safe from any thread.
    """

    def __init__(self, active: bool = False) -> None:
        self._event = threading.Event()
        self._toggle_lock = threading.Lock()
        if active:
            self._event.set()

    def get(self) -> bool:
        return self._event.is_set()

    def set(self, active: bool) -> None:
        if active:
            self._event.set()
        else:
            self._event.clear()

    def toggle(self) -> bool:
        """Flip the flag and return the new value."""
        with self._toggle_lock:
            new_value = not self._event.is_set()
            self.set(new_value)
        return new_value

    def __bool__(self) -> bool:
        return self.get()


class SharedConfig:
    """Lock-guarded configuration record with copy-out reads.

    The lock is held only while fields are copied, never across I/O.
    """

    def __init__(self, config: Optional[AppConfig] = None) -> None:
        self._lock = threading.Lock()
        self._config = (config or AppConfig()).copy()

    def read(self) -> CaptureRegion:
        """Return a snapshot of the capture rectangle."""
        with self._lock:
            return self._config.region

    def write(self, region: CaptureRegion) -> None:
        """Replace the capture rectangle."""
        with self._lock:
            self._config = self._config.with_region(region)

    def snapshot(self) -> AppConfig:
        """Return a deep copy of the whole configuration (for saving)."""
        with self._lock:
            return self._config.copy()
