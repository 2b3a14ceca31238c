"""Capture loop state machine.

Implements the sampling cycle:
- Idle: activation flag off, sleep IDLE_INTERVAL_SEC and re-check;
  also entered from Sampling when a cycle is skipped (no display,
  failed capture, region off the frame), sleeping ACTIVE_INTERVAL_SEC
- Sampling: read region, capture display 0, extract luma, detect
- Cooldown: marker found, key fired, sleep COOLDOWN_SEC

The loop is memoryless across cycles: every iteration re-reads the
activation flag and the capture region, and drops its frame at the end.
"""

import threading
from dataclasses import dataclass
from typing import Callable, Optional, Protocol

import numpy as np

from .capture import extract_luma
from .constants import (
    ACTIVE_INTERVAL_SEC,
    COOLDOWN_SEC,
    DISPLAY_INDEX,
    IDLE_INTERVAL_SEC,
)
from .detect import is_marker_present
from .logging import Logger, get_logger
from .model import Display, FrameSnapshot, State
from .shared import ActivationFlag, SharedConfig


class FrameSource(Protocol):
    def list_displays(self) -> list[Display]: ...

    def capture(self, display: Display) -> Optional[FrameSnapshot]: ...


class Dispatcher(Protocol):
    def fire(self) -> bool: ...


@dataclass(frozen=True)
class LoopTiming:
    """Sleep intervals in seconds."""

    idle: float = IDLE_INTERVAL_SEC
    active: float = ACTIVE_INTERVAL_SEC
    cooldown: float = COOLDOWN_SEC


class IterationErrorPolicy:
    """Decides how the loop recovers from an exception inside a cycle.

    The default skips the cycle: the error is logged and the loop sleeps
    the active interval before trying again. Nothing is re-raised.
    """

    def __init__(
        self,
        timing: Optional[LoopTiming] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        self._timing = timing or LoopTiming()
        self._logger = logger or get_logger()
        self._errors = 0

    @property
    def error_count(self) -> int:
        return self._errors

    def handle(self, exc: Exception) -> float:
        """Record the failure and return the interval to sleep."""
        self._errors += 1
        self._logger.exception("Capture cycle failed, skipping", exc)
        return self._timing.active


class CaptureLoop:
    """Polls the activation flag and fires the dispatcher on detection.

    Args:
        active: Shared activation flag
        config: Shared configuration holding the capture region
        frame_source: Display enumeration and capture
        dispatcher: Fires the action keystroke
        detector: Marker classifier for luma images
        timing: Sleep intervals
        error_policy: Recovery policy for failed cycles
        sleep: Sleep function; defaults to a wait on the stop event so
            request_stop() wakes the loop immediately
        logger: Logger instance (uses global if None)
        on_state_changed: Called with the new State on each transition
        on_detection: Called after each positive detection
    """

    def __init__(
        self,
        active: ActivationFlag,
        config: SharedConfig,
        frame_source: FrameSource,
        dispatcher: Dispatcher,
        detector: Callable[[np.ndarray], bool] = is_marker_present,
        timing: Optional[LoopTiming] = None,
        error_policy: Optional[IterationErrorPolicy] = None,
        sleep: Optional[Callable[[float], object]] = None,
        logger: Optional[Logger] = None,
        on_state_changed: Optional[Callable[[State], None]] = None,
        on_detection: Optional[Callable[[], None]] = None,
    ) -> None:
        self._active = active
        self._config = config
        self._frame_source = frame_source
        self._dispatcher = dispatcher
        self._detector = detector
        self._timing = timing or LoopTiming()
        self._logger = logger or get_logger()
        self._error_policy = error_policy or IterationErrorPolicy(self._timing, self._logger)
        self._stop_event = threading.Event()
        self._sleep = sleep or self._stop_event.wait
        self._on_state_changed = on_state_changed
        self._on_detection = on_detection

        self._state = State.Idle
        self._skip_reason: Optional[str] = None

    @property
    def state(self) -> State:
        return self._state

    @property
    def timing(self) -> LoopTiming:
        return self._timing

    @property
    def is_stopped(self) -> bool:
        return self._stop_event.is_set()

    def request_stop(self) -> None:
        """Ask run() to return after the current cycle (thread-safe)."""
        self._stop_event.set()

    def run(self) -> None:
        """Run cycles until request_stop() is called."""
        self._logger.info("Capture loop started")
        while not self._stop_event.is_set():
            interval = self.step()
            self._sleep(interval)
        self._logger.info("Capture loop stopped")

    def step(self) -> float:
        """Run one cycle.

        Returns:
            Seconds to sleep before the next cycle
        """
        if not self._active.get():
            self._set_state(State.Idle)
            return self._timing.idle

        self._set_state(State.Sampling)
        try:
            detected = self._sample()
        except Exception as e:
            return self._error_policy.handle(e)

        if not detected:
            return self._timing.active

        self._set_state(State.Cooldown)
        self._logger.info("Marker detected, firing key")
        try:
            self._dispatcher.fire()
        except Exception as e:
            self._error_policy.handle(e)
        if self._on_detection is not None:
            self._on_detection()
        return self._timing.cooldown

    def _sample(self) -> bool:
        """Capture, extract and classify one frame."""
        region = self._config.read()

        displays = self._frame_source.list_displays()
        if len(displays) <= DISPLAY_INDEX:
            self._note_skip("no display available")
            return False

        snapshot = self._frame_source.capture(displays[DISPLAY_INDEX])
        if snapshot is None:
            self._note_skip("capture failed")
            return False

        luma = extract_luma(snapshot, region)
        if luma is None:
            self._note_skip(
                f"region ({region.x}, {region.y}, {region.width}x{region.height}) "
                f"is outside the {snapshot.width}x{snapshot.height} frame"
            )
            return False

        self._skip_reason = None
        return bool(self._detector(luma))

    def _note_skip(self, reason: str) -> None:
        """Drop back to Idle for this cycle; log once per distinct reason."""
        self._set_state(State.Idle)
        if reason != self._skip_reason:
            self._logger.warning(f"Skipping cycle: {reason}")
            self._skip_reason = reason

    def _set_state(self, new_state: State) -> None:
        if new_state is self._state:
            return
        old_state = self._state
        self._state = new_state
        self._logger.state_change(old_state.name, new_state.name)
        if self._on_state_changed is not None:
            self._on_state_changed(new_state)
