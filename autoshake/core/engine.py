"""Runs the capture loop on a dedicated QThread.

The loop itself is Qt-free (see loop.py); this module moves it onto a
worker thread and forwards its callbacks as Qt signals so the overlays
can react on the main thread.
"""

from typing import Optional

from PySide6.QtCore import QObject, QThread, Signal

from .capture import MssFrameSource
from .logging import Logger, get_logger
from .loop import CaptureLoop, Dispatcher, FrameSource, LoopTiming
from .model import State
from .os_adapter.input_inject import KeyDispatcher
from .shared import ActivationFlag, SharedConfig


class CaptureWorker(QObject):
    """Worker that owns a CaptureLoop and runs it in its thread."""

    state_changed = Signal(State)
    marker_detected = Signal()
    loop_finished = Signal()
    error_occurred = Signal(str)

    def __init__(
        self,
        active: ActivationFlag,
        config: SharedConfig,
        frame_source: FrameSource,
        dispatcher: Dispatcher,
        timing: Optional[LoopTiming] = None,
        logger: Optional[Logger] = None,
    ) -> None:
        super().__init__()
        self._logger = logger or get_logger()
        self._loop = CaptureLoop(
            active,
            config,
            frame_source,
            dispatcher,
            timing=timing,
            logger=self._logger,
            on_state_changed=self.state_changed.emit,
            on_detection=self.marker_detected.emit,
        )

    @property
    def loop(self) -> CaptureLoop:
        return self._loop

    def request_stop(self) -> None:
        """Request stop (thread-safe)."""
        self._loop.request_stop()

    def run(self) -> None:
        """Run the capture loop. Called in the worker thread."""
        try:
            self._loop.run()
        except Exception as e:
            self._logger.exception("Capture loop crashed", e)
            self.error_occurred.emit(str(e))
        finally:
            self.loop_finished.emit()


class CaptureEngine(QObject):
    """Starts and stops the capture worker thread.

    Frame source and dispatcher default to mss and pynput.
    """

    # Forwarded from the worker
    state_changed = Signal(State)
    marker_detected = Signal()
    loop_finished = Signal()
    error_occurred = Signal(str)

    def __init__(
        self,
        active: ActivationFlag,
        config: SharedConfig,
        frame_source: Optional[FrameSource] = None,
        dispatcher: Optional[Dispatcher] = None,
        timing: Optional[LoopTiming] = None,
        logger: Optional[Logger] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)

        self._logger = logger or get_logger()
        self._active = active
        self._config = config
        self._frame_source = frame_source or MssFrameSource(self._logger)
        self._dispatcher = dispatcher or KeyDispatcher(logger=self._logger)
        self._timing = timing

        self._worker: Optional[CaptureWorker] = None
        self._thread: Optional[QThread] = None

    @property
    def is_running(self) -> bool:
        return self._thread is not None and self._thread.isRunning()

    @property
    def state(self) -> State:
        if self._worker:
            return self._worker.loop.state
        return State.Idle

    def start(self) -> bool:
        """Start the capture thread.

        Returns:
            True if started, False if already running
        """
        if self.is_running:
            self._logger.warning("Capture loop is already running")
            return False

        self._worker = CaptureWorker(
            self._active,
            self._config,
            self._frame_source,
            self._dispatcher,
            timing=self._timing,
            logger=self._logger,
        )

        self._worker.state_changed.connect(self.state_changed.emit)
        self._worker.marker_detected.connect(self.marker_detected.emit)
        self._worker.error_occurred.connect(self.error_occurred.emit)
        self._worker.loop_finished.connect(self._on_finished)

        self._thread = QThread()
        self._thread.setObjectName("CaptureLoop")
        self._worker.moveToThread(self._thread)
        self._thread.started.connect(self._worker.run)
        self._worker.loop_finished.connect(self._thread.quit)

        self._thread.start()
        return True

    def stop(self, timeout_ms: int = 2000) -> None:
        """Stop the loop and wait for the thread to exit."""
        if self._worker:
            self._worker.request_stop()
        if self._thread:
            self._thread.quit()
            if not self._thread.wait(timeout_ms):
                self._logger.warning("Capture thread did not stop in time")
            self._thread = None
        self._worker = None

    def _on_finished(self) -> None:
        self.loop_finished.emit()
