"""Application controller that wires hotkeys, overlays and the engine.

Hotkey callbacks run on pynput's listener thread. Toggling activation is
done directly on the thread-safe flag; everything that touches Qt is
forwarded to the main thread through signals.
"""

from pathlib import Path
from typing import Optional, Union

from PySide6.QtCore import QObject, Signal, Slot
from PySide6.QtWidgets import QApplication

from autoshake.core.capture import MssFrameSource
from autoshake.core.config import save_config
from autoshake.core.constants import DISPLAY_INDEX
from autoshake.core.engine import CaptureEngine
from autoshake.core.logging import Logger, get_logger
from autoshake.core.model import AppConfig, CaptureRegion, Display
from autoshake.core.os_adapter.hotkeys import HotkeyListener
from autoshake.core.os_adapter.validation import validate_region
from autoshake.core.shared import ActivationFlag, SharedConfig
from autoshake.ui import RegionOverlay, StatusOverlay


class ApplicationController(QObject):
    """Owns the shared state and connects every component.

    Responsibilities:
    - Start/stop the capture engine and the hotkey listener
    - Toggle activation from the action hotkey
    - Show/commit the region overlay and persist the edited region
    - Keep the status overlay in sync with the loop
    """

    # Emitted from the hotkey thread, delivered on the main thread
    activation_changed = Signal(bool)
    toggle_box_requested = Signal()
    exit_requested = Signal()

    def __init__(
        self,
        config: AppConfig,
        config_path: Union[str, Path],
        logger: Optional[Logger] = None,
        parent: Optional[QObject] = None,
    ) -> None:
        super().__init__(parent)

        self._logger = logger or get_logger()
        self._config_path = Path(config_path)

        self._active = ActivationFlag(False)
        self._shared = SharedConfig(config)
        self._frame_source = MssFrameSource(self._logger)
        self._engine = CaptureEngine(
            self._active,
            self._shared,
            frame_source=self._frame_source,
            logger=self._logger,
            parent=self,
        )

        self._status: Optional[StatusOverlay] = None
        if config.ui.enable_overlay:
            self._status = StatusOverlay(config.ui)
        self._region_overlay = RegionOverlay()

        hotkeys = config.hotkeys
        self._hotkeys = HotkeyListener(
            {
                "toggle_action": (hotkeys.toggle_action, self.toggle_activation),
                "toggle_box": (hotkeys.toggle_box, self.toggle_box_requested.emit),
                "exit_app": (hotkeys.exit_app, self.exit_requested.emit),
            },
            logger=self._logger,
        )

        self._connect_signals()

    @property
    def activation(self) -> ActivationFlag:
        return self._active

    @property
    def shared_config(self) -> SharedConfig:
        return self._shared

    def _connect_signals(self) -> None:
        self.toggle_box_requested.connect(self._on_toggle_box)
        self.exit_requested.connect(self._on_exit)
        self._region_overlay.region_changed.connect(self._on_region_changed)
        self._region_overlay.cancelled.connect(self._on_region_cancelled)
        self._engine.error_occurred.connect(self._on_engine_error)

        if self._status is not None:
            self.activation_changed.connect(self._status.set_active)
            self._engine.state_changed.connect(self._status.set_state)

    def start(self) -> bool:
        """Start hotkeys and the capture thread.

        Returns:
            False if the hotkeys could not be registered
        """
        if not self._hotkeys.start():
            return False

        self._validate(self._shared.read())
        self._engine.start()

        if self._status is not None:
            self._status.set_active(self._active.get())
            self._status.show()
        return True

    def shutdown(self) -> None:
        self._hotkeys.stop()
        self._engine.stop()
        if self._status is not None:
            self._status.hide()
        self._region_overlay.hide()

    def toggle_activation(self) -> bool:
        """Flip the activation flag (safe from any thread)."""
        active = self._active.toggle()
        self._logger.info("Auto action ON" if active else "Auto action OFF")
        self.activation_changed.emit(active)
        return active

    def _primary_display(self) -> Optional[Display]:
        displays = self._frame_source.list_displays()
        if len(displays) <= DISPLAY_INDEX:
            return None
        return displays[DISPLAY_INDEX]

    def _validate(self, region: CaptureRegion) -> None:
        display = self._primary_display()
        if display is None:
            self._logger.warning("No display found; capture will retry")
            return
        for warning in validate_region(region, display).warnings:
            self._logger.warning(warning)

    # Slots

    @Slot()
    def _on_toggle_box(self) -> None:
        if self._region_overlay.isVisible():
            self._region_overlay.commit()
        else:
            self._region_overlay.start(self._shared.read(), self._primary_display())

    @Slot(CaptureRegion)
    def _on_region_changed(self, region: CaptureRegion) -> None:
        self._shared.write(region)
        self._logger.info(
            f"Capture region set to ({region.x}, {region.y}) {region.width}x{region.height}"
        )
        self._validate(region)
        save_config(self._shared.snapshot(), self._config_path, self._logger)

    @Slot()
    def _on_region_cancelled(self) -> None:
        self._logger.info("Capture region edit cancelled")

    @Slot(str)
    def _on_engine_error(self, message: str) -> None:
        self._logger.error(f"Capture engine stopped: {message}")

    @Slot()
    def _on_exit(self) -> None:
        self._logger.info("Exit requested")
        self.shutdown()
        QApplication.quit()
