"""Always-on-top status label.

A small frameless window pinned at (status_x, status_y) that shows
whether the capture loop is active. It never takes focus or mouse input,
so it can sit on top of the watched application.
"""

from typing import Optional

from PySide6.QtCore import Qt, Slot
from PySide6.QtWidgets import QVBoxLayout, QWidget

from autoshake.core.model import State, UiConfig

from .widgets import StatusIndicator


class StatusOverlay(QWidget):
    """Click-through status overlay."""

    def __init__(self, ui_config: UiConfig, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.setWindowFlags(
            Qt.WindowType.FramelessWindowHint |
            Qt.WindowType.WindowStaysOnTopHint |
            Qt.WindowType.Tool |
            Qt.WindowType.WindowTransparentForInput |
            Qt.WindowType.WindowDoesNotAcceptFocus
        )
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        self.setAttribute(Qt.WidgetAttribute.WA_ShowWithoutActivating)

        layout = QVBoxLayout(self)
        layout.setContentsMargins(0, 0, 0, 0)

        self._indicator = StatusIndicator(self)
        self._indicator.setStyleSheet(
            "background-color: rgba(0, 0, 0, 160); border-radius: 4px;"
        )
        layout.addWidget(self._indicator)

        self.move(ui_config.status_x, ui_config.status_y)
        self.adjustSize()

    @Slot(bool)
    def set_active(self, active: bool) -> None:
        self._indicator.set_active(active)
        self.adjustSize()

    @Slot(State)
    def set_state(self, state: State) -> None:
        self._indicator.set_state(state)
        self.adjustSize()
