"""Common UI widgets for AutoShake."""

from typing import Optional

from PySide6.QtGui import QColor
from PySide6.QtWidgets import QHBoxLayout, QLabel, QWidget

from autoshake.core.model import State


class StatusIndicator(QWidget):
    """Colored dot plus text showing activation and loop state."""

    # State to color mapping
    STATE_COLORS = {
        State.Idle: QColor(128, 128, 128),      # Gray
        State.Sampling: QColor(40, 167, 69),    # Green
        State.Cooldown: QColor(23, 162, 184),   # Cyan
    }
    OFF_COLOR = QColor(220, 53, 69)             # Red

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        layout = QHBoxLayout(self)
        layout.setContentsMargins(6, 2, 6, 2)
        layout.setSpacing(6)

        self._dot = QLabel("●")
        self._dot.setFixedWidth(14)
        layout.addWidget(self._dot)

        self._text = QLabel()
        self._text.setStyleSheet("color: white; font-weight: bold;")
        layout.addWidget(self._text, 1)

        self._active = False
        self._state = State.Idle
        self._refresh()

    def set_active(self, active: bool) -> None:
        self._active = active
        self._refresh()

    def set_state(self, state: State) -> None:
        self._state = state
        self._refresh()

    @staticmethod
    def label_for(active: bool, state: State) -> str:
        """Text shown for an activation/state pair."""
        if not active:
            return "AUTO OFF"
        return f"AUTO ON · {state.name}"

    def _refresh(self) -> None:
        self._text.setText(self.label_for(self._active, self._state))
        if self._active:
            color = self.STATE_COLORS.get(self._state, QColor(128, 128, 128))
        else:
            color = self.OFF_COLOR
        self._dot.setStyleSheet(f"color: {color.name()};")
