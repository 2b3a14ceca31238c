"""Overlay for viewing and editing the capture region.

Covers the captured display with a translucent layer and draws the
capture rectangle on it:
- Drag inside the rectangle to move it
- Drag the bottom-right handle to resize it
- Arrow keys nudge it (Shift: faster, Ctrl: resize instead of move)
- Enter commits, ESC cancels
"""

from enum import Enum, auto
from typing import Optional

from PySide6.QtCore import QPoint, QRect, Qt, Signal
from PySide6.QtGui import (
    QColor,
    QFont,
    QKeyEvent,
    QMouseEvent,
    QPainter,
    QPen,
)
from PySide6.QtWidgets import QApplication, QWidget

from autoshake.core.constants import (
    REGION_HANDLE_PX,
    REGION_NUDGE_FAST_PX,
    REGION_NUDGE_PX,
)
from autoshake.core.model import CaptureRegion, Display

_ARROWS = {
    Qt.Key.Key_Left: (-1, 0),
    Qt.Key.Key_Right: (1, 0),
    Qt.Key.Key_Up: (0, -1),
    Qt.Key.Key_Down: (0, 1),
}


class DragMode(Enum):
    """Current mouse interaction."""

    NONE = auto()
    MOVE = auto()
    RESIZE = auto()


class RegionOverlay(QWidget):
    """Fullscreen overlay on the captured display.

    Region coordinates are physical display pixels; the widget works in
    Qt logical pixels, so everything is scaled by the screen's device
    pixel ratio on the way in and out.
    """

    region_changed = Signal(CaptureRegion)
    cancelled = Signal()

    def __init__(self, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)

        self.setWindowFlags(
            Qt.WindowType.FramelessWindowHint |
            Qt.WindowType.WindowStaysOnTopHint |
            Qt.WindowType.Tool
        )
        self.setAttribute(Qt.WidgetAttribute.WA_TranslucentBackground)
        self.setMouseTracking(True)

        self._region: Optional[CaptureRegion] = None
        self._scale = 1.0
        self._drag_mode = DragMode.NONE
        self._drag_start: Optional[QPoint] = None
        self._drag_origin: Optional[CaptureRegion] = None

    @property
    def region(self) -> Optional[CaptureRegion]:
        return self._region

    def start(self, region: CaptureRegion, display: Optional[Display] = None) -> None:
        """Show the overlay with the given region on the display."""
        self._region = region
        self._drag_mode = DragMode.NONE

        screen = None
        if display is not None:
            screen = QApplication.screenAt(QPoint(display.left, display.top))
        if screen is None:
            screen = QApplication.primaryScreen()
        self._scale = screen.devicePixelRatio() or 1.0

        self.setGeometry(screen.geometry())
        self.show()
        self.raise_()
        self.activateWindow()
        self.setFocus()

    def commit(self) -> None:
        """Hide and emit the edited region."""
        self.hide()
        if self._region is not None:
            self.region_changed.emit(self._region)

    def cancel(self) -> None:
        self._drag_mode = DragMode.NONE
        self.hide()
        self.cancelled.emit()

    # Geometry

    def _view_rect(self) -> QRect:
        """Region in widget (logical) coordinates."""
        r = self._region
        if r is None:
            return QRect()
        s = self._scale
        return QRect(
            round(r.x / s),
            round(r.y / s),
            max(1, round(r.width / s)),
            max(1, round(r.height / s)),
        )

    def _handle_rect(self) -> QRect:
        rect = self._view_rect()
        return QRect(
            rect.right() - REGION_HANDLE_PX + 1,
            rect.bottom() - REGION_HANDLE_PX + 1,
            REGION_HANDLE_PX,
            REGION_HANDLE_PX,
        )

    # Painting

    def paintEvent(self, event) -> None:
        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)

        painter.fillRect(self.rect(), QColor(0, 0, 0, 96))

        if self._region is not None:
            self._draw_region(painter)
        self._draw_instructions(painter)

    def _draw_region(self, painter: QPainter) -> None:
        rect = self._view_rect()

        painter.save()
        painter.setCompositionMode(QPainter.CompositionMode.CompositionMode_Clear)
        painter.fillRect(rect, Qt.GlobalColor.transparent)
        painter.restore()

        painter.save()
        pen = QPen(QColor(0, 255, 255), 2)
        pen.setStyle(Qt.PenStyle.DashLine)
        painter.setPen(pen)
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawRect(rect)

        painter.fillRect(self._handle_rect(), QColor(0, 255, 255))

        painter.setPen(QColor(255, 255, 255))
        font = QFont()
        font.setPointSize(11)
        painter.setFont(font)
        r = self._region
        painter.drawText(
            rect.bottomLeft() + QPoint(4, 18),
            f"({r.x}, {r.y})  {r.width} × {r.height}",
        )
        painter.restore()

    def _draw_instructions(self, painter: QPainter) -> None:
        painter.save()

        bar_rect = QRect(0, 0, self.width(), 40)
        painter.fillRect(bar_rect, QColor(0, 0, 0, 200))

        painter.setPen(QColor(255, 255, 255))
        font = QFont()
        font.setPointSize(12)
        painter.setFont(font)
        painter.drawText(
            bar_rect,
            Qt.AlignmentFlag.AlignCenter,
            "Drag to move | drag corner to resize | arrows nudge (Ctrl: resize) | "
            "Enter save | ESC cancel",
        )

        painter.restore()

    # Input

    def mousePressEvent(self, event: QMouseEvent) -> None:
        if event.button() != Qt.MouseButton.LeftButton or self._region is None:
            return

        pos = event.position().toPoint()
        if self._handle_rect().contains(pos):
            self._drag_mode = DragMode.RESIZE
        elif self._view_rect().contains(pos):
            self._drag_mode = DragMode.MOVE
        else:
            return
        self._drag_start = pos
        self._drag_origin = self._region

    def mouseMoveEvent(self, event: QMouseEvent) -> None:
        if self._drag_mode == DragMode.NONE or self._drag_start is None:
            return

        delta = event.position().toPoint() - self._drag_start
        dx = round(delta.x() * self._scale)
        dy = round(delta.y() * self._scale)

        if self._drag_mode == DragMode.MOVE:
            self._region = self._drag_origin.moved(dx, dy)
        else:
            self._region = self._drag_origin.resized(dx, dy)
        self.update()

    def mouseReleaseEvent(self, event: QMouseEvent) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            self._drag_mode = DragMode.NONE
            self._drag_start = None
            self._drag_origin = None

    def keyPressEvent(self, event: QKeyEvent) -> None:
        key = event.key()
        if key == Qt.Key.Key_Escape:
            self.cancel()
        elif key in (Qt.Key.Key_Return, Qt.Key.Key_Enter):
            self.commit()
        elif key in _ARROWS and self._region is not None:
            modifiers = event.modifiers()
            step = (
                REGION_NUDGE_FAST_PX
                if modifiers & Qt.KeyboardModifier.ShiftModifier
                else REGION_NUDGE_PX
            )
            dx, dy = (v * step for v in _ARROWS[key])
            if modifiers & Qt.KeyboardModifier.ControlModifier:
                self._region = self._region.resized(dx, dy)
            else:
                self._region = self._region.moved(dx, dy)
            self.update()
        else:
            super().keyPressEvent(event)
