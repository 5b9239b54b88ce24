"""
Ternary Canvas
==============
The drawing surface of the diagram. It only paints what
`soiltexture.model.scene.build_scene` computes and forwards raw mouse input to
the store; it holds no composition logic of its own.
"""
from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Optional

import numpy as np
from PySide6.QtCore import QPointF, QRectF, Qt
from PySide6.QtGui import QBrush, QColor, QFont, QPainter, QPen, QPolygonF
from PySide6.QtWidgets import QSizePolicy, QWidget

from soiltexture.config import AXIS_META, CANVAS_MARGIN, DOT_RADIUS
from soiltexture.controller.store import Store
from soiltexture.model.composition import Axis
from soiltexture.model.geometry import SQRT3_2
from soiltexture.model.scene import DiagramScene, build_scene

if TYPE_CHECKING:
    import numpy.typing as npt

logger = logging.getLogger(__name__)


def _qpoint(p: npt.NDArray[np.float64]) -> QPointF:
    return QPointF(float(p[0]), float(p[1]))


def _qpolygon(points: npt.NDArray[np.float64]) -> QPolygonF:
    return QPolygonF([_qpoint(p) for p in points])


class TernaryCanvas(QWidget):
    """
    QPainter view of the texture triangle with:
      - filled class regions (current class highlighted),
      - 10 % grid, ticks and axis titles,
      - the composition dot with crosshair lines to the reading edges.
    """
    def __init__(self, store: Store, parent: Optional[QWidget] = None) -> None:
        super().__init__(parent)
        self.store = store
        self.setMinimumSize(360, 320)
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Expanding)
        self.setCursor(Qt.CursorShape.CrossCursor)

        self._label_font = QFont()
        self._label_font.setPointSize(8)
        self._title_font = QFont()
        self._title_font.setPointSize(10)
        self._title_font.setBold(True)

        self.store.state_changed.connect(lambda *_: self.update())

    # ------------------------------------------------------------------------------
    # Qt events
    # ------------------------------------------------------------------------------

    def resizeEvent(self, event) -> None:
        self.store.resize(*self._triangle_placement())
        super().resizeEvent(event)

    def mousePressEvent(self, event) -> None:
        if event.button() == Qt.MouseButton.LeftButton:
            pos = event.position()
            self.store.pointer_down(pos.x(), pos.y())
        super().mousePressEvent(event)

    def mouseMoveEvent(self, event) -> None:
        pos = event.position()
        self.store.pointer_move(pos.x(), pos.y())
        super().mouseMoveEvent(event)

    def mouseReleaseEvent(self, event) -> None:
        self.store.pointer_up()
        super().mouseReleaseEvent(event)

    def leaveEvent(self, event) -> None:
        self.store.pointer_leave()
        super().leaveEvent(event)

    def paintEvent(self, event) -> None:
        state = self.store.state
        scene = build_scene(state.composition, state.center, state.size)

        painter = QPainter(self)
        painter.setRenderHint(QPainter.RenderHint.Antialiasing)
        painter.fillRect(self.rect(), QColor("white"))

        self._draw_regions(painter, scene)
        self._draw_grid(painter, scene)
        self._draw_outline(painter, scene)
        self._draw_ticks(painter, scene)
        self._draw_axis_titles(painter, scene)
        self._draw_region_labels(painter, scene)
        self._draw_crosshair(painter, scene)
        self._draw_dot(painter, scene)

        painter.end()

    # ------------------------------------------------------------------------------
    # Internal methods
    # ------------------------------------------------------------------------------

    def _triangle_placement(self) -> tuple[tuple[float, float], float]:
        """Largest triangle that fits the widget with CANVAS_MARGIN on every side."""
        w = max(1.0, self.width() - 2 * CANVAS_MARGIN)
        h = max(1.0, self.height() - 2 * CANVAS_MARGIN)
        size = max(1.0, min(w, h / SQRT3_2))
        return (self.width() / 2.0, self.height() / 2.0), size

    def _draw_regions(self, painter: QPainter, scene: DiagramScene) -> None:
        painter.setPen(QPen(QColor("#6b6b6b"), 1.0))
        for region in scene.regions:
            painter.setBrush(QBrush(QColor(region.fill_color)))
            painter.drawPolygon(_qpolygon(region.polygon))

    def _draw_grid(self, painter: QPainter, scene: DiagramScene) -> None:
        pen = QPen(QColor(0, 0, 0, 40), 1.0)
        pen.setStyle(Qt.PenStyle.DotLine)
        painter.setPen(pen)
        for line in scene.grid:
            painter.drawLine(_qpoint(line.points[0]), _qpoint(line.points[1]))

    def _draw_outline(self, painter: QPainter, scene: DiagramScene) -> None:
        painter.setPen(QPen(QColor("black"), 2.0))
        painter.setBrush(Qt.BrushStyle.NoBrush)
        painter.drawPolygon(_qpolygon(scene.vertices))

    def _draw_ticks(self, painter: QPainter, scene: DiagramScene) -> None:
        painter.setFont(self._label_font)
        for tick in scene.ticks:
            painter.setPen(QPen(QColor(AXIS_META[tick.axis].color), 1.0))
            painter.drawLine(_qpoint(tick.points[0]), _qpoint(tick.points[1]))
            rect = QRectF(tick.label_pos[0] - 14, tick.label_pos[1] - 8, 28, 16)
            painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, tick.label)

    def _draw_axis_titles(self, painter: QPainter, scene: DiagramScene) -> None:
        top, bottom_left, bottom_right = scene.vertices
        offset = 3.5 * CANVAS_MARGIN / 6.0
        anchors = {
            Axis.CLAY: (top + bottom_left) / 2.0 + np.array([-offset, -offset / 2.0]),
            Axis.SILT: (top + bottom_right) / 2.0 + np.array([offset, -offset / 2.0]),
            Axis.SAND: (bottom_left + bottom_right) / 2.0 + np.array([0.0, offset]),
        }
        painter.setFont(self._title_font)
        for axis, anchor in anchors.items():
            meta = AXIS_META[axis]
            painter.setPen(QColor(meta.color))
            rect = QRectF(anchor[0] - 60, anchor[1] - 10, 120, 20)
            painter.drawText(rect, Qt.AlignmentFlag.AlignCenter, f"{meta.label} (%)")

    def _draw_region_labels(self, painter: QPainter, scene: DiagramScene) -> None:
        font = QFont(self._label_font)
        for region in scene.regions:
            font.setBold(region.highlighted)
            painter.setFont(font)
            painter.setPen(QColor("#222222"))
            x, y = region.label_pos
            painter.drawText(QRectF(x - 50, y - 9, 100, 18), Qt.AlignmentFlag.AlignCenter, region.label)

    def _draw_crosshair(self, painter: QPainter, scene: DiagramScene) -> None:
        for axis, segment in scene.crosshair.items():
            pen = QPen(QColor(AXIS_META[axis].color), 1.5)
            pen.setStyle(Qt.PenStyle.DashLine)
            painter.setPen(pen)
            painter.drawLine(_qpoint(segment[0]), _qpoint(segment[1]))

    def _draw_dot(self, painter: QPainter, scene: DiagramScene) -> None:
        painter.setPen(QPen(QColor("white"), 2.0))
        painter.setBrush(QBrush(QColor("#1d1d1d")))
        painter.drawEllipse(_qpoint(scene.dot), DOT_RADIUS, DOT_RADIUS)
