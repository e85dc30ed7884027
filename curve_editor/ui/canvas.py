"""
Canvas widget for drawing and editing the curve.
"""
import logging
from PySide6.QtWidgets import QWidget, QSizePolicy
from PySide6.QtGui import QPainter, QPen, QColor, QMouseEvent, QPolygonF
from PySide6.QtCore import Qt, QPointF, QRectF, QSize, Signal
from typing import Optional

from ..curve_model import CurveModel
from ..control_point import Point
from .config import EditorConfig
from .geometry import (
    DragTarget, find_handle, normalized_to_plot, plot_to_normalized,
    tangent_from_handle, tangent_handle_positions,
)

logger = logging.getLogger(__name__)


class CurveCanvas(QWidget):
    """
    The editing surface for a curve.
    Handles all rendering and pointer interaction with the curve.
    """
    curveChanged = Signal()
    mouseMoved = Signal(QPointF)

    def __init__(self, model: CurveModel, config: Optional[EditorConfig] = None,
                 parent: Optional[QWidget] = None):
        super().__init__(parent)
        self.model = model
        self.config = config or EditorConfig()
        self.config.validate()
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Preferred)
        self.setFocusPolicy(Qt.FocusPolicy.StrongFocus)
        self.setMouseTracking(True)

        w, h = self.config.resolve_size(self.config.min_size[0])
        self.setMinimumSize(int(w), int(h))
        if self.config.max_size is not None:
            self.setMaximumSize(int(self.config.max_size[0]), int(self.config.max_size[1]))

        # --- Display Settings ---
        self.point_radius = 4.0
        self.tangent_radius = 3.5

        # --- Drag State ---
        self.dragging: Optional[DragTarget] = None

    @property
    def curve(self):
        return self.model.curve

    def plot_rect(self) -> QRectF:
        return QRectF(self.rect()).adjusted(1, 1, -1, -1)

    def sizeHint(self) -> QSize:
        w, h = self.config.resolve_size(max(self.width(), 1))
        return QSize(int(w), int(h))

    def hasHeightForWidth(self) -> bool:
        return self.config.height is None

    def heightForWidth(self, width: int) -> int:
        return int(self.config.resolve_size(width)[1])

    def paintEvent(self, event):
        painter = QPainter(self)
        try:
            painter.setRenderHint(QPainter.RenderHint.Antialiasing)
            rect = self.plot_rect()
            painter.setClipRect(rect)
            painter.fillRect(rect, QColor("#282c34"))
            painter.setPen(QPen(QColor(60, 60, 60), 1))
            painter.drawRect(rect)
            self._draw_curve(painter, rect)
            self._draw_tangents(painter, rect)
            self._draw_control_points(painter, rect)
        finally:
            painter.end()

    def _handles(self, rect: QRectF):
        handles = [(DragTarget.HANDLE, i, normalized_to_plot(rect, pos))
                   for i, pos in enumerate(self.curve.point_positions())]

        selected = self.model.selected_point_index
        if selected is not None and self.curve.get_position(selected) is not None:
            left_pos, right_pos = tangent_handle_positions(
                rect, self.curve.get_position(selected),
                self.curve.get_left_tangent(selected), self.curve.get_right_tangent(selected),
                self.config.tangent_length)
            handles.append((DragTarget.LEFT_TANGENT, selected, left_pos))
            handles.append((DragTarget.RIGHT_TANGENT, selected, right_pos))
        return handles

    def mousePressEvent(self, event: QMouseEvent):
        rect = self.plot_rect()
        pos = QPointF(event.position())
        near = find_handle(self._handles(rect), pos, self.config.handle_radius)

        if near is None:
            if event.button() == Qt.MouseButton.LeftButton:
                index = self.curve.add_point(Point.from_pos(plot_to_normalized(rect, pos)))
                self.model.selected_point_index = index
                self.dragging = DragTarget.HANDLE
                logger.debug("Added point %d", index)
                self._curve_edited()
            return

        drag_type, index, _ = near
        if event.button() == Qt.MouseButton.LeftButton:
            self.dragging = drag_type
            self.model.selected_point_index = index
            self.update()
        elif (event.button() == Qt.MouseButton.RightButton
              and drag_type == DragTarget.HANDLE
              and not self.curve.index_is_first_or_last(index)):
            self.curve.remove_point(index)
            self.model.selected_point_index = None
            self.dragging = None
            logger.debug("Removed point %d", index)
            self._curve_edited()

    def mouseMoveEvent(self, event: QMouseEvent):
        rect = self.plot_rect()
        pos = QPointF(event.position())
        self.mouseMoved.emit(plot_to_normalized(rect, pos))

        index = self.model.selected_point_index
        if self.dragging is None or index is None:
            return
        point_pos = self.curve.get_position(index)
        if point_pos is None:
            return

        if self.dragging == DragTarget.HANDLE:
            screen_pos = QPointF(min(max(pos.x(), rect.left()), rect.right()),
                                 min(max(pos.y(), rect.top()), rect.bottom()))
            self.model.move_point(index, plot_to_normalized(rect, screen_pos))
        elif self.dragging == DragTarget.LEFT_TANGENT:
            if self.curve.index_is_first(index):
                return
            tangent = tangent_from_handle(normalized_to_plot(rect, point_pos), pos, self.dragging)
            if tangent is not None:
                self.curve.set_left_tangent(index, tangent)
        elif self.dragging == DragTarget.RIGHT_TANGENT:
            if self.curve.index_is_last(index):
                return
            tangent = tangent_from_handle(normalized_to_plot(rect, point_pos), pos, self.dragging)
            if tangent is not None:
                self.curve.set_right_tangent(index, tangent)

        self.curveChanged.emit()
        self.update()

    def mouseReleaseEvent(self, event: QMouseEvent):
        if event.button() == Qt.MouseButton.LeftButton and self.dragging is not None:
            self.dragging = None
            self.model.save_state_for_undo()

    def _curve_edited(self):
        self.model.save_state_for_undo()
        self.curveChanged.emit()
        self.update()

    def _draw_curve(self, painter, rect: QRectF):
        step = self.config.sample_step
        steps = int(round(1.0 / step))
        polyline = QPolygonF([normalized_to_plot(rect, QPointF(i * step, self.curve.sample(i * step)))
                              for i in range(steps + 1)])
        painter.setPen(QPen(QColor(255, 255, 255, 200), 1.5))
        painter.drawPolyline(polyline)

    def _draw_tangents(self, painter, rect: QRectF):
        selected = self.model.selected_point_index
        pos = self.curve.get_position(selected) if selected is not None else None
        if pos is None:
            return

        plot_pos = normalized_to_plot(rect, pos)
        plot_left, plot_right = tangent_handle_positions(
            rect, pos, self.curve.get_left_tangent(selected),
            self.curve.get_right_tangent(selected), self.config.tangent_length)

        painter.setPen(QPen(QColor("#55ff55"), 1.5))
        painter.setBrush(QColor("#282c34"))
        for handle in (plot_left, plot_right):
            painter.drawLine(plot_pos, handle)
            painter.drawEllipse(handle, self.tangent_radius, self.tangent_radius)

    def _draw_control_points(self, painter, rect: QRectF):
        for i, pos in enumerate(self.curve.point_positions()):
            screen_pos = normalized_to_plot(rect, pos)
            is_selected = (i == self.model.selected_point_index)
            painter.setBrush(QColor("yellow") if is_selected else QColor("red"))
            painter.setPen(QPen(QColor("white") if is_selected else QColor("black"), 1.5))
            painter.drawEllipse(screen_pos, self.point_radius, self.point_radius)
