"""
Conversions between normalized curve space and widget (plot) space, and the
geometry of the on-screen handles.

Normalized space has y pointing up; plot space follows Qt with y pointing down.
"""
from enum import Enum
from typing import Optional, Sequence, Tuple

from PySide6.QtCore import QLineF, QPointF, QRectF


class DragTarget(Enum):
    LEFT_TANGENT = "left_tangent"
    HANDLE = "handle"
    RIGHT_TANGENT = "right_tangent"


def normalized_to_plot(rect: QRectF, pos: QPointF) -> QPointF:
    return QPointF(rect.left() + pos.x() * rect.width(),
                   rect.top() + (1.0 - pos.y()) * rect.height())


def plot_to_normalized(rect: QRectF, pos: QPointF) -> QPointF:
    return QPointF((pos.x() - rect.left()) / rect.width(),
                   1.0 - (pos.y() - rect.top()) / rect.height())


def _unit(x: float, y: float) -> QPointF:
    length = QLineF(0.0, 0.0, x, y).length()
    return QPointF(x / length, y / length)


def tangent_handle_positions(rect: QRectF, pos: QPointF, left: float, right: float,
                             length: float = 20.0) -> Tuple[QPointF, QPointF]:
    """
    Plot positions of the left and right tangent handles of a point at pos.

    Slopes are drawn in screen units, so a tangent of 1 is always at 45
    degrees whatever the widget's aspect ratio.
    """
    plot_pos = normalized_to_plot(rect, pos)
    left_dir = _unit(-1.0, left)
    right_dir = _unit(1.0, -right)
    return plot_pos + left_dir * length, plot_pos + right_dir * length


def tangent_from_handle(point_plot: QPointF, handle_plot: QPointF,
                        target: DragTarget) -> Optional[float]:
    """
    Slope described by a tangent handle dragged to handle_plot.

    The left handle is kept left of the point and the right handle right of
    it. Returns None when the handle is vertically above or below the point.
    """
    if target == DragTarget.LEFT_TANGENT:
        handle_x = min(handle_plot.x(), point_plot.x())
    else:
        handle_x = max(handle_plot.x(), point_plot.x())

    dx = handle_x - point_plot.x()
    dy = handle_plot.y() - point_plot.y()
    if dx == 0:
        return None
    return -dy / dx


def find_handle(handles: Sequence[tuple], pos: QPointF, radius: float) -> Optional[tuple]:
    """First (target, index, plot_pos) entry within radius pixels of pos."""
    for handle in handles:
        if QLineF(handle[2], pos).length() < radius:
            return handle
    return None
