"""
Represents a single control point of a one-dimensional curve.
"""
import math
from enum import Enum
from typing import Optional

from PySide6.QtCore import QPointF


class TangentMode(Enum):
    """Whether a tangent side is set by hand or derived from its neighbour."""
    FREE = "Free"
    LINEAR = "Linear"


def clamp_unit(value: float) -> float:
    """Clamps value into [0, 1]. NaN maps to 0."""
    if math.isnan(value):
        return 0.0
    return min(max(value, 0.0), 1.0)


def clamp_position(pos: QPointF) -> QPointF:
    """Returns a copy of pos clamped into the unit square."""
    return QPointF(clamp_unit(pos.x()), clamp_unit(pos.y()))


class Point:
    """
    A control point of the curve: a position in normalized space plus
    independent left and right tangents (slopes), each with its own mode.
    Uses QPointF for the position.
    """

    def __init__(self, pos: Optional[QPointF] = None,
                 left_tangent: float = 0.0, right_tangent: float = 0.0,
                 left_mode: TangentMode = TangentMode.LINEAR,
                 right_mode: TangentMode = TangentMode.LINEAR):
        """
        Initializes a new Point.

        Args:
            pos: The position of the point. Defaults to the origin.
            left_tangent: Slope of the curve arriving at the point.
            right_tangent: Slope of the curve leaving the point.
            left_mode: Mode of the left tangent.
            right_mode: Mode of the right tangent.
        """
        self.pos = QPointF(pos) if pos is not None else QPointF(0.0, 0.0)
        self.left_tangent = float(left_tangent)
        self.right_tangent = float(right_tangent)
        self.left_mode = left_mode
        self.right_mode = right_mode

    @classmethod
    def from_pos(cls, pos: QPointF) -> 'Point':
        """Creates a point at pos with zero Linear tangents."""
        return cls(pos)

    def clone(self) -> 'Point':
        """Creates a deep copy of this point."""
        return Point(QPointF(self.pos), self.left_tangent, self.right_tangent,
                     self.left_mode, self.right_mode)

    def __eq__(self, other):
        if not isinstance(other, Point):
            return NotImplemented
        return (self.pos.x() == other.pos.x()
                and self.pos.y() == other.pos.y()
                and self.left_tangent == other.left_tangent
                and self.right_tangent == other.right_tangent
                and self.left_mode == other.left_mode
                and self.right_mode == other.right_mode)

    def __repr__(self):
        return (f"Point(pos=({self.pos.x():.4f}, {self.pos.y():.4f}), "
                f"left_tangent={self.left_tangent}, right_tangent={self.right_tangent}, "
                f"left_mode={self.left_mode.value}, right_mode={self.right_mode.value})")
