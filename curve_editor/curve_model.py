"""
The curve itself and the editor document that wraps it with selection and
undo/redo history.
"""
import math
from typing import List, Optional

from PySide6.QtCore import QPointF

from .control_point import Point, TangentMode, clamp_position, clamp_unit

# Segments narrower than this sample as their right endpoint.
SEGMENT_EPSILON = 0.00001

HISTORY_LIMIT = 50


def bezier_interpolate(start: float, control_1: float, control_2: float, end: float, t: float) -> float:
    """Evaluates a one-dimensional cubic Bézier at parameter t."""
    u = 1 - t
    return u**3 * start + 3 * u**2 * t * control_1 + 3 * u * t**2 * control_2 + t**3 * end


class Curve:
    """
    An ordered sequence of control points spanning [0, 1] in both x and y.

    Points are always kept sorted by x. Each segment between two consecutive
    points is a cubic whose end slopes are the right tangent of its start
    point and the left tangent of its end point.
    """

    def __init__(self, points: Optional[List[Point]] = None):
        self.points: List[Point] = []
        for point in points or []:
            self.add_point(point)

    @classmethod
    def linear(cls) -> 'Curve':
        """
        The default curve: (0, 0) and (1, 1) with flat tangents, an ease-in-out
        shape until either point moves.
        """
        return cls.from_points([Point.from_pos(QPointF(0.0, 0.0)), Point.from_pos(QPointF(1.0, 1.0))])

    @classmethod
    def from_points(cls, points: List[Point]) -> 'Curve':
        """Builds a curve from already sorted points, keeping their tangents as given."""
        curve = cls()
        curve.points = [pt.clone() for pt in points]
        return curve

    def clone(self) -> 'Curve':
        """Creates a deep copy of this curve."""
        curve = Curve()
        curve.points = [pt.clone() for pt in self.points]
        return curve

    def __len__(self):
        return len(self.points)

    def __eq__(self, other):
        if not isinstance(other, Curve):
            return NotImplemented
        return self.points == other.points

    def __repr__(self):
        return f"Curve({self.points!r})"

    def _in_range(self, index: int) -> bool:
        return 0 <= index < len(self.points)

    # --- Mutation ---

    def add_point(self, point: Point) -> int:
        """
        Inserts a point, keeping the sequence sorted by x.

        The point's position is clamped into the unit square first.

        Returns:
            The index the point ended up at.
        """
        point = point.clone()
        point.pos = clamp_position(point.pos)

        if not self.points:
            self.points.append(point)
            index = 0
        elif len(self.points) == 1:
            if point.pos.x() > self.points[0].pos.x():
                self.points.append(point)
                index = 1
            else:
                self.points.insert(0, point)
                index = 0
        else:
            i = self.get_index(point.pos.x())
            if i == 0 and point.pos.x() < self.points[0].pos.x():
                self.points.insert(0, point)
                index = 0
            else:
                self.points.insert(i + 1, point)
                index = i + 1

        self._update_auto_tangents(index)
        return index

    def remove_point(self, index: int):
        """Removes the point at index. Out of range indices are ignored."""
        if not self._in_range(index):
            return
        del self.points[index]

    def clear_points(self):
        """Removes all points."""
        self.points.clear()

    # --- Evaluation ---

    def get_index(self, x: float) -> int:
        """
        Finds the index of the point starting the segment that contains x.

        Only meaningful for curves with two or more points. Returns the last
        index when x lies past the last point.
        """
        lo = 0
        hi = len(self.points) - 1

        while hi - lo > 1:
            m = (lo + hi) // 2
            a = self.points[m].pos.x()
            b = self.points[m + 1].pos.x()

            if a < x and b < x:
                lo = m
            elif a > x:
                hi = m
            else:
                return m

        if x > self.points[hi].pos.x():
            return hi
        return lo

    def sample(self, x: float) -> float:
        """Evaluates the curve at x. The result is always within [0, 1]."""
        if not self.points:
            return 0.0
        if len(self.points) == 1:
            return clamp_unit(self.points[0].pos.y())

        i = self.get_index(x)
        if i == len(self.points) - 1:
            return clamp_unit(self.points[i].pos.y())

        local = x - self.points[i].pos.x()
        if i == 0 and local <= 0.0:
            return clamp_unit(self.points[0].pos.y())

        return self._sample_segment(i, local)

    def _sample_segment(self, index: int, local_offset: float) -> float:
        a = self.points[index]
        b = self.points[index + 1]

        d = b.pos.x() - a.pos.x()
        if abs(d) < SEGMENT_EPSILON:
            return clamp_unit(b.pos.y())

        t = local_offset / d
        d /= 3.0
        control_1 = a.pos.y() + d * a.right_tangent
        control_2 = b.pos.y() - d * b.left_tangent

        return clamp_unit(bezier_interpolate(a.pos.y(), control_1, control_2, b.pos.y(), t))

    # --- Accessors ---

    def point_positions(self) -> List[QPointF]:
        """Positions of all points in ascending x order."""
        return [QPointF(pt.pos) for pt in self.points]

    def get_position(self, index: int) -> Optional[QPointF]:
        if not self._in_range(index):
            return None
        return QPointF(self.points[index].pos)

    def set_position(self, index: int, pos: QPointF):
        """
        Moves a point. The move is ignored if it would take the point past
        either neighbour's x.
        """
        if not self._in_range(index) or not (math.isfinite(pos.x()) and math.isfinite(pos.y())):
            return
        pos = clamp_position(pos)
        if index > 0 and self.points[index - 1].pos.x() > pos.x():
            return
        if index < len(self.points) - 1 and self.points[index + 1].pos.x() < pos.x():
            return

        self.points[index].pos = pos
        self._update_auto_tangents(index)

    def get_left_tangent(self, index: int) -> Optional[float]:
        if not self._in_range(index):
            return None
        return self.points[index].left_tangent

    def set_left_tangent(self, index: int, tangent: float):
        """Sets the left tangent by hand, switching that side to Free."""
        if not self._in_range(index) or not math.isfinite(tangent):
            return
        self.points[index].left_tangent = float(tangent)
        self.points[index].left_mode = TangentMode.FREE

    def get_right_tangent(self, index: int) -> Optional[float]:
        if not self._in_range(index):
            return None
        return self.points[index].right_tangent

    def set_right_tangent(self, index: int, tangent: float):
        """Sets the right tangent by hand, switching that side to Free."""
        if not self._in_range(index) or not math.isfinite(tangent):
            return
        self.points[index].right_tangent = float(tangent)
        self.points[index].right_mode = TangentMode.FREE

    def get_left_mode(self, index: int) -> Optional[TangentMode]:
        if not self._in_range(index):
            return None
        return self.points[index].left_mode

    def set_left_mode(self, index: int, mode: TangentMode):
        if not self._in_range(index):
            return
        self.points[index].left_mode = mode
        self._update_auto_tangents(index)

    def get_right_mode(self, index: int) -> Optional[TangentMode]:
        if not self._in_range(index):
            return None
        return self.points[index].right_mode

    def set_right_mode(self, index: int, mode: TangentMode):
        if not self._in_range(index):
            return
        self.points[index].right_mode = mode
        self._update_auto_tangents(index)

    def index_is_first_or_last(self, index: int) -> bool:
        return self.index_is_first(index) or self.index_is_last(index)

    def index_is_first(self, index: int) -> bool:
        return self._in_range(index) and index == 0

    def index_is_last(self, index: int) -> bool:
        return self._in_range(index) and index == len(self.points) - 1

    # --- Tangents ---

    @staticmethod
    def _slope(a: QPointF, b: QPointF) -> Optional[float]:
        dx = b.x() - a.x()
        if abs(dx) < SEGMENT_EPSILON:
            return None
        return (b.y() - a.y()) / dx

    def _update_auto_tangents(self, index: int):
        """Recomputes the Linear tangents facing across the point at index."""
        p = self.points[index]
        left_tangent, right_tangent = p.left_tangent, p.right_tangent

        if index > 0:
            prev = self.points[index - 1]
            slope = self._slope(prev.pos, p.pos)
            if slope is not None:
                if p.left_mode == TangentMode.LINEAR:
                    left_tangent = slope
                if prev.right_mode == TangentMode.LINEAR:
                    self.points[index - 1].right_tangent = slope

        if index + 1 < len(self.points):
            nxt = self.points[index + 1]
            slope = self._slope(p.pos, nxt.pos)
            if slope is not None:
                if p.right_mode == TangentMode.LINEAR:
                    right_tangent = slope
                if nxt.left_mode == TangentMode.LINEAR:
                    self.points[index + 1].left_tangent = slope

        self.points[index].left_tangent = left_tangent
        self.points[index].right_tangent = right_tangent


class CurveModel:
    """
    Manages the state of the curve being edited, including the selected
    point and undo/redo history.
    """

    def __init__(self, curve: Optional[Curve] = None):
        self.curve: Curve = curve if curve is not None else Curve.linear()
        self.selected_point_index: Optional[int] = None
        self.undo_stack: List[Curve] = []
        self.redo_stack: List[Curve] = []
        self.save_state_for_undo()

    def save_state_for_undo(self):
        """Saves the current curve for undo functionality."""
        if self.undo_stack and self.undo_stack[-1] == self.curve:
            return
        self.undo_stack.append(self.curve.clone())
        self.redo_stack.clear()
        if len(self.undo_stack) > HISTORY_LIMIT:
            self.undo_stack.pop(0)

    def undo(self):
        """Reverts to the previous state in the undo stack."""
        if len(self.undo_stack) > 1:
            self.redo_stack.append(self.undo_stack.pop())
            self._restore_state(self.undo_stack[-1])

    def redo(self):
        """Re-applies a state from the redo stack."""
        if self.redo_stack:
            state = self.redo_stack.pop()
            self.undo_stack.append(state)
            self._restore_state(state)

    def _restore_state(self, state: Curve):
        self.curve = state.clone()
        self.selected_point_index = None

    def move_point(self, index: int, pos: QPointF):
        """
        Moves a point as the editor allows it: end points keep their x and
        only move vertically.
        """
        current = self.curve.get_position(index)
        if current is None:
            return
        if self.curve.index_is_first_or_last(index):
            pos = QPointF(current.x(), pos.y())
        self.curve.set_position(index, pos)

    def set_curve(self, curve: Curve):
        """Replaces the edited curve, e.g. after an import."""
        self.curve = curve.clone()
        self.selected_point_index = None
        self.save_state_for_undo()

    def reset(self):
        """Replaces the edited curve with the default curve."""
        self.set_curve(Curve.linear())
