"""
Handles the import and export of curve data.
"""
import json
import logging
import math
from typing import Optional

from PySide6.QtWidgets import QFileDialog, QMessageBox
from PySide6.QtCore import QPointF

from .control_point import Point, TangentMode
from .curve_model import Curve

logger = logging.getLogger(__name__)

FILE_FILTER = "Curve (*.curve.json);;JSON (*.json);;All Files (*)"


class CurveFormatError(ValueError):
    """Raised when a document does not describe a valid curve."""


def point_to_dict(point: Point) -> dict:
    return {
        'pos': [point.pos.x(), point.pos.y()],
        'left_tan': point.left_tangent,
        'right_tan': point.right_tangent,
        'left_mode': point.left_mode.value,
        'right_mode': point.right_mode.value,
    }


def point_from_dict(data: dict) -> Point:
    """
    Builds a point from its stored form. Missing fields take the defaults of
    a freshly created point.
    """
    try:
        x, y = (float(v) for v in data.get('pos', (0.0, 0.0)))
        left_tan = float(data.get('left_tan', 0.0))
        right_tan = float(data.get('right_tan', 0.0))
        left_mode = TangentMode(data.get('left_mode', TangentMode.LINEAR.value))
        right_mode = TangentMode(data.get('right_mode', TangentMode.LINEAR.value))
    except (TypeError, ValueError, AttributeError) as e:
        raise CurveFormatError(f"Invalid point {data!r}: {e}") from e

    if not (0.0 <= x <= 1.0 and 0.0 <= y <= 1.0):
        raise CurveFormatError(f"Point position ({x}, {y}) is outside the unit square")
    if not (math.isfinite(left_tan) and math.isfinite(right_tan)):
        raise CurveFormatError(f"Point tangents ({left_tan}, {right_tan}) must be finite")

    return Point(QPointF(x, y), left_tan, right_tan, left_mode, right_mode)


def curve_to_dict(curve: Curve) -> dict:
    return {'points': [point_to_dict(p) for p in curve.points]}


def curve_from_dict(data: dict) -> Curve:
    """
    Builds a curve from its stored form.

    Points are taken as stored, tangents included, so a saved curve comes
    back unchanged. They must already be in ascending x order.
    """
    if not isinstance(data, dict) or not isinstance(data.get('points'), list):
        raise CurveFormatError("Curve data must be an object with a 'points' list")

    points = [point_from_dict(p) for p in data['points']]
    for prev, cur in zip(points, points[1:]):
        if cur.pos.x() < prev.pos.x():
            raise CurveFormatError("Curve points are not sorted by x")

    return Curve.from_points(points)


def save_curve(path: str, curve: Curve):
    """Writes the curve to path as JSON."""
    with open(path, 'w') as f:
        json.dump(curve_to_dict(curve), f, indent=4)
    logger.info("Saved curve with %d points to %s", len(curve), path)


def load_curve(path: str) -> Curve:
    """Reads a curve written by save_curve."""
    with open(path, 'r') as f:
        try:
            data = json.load(f)
        except json.JSONDecodeError as e:
            raise CurveFormatError(f"{path} is not valid JSON: {e}") from e
    curve = curve_from_dict(data)
    logger.info("Loaded curve with %d points from %s", len(curve), path)
    return curve


def export_curve(parent, curve: Curve):
    """
    Exports the curve to a file chosen by the user.

    Args:
        parent: The parent widget for dialogs.
        curve: The curve to export.
    """
    if not curve.points:
        QMessageBox.warning(parent, "Export Error", "There is nothing to export.")
        return

    path, _ = QFileDialog.getSaveFileName(parent, "Save Curve", "", FILE_FILTER)
    if not path:
        return

    try:
        save_curve(path, curve)
    except OSError as e:
        logger.exception("Could not save curve to %s", path)
        QMessageBox.critical(parent, "Export Error", f"Could not save curve: {e}")


def import_curve(parent) -> Optional[Curve]:
    """
    Imports a curve from a file chosen by the user.

    Args:
        parent: The parent widget for dialogs.

    Returns:
        The loaded curve, or None if nothing was loaded.
    """
    path, _ = QFileDialog.getOpenFileName(parent, "Open Curve", "", FILE_FILTER)
    if not path:
        return None

    try:
        return load_curve(path)
    except (OSError, CurveFormatError) as e:
        logger.exception("Could not load curve from %s", path)
        QMessageBox.critical(parent, "Import Error", f"Could not load curve: {e}")
        return None
