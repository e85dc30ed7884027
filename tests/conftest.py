"""Shared pytest fixtures for curve tests."""

import pytest
from PySide6.QtCore import QPointF

from curve_editor import Curve, Point


@pytest.fixture
def make_curve():
    """Build a curve by adding points at the given (x, y) positions in order."""

    def _make(*positions) -> Curve:
        curve = Curve()
        for x, y in positions:
            curve.add_point(Point.from_pos(QPointF(x, y)))
        return curve

    return _make


@pytest.fixture
def three_point_curve(make_curve) -> Curve:
    return make_curve((0.0, 0.0), (0.5, 0.5), (1.0, 1.0))
