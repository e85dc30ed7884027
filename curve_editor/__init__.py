"""
A one-dimensional curve over [0, 1] with cubic segments and per-point
tangents, plus a Qt widget for editing it.
"""
from .control_point import Point, TangentMode
from .curve_model import Curve, CurveModel

__version__ = "0.1.0"

__all__ = ["Curve", "CurveModel", "Point", "TangentMode", "__version__"]
