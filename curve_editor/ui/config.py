"""
Configuration of the curve editing widget.
"""
from dataclasses import dataclass
from typing import Optional, Tuple


@dataclass
class EditorConfig:
    """Sizing and interaction settings for CurveCanvas."""

    min_size: Tuple[float, float] = (40.0, 40.0)
    max_size: Optional[Tuple[float, float]] = None
    width: Optional[float] = None
    height: Optional[float] = None
    view_aspect: float = 13.0 / 6.0
    handle_radius: float = 15.0  # pointer distance in pixels that grabs a handle
    tangent_length: float = 20.0  # on-screen length of a tangent handle
    sample_step: float = 0.001

    def validate(self) -> None:
        if self.view_aspect <= 0:
            raise ValueError("view_aspect must be positive")
        if self.width is not None and self.width <= 0:
            raise ValueError("width must be positive")
        if self.height is not None and self.height <= 0:
            raise ValueError("height must be positive")
        if self.max_size is not None and min(self.max_size) <= 0:
            raise ValueError("max_size must be positive")
        if self.handle_radius <= 0 or self.tangent_length <= 0:
            raise ValueError("handle_radius and tangent_length must be positive")
        if not 0 < self.sample_step <= 1:
            raise ValueError("sample_step must be in (0, 1]")

    def resolve_size(self, available_width: float) -> Tuple[float, float]:
        """
        Computes the widget size given the width available in the layout.

        An explicit width wins, then a width derived from an explicit height
        and the aspect ratio, then the available width. The height defaults to
        width / view_aspect. Both respect min_size and max_size.
        """
        min_w = max(self.min_size[0], 1.0)
        min_h = max(self.min_size[1], 1.0)

        if self.width is not None:
            width = self.width
        elif self.height is not None:
            width = self.height * self.view_aspect
        else:
            width = available_width
        width = max(width, min_w)

        height = self.height if self.height is not None else width / self.view_aspect
        height = max(height, min_h)

        if self.max_size is not None:
            width = min(width, self.max_size[0])
            height = min(height, self.max_size[1])

        return width, height
