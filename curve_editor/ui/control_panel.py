# Top control panel with the sample probe and curve statistics.

from PySide6.QtWidgets import (
    QFrame, QHBoxLayout, QLabel, QSlider, QPushButton, QSizePolicy
)
from PySide6.QtCore import Qt

PROBE_RESOLUTION = 1000


class ControlPanel(QFrame):
    """
    The top control panel: a probe slider that evaluates the curve at the
    chosen x, the point count, and a reset button.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        self.setStyleSheet("background-color: #333; color: white; padding: 5px;")
        self.setSizePolicy(QSizePolicy.Policy.Expanding, QSizePolicy.Policy.Fixed)

        layout = QHBoxLayout(self)

        self.probe_slider = QSlider(Qt.Orientation.Horizontal)
        self.probe_slider.setRange(0, PROBE_RESOLUTION)
        self.probe_slider.setValue(PROBE_RESOLUTION // 2)
        self.probe_slider.setFixedWidth(200)
        self.sample_label = QLabel()

        self.reset_button = QPushButton("Reset Curve")
        self.reset_button.setFixedWidth(120)

        self.point_count_label = QLabel("Points: 0")
        self.cursor_label = QLabel("X: --, Y: --")

        layout.addWidget(self.probe_slider)
        layout.addWidget(self.sample_label)
        layout.addSpacing(20)
        layout.addWidget(self.reset_button)
        layout.addSpacing(20)
        layout.addWidget(self.point_count_label)
        layout.addStretch()
        layout.addWidget(self.cursor_label)

    def probe_x(self) -> float:
        return self.probe_slider.value() / PROBE_RESOLUTION

    def show_sample(self, x: float, y: float):
        self.sample_label.setText(f"Sample at {x:.3f}: {y:.3f}")
