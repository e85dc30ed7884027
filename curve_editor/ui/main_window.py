"""
Main application window that brings all UI components together.
"""
import logging
from typing import Optional

from PySide6.QtWidgets import QWidget, QVBoxLayout, QMessageBox, QMenuBar
from PySide6.QtGui import QKeySequence
from PySide6.QtCore import Qt, QPointF

from .. import __version__
from ..curve_model import Curve, CurveModel
from ..file_operations import import_curve, export_curve
from .canvas import CurveCanvas
from .config import EditorConfig
from .control_panel import ControlPanel

logger = logging.getLogger(__name__)


class MainWindow(QWidget):
    """
    The main window of the application, which orchestrates the interactions
    between the control panel, the canvas, and the data model.
    """

    def __init__(self, curve: Optional[Curve] = None, config: Optional[EditorConfig] = None):
        super().__init__()
        self.setWindowTitle(f"Curve Editor - v{__version__}")
        self.setGeometry(100, 100, 720, 420)

        self.model = CurveModel(curve)
        self.config = config or EditorConfig()

        self._init_ui()
        self._connect_signals()
        self.refresh()

    def _init_ui(self):
        """Initializes the user interface and layout."""
        main_layout = QVBoxLayout(self)
        main_layout.setContentsMargins(0, 0, 0, 0)
        main_layout.setSpacing(0)

        self.canvas = CurveCanvas(self.model, self.config)
        self.control_panel = ControlPanel()

        self.menu_bar = QMenuBar(self)
        self._create_menus()

        main_layout.addWidget(self.menu_bar)
        main_layout.addWidget(self.control_panel)
        main_layout.addWidget(self.canvas)
        main_layout.addStretch()

    def _create_menus(self):
        # File Menu
        file_menu = self.menu_bar.addMenu("&File")

        import_action = file_menu.addAction("&Import Curve")
        import_action.setShortcut(QKeySequence("Ctrl+O"))
        import_action.triggered.connect(self.import_curve)

        export_action = file_menu.addAction("&Export Curve")
        export_action.setShortcut(QKeySequence("Ctrl+S"))
        export_action.triggered.connect(self.export_curve)

        file_menu.addSeparator()

        exit_action = file_menu.addAction("E&xit")
        exit_action.setShortcut(QKeySequence("Alt+F4"))
        exit_action.triggered.connect(self.close)

        # Edit Menu
        edit_menu = self.menu_bar.addMenu("&Edit")

        undo_action = edit_menu.addAction("&Undo")
        undo_action.setShortcut(QKeySequence.StandardKey.Undo)
        undo_action.triggered.connect(self.undo)

        redo_action = edit_menu.addAction("&Redo")
        redo_action.setShortcut(QKeySequence.StandardKey.Redo)
        redo_action.triggered.connect(self.redo)

        edit_menu.addSeparator()

        reset_action = edit_menu.addAction("Re&set Curve")
        reset_action.triggered.connect(self.reset_curve)

        # Help Menu
        help_menu = self.menu_bar.addMenu("&Help")

        keybinds_action = help_menu.addAction("View &Keybinds")
        keybinds_action.triggered.connect(self.show_keybinds_dialog)

    def show_keybinds_dialog(self):
        keybind_text = (
            "<b>General:</b><br>"
            "&nbsp;&nbsp;Ctrl+Z: Undo<br>"
            "&nbsp;&nbsp;Ctrl+Y: Redo<br>"
            "&nbsp;&nbsp;C: Reset curve<br>"
            "<br><b>Editing:</b><br>"
            "&nbsp;&nbsp;Click empty space: Add point<br>"
            "&nbsp;&nbsp;Drag point: Move point (end points move vertically only)<br>"
            "&nbsp;&nbsp;Drag tangent handle: Set tangent by hand<br>"
            "&nbsp;&nbsp;Right-Click point: Delete point<br>"
        )
        QMessageBox.information(self, "Keybinds", keybind_text)

    def _connect_signals(self):
        """Connects widget signals to their corresponding slots."""
        self.canvas.curveChanged.connect(self.refresh)
        self.canvas.mouseMoved.connect(self.update_coords)
        self.control_panel.probe_slider.valueChanged.connect(lambda _: self.refresh())
        self.control_panel.reset_button.clicked.connect(self.reset_curve)

    def refresh(self):
        """Updates the labels derived from the curve."""
        x = self.control_panel.probe_x()
        self.control_panel.show_sample(x, self.model.curve.sample(x))
        self.control_panel.point_count_label.setText(f"Points: {len(self.model.curve)}")
        self.canvas.update()

    def update_coords(self, pos: QPointF):
        """Updates the cursor coordinate label."""
        self.control_panel.cursor_label.setText(f"X: {pos.x():.3f}, Y: {pos.y():.3f}")

    def keyPressEvent(self, event):
        """Handles global keyboard shortcuts."""
        if event.key() == Qt.Key.Key_C:
            self.reset_curve()
        else:
            super().keyPressEvent(event)

    def undo(self):
        self.model.undo()
        self.refresh()

    def redo(self):
        self.model.redo()
        self.refresh()

    def reset_curve(self):
        """Replaces the curve with the default curve."""
        self.model.reset()
        self.refresh()

    def import_curve(self):
        """Imports a curve from a file."""
        curve = import_curve(self)
        if curve is not None:
            self.model.set_curve(curve)
            self.refresh()

    def export_curve(self):
        """Exports the current curve to a file."""
        export_curve(self, self.model.curve)
