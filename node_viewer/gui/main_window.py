# node_viewer/gui/main_window.py

import logging
import sys
from pathlib import Path
from typing import Optional

from PySide6.QtCore import Qt, Slot
from PySide6.QtGui import QAction, QActionGroup, QKeySequence
from PySide6.QtWidgets import QApplication, QMainWindow, QMessageBox, QSplitter, QVBoxLayout, QWidget

from node_viewer.core.config_manager import (
    DEFAULT_SETTINGS_PATH, THEMES, UI_SCALES, ViewerSettings, load_settings, save_settings
)
from node_viewer.core.file_sources import FileSource
from node_viewer.core.models import FileLoadingState, Loaded
from node_viewer.utils.logger import setup_logging
from .content_view import ContentView
from .log_viewer import LogViewer
from .qt_file_sources import build_file_source
from .resources import apply_theme, apply_ui_scale, validate_assets
from .viewer_controller import ViewerController
from .widgets import StatusWidget

logger = logging.getLogger(__name__)

WINDOW_TITLE = "Node Viewer"


class MainWindow(QMainWindow):
    """
    The application shell: menus, status banner, content tabs and the
    activity log. All file handling goes through the ViewerController.
    """

    def __init__(self, settings: Optional[ViewerSettings] = None, settings_path: Path = DEFAULT_SETTINGS_PATH,
                 file_source: Optional[FileSource] = None, picker_mode: Optional[str] = None):
        super().__init__()
        self.settings = settings or ViewerSettings()
        self.settings_path = settings_path

        self.setWindowTitle(WINDOW_TITLE)
        self.resize(900, 650)
        self.setMinimumSize(300, 220)

        # The picker strategy is fixed for the lifetime of the window. An
        # explicit picker_mode overrides the saved one for this session only.
        file_source = file_source or build_file_source(picker_mode or self.settings.picker_mode, self)
        self.controller = ViewerController(file_source, pending_timeout=self.settings.pending_timeout, parent=self)

        self._create_menus()
        self._init_ui()

        self.controller.state_changed.connect(self._on_state_changed)
        self.controller.log_entry_created.connect(
            lambda entry: self.log_viewer.add_log_entry(entry["status"], entry["message"]))

    def _init_ui(self):
        central = QWidget()
        layout = QVBoxLayout(central)
        layout.setContentsMargins(10, 10, 10, 10)

        self.status_widget = StatusWidget()
        self.content_view = ContentView()
        self.content_view.setVisible(False)
        self.content_view.set_scale(self.settings.ui_scale)
        self.log_viewer = LogViewer()

        splitter = QSplitter(Qt.Vertical)
        splitter.addWidget(self.content_view)
        splitter.addWidget(self.log_viewer)
        splitter.setStretchFactor(0, 4)
        splitter.setStretchFactor(1, 1)

        layout.addWidget(self.status_widget)
        layout.addWidget(splitter)
        self.setCentralWidget(central)

    def _create_menus(self):
        menu_bar = self.menuBar()

        # --- File Menu ---
        file_menu = menu_bar.addMenu("&File")
        self.open_action = QAction("&Open...", self)
        self.open_action.setShortcut(QKeySequence.Open)
        self.open_action.triggered.connect(self.controller.open_file)
        file_menu.addAction(self.open_action)
        file_menu.addSeparator()
        quit_action = QAction("&Quit", self)
        quit_action.setShortcut(QKeySequence.Quit)
        quit_action.triggered.connect(self.close)
        file_menu.addAction(quit_action)

        # --- Settings Menu ---
        settings_menu = menu_bar.addMenu("&Settings")

        theme_menu = settings_menu.addMenu("Theme")
        self.theme_actions = {}
        theme_group = QActionGroup(self)
        for theme in THEMES:
            action = QAction(theme.capitalize(), self, checkable=True)
            action.setChecked(theme == self.settings.theme)
            action.triggered.connect(lambda checked=False, t=theme: self._handle_theme_change(t))
            theme_group.addAction(action)
            theme_menu.addAction(action)
            self.theme_actions[theme] = action

        scale_menu = settings_menu.addMenu("UI Scale")
        self.scale_actions = {}
        scale_group = QActionGroup(self)
        for scale in UI_SCALES:
            action = QAction(f"{scale:.1f}", self, checkable=True)
            action.setChecked(scale == self.settings.ui_scale)
            action.triggered.connect(lambda checked=False, s=scale: self._handle_scale_change(s))
            scale_group.addAction(action)
            scale_menu.addAction(action)
            self.scale_actions[scale] = action

    # --- State Rendering ---

    @Slot(object)
    def _on_state_changed(self, state: FileLoadingState):
        self.status_widget.show_state(state)
        if isinstance(state, Loaded):
            self.content_view.show_file(state.details)
            self.content_view.setVisible(True)
        else:
            self.content_view.clear()
            self.content_view.setVisible(False)

    # --- Preferences ---

    @Slot(str)
    def _handle_theme_change(self, theme: str):
        self.settings.theme = theme
        apply_theme(QApplication.instance(), theme)
        self._save_settings()

    @Slot(float)
    def _handle_scale_change(self, scale: float):
        self.settings.ui_scale = scale
        apply_ui_scale(QApplication.instance(), scale)
        self.content_view.set_scale(scale)
        self._save_settings()

    def _save_settings(self):
        if not save_settings(self.settings, self.settings_path):
            QMessageBox.critical(self, "Error", "Could not save the settings file. See node_viewer.log for details.")

    def closeEvent(self, event):
        logger.info("Main window closing.")
        self.controller.shutdown()
        event.accept()


def run_gui(picker_mode: Optional[str] = None):
    """Entry point for the graphical interface."""
    setup_logging()
    validate_assets()

    settings = load_settings()

    app = QApplication(sys.argv)
    app.setApplicationName(WINDOW_TITLE)
    apply_theme(app, settings.theme)
    apply_ui_scale(app, settings.ui_scale)

    window = MainWindow(settings, picker_mode=picker_mode)
    window.show()
    logger.info("Node Viewer GUI started.")

    sys.exit(app.exec())
