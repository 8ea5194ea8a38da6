# node_viewer/gui/resources.py

import logging

from PySide6.QtGui import QFont, QFontDatabase
from PySide6.QtWidgets import QApplication

from node_viewer.core.config_manager import get_project_root

# A dedicated logger for asset-related events, handy when a theme file is missing.
logger = logging.getLogger(__name__)

# --- Asset Locations ---
ASSETS_PATH = get_project_root() / 'assets'
THEMES_PATH = ASSETS_PATH / 'styles' / 'themes'

# "system" has no stylesheet: Qt's native style is left untouched.
THEME_FILES = {
    "light": "light_theme.qss",
    "dark": "dark_theme.qss",
}

# Monospace font used by the hex and text views.
MONOSPACE_POINT_SIZE = 10

# The application font size before any UI scale is applied, captured once.
_base_point_size = None


def validate_assets():
    """Logs a warning for every theme stylesheet that is missing."""
    logger.info("Validating GUI assets...")
    missing = [name for name in THEME_FILES.values() if not (THEMES_PATH / name).exists()]
    if missing:
        logger.warning(f"Missing theme stylesheets in '{THEMES_PATH}': {', '.join(missing)}")
    else:
        logger.info("All theme stylesheets found.")


def load_stylesheet(theme: str) -> str:
    """Returns the stylesheet for a theme, or an empty string for the system look."""
    theme_file = THEME_FILES.get(theme)
    if theme_file is None:
        return ""
    theme_path = THEMES_PATH / theme_file
    if theme_path.exists():
        logger.info(f"Loading theme: {theme_file}")
        return theme_path.read_text(encoding='utf-8')
    logger.error(f"Failed to load theme file: {theme_path}")
    return ""


def apply_theme(app: QApplication, theme: str):
    app.setStyleSheet(load_stylesheet(theme))


def apply_ui_scale(app: QApplication, scale: float):
    """Scales every widget's text by resizing the application font."""
    global _base_point_size
    font = app.font()
    if _base_point_size is None:
        _base_point_size = font.pointSizeF() if font.pointSizeF() > 0 else 10.0
    font.setPointSizeF(_base_point_size * scale)
    app.setFont(font)
    logger.info(f"UI scale set to {scale}.")


def monospace_font(scale: float = 1.0) -> QFont:
    font = QFontDatabase.systemFont(QFontDatabase.FixedFont)
    font.setPointSizeF(MONOSPACE_POINT_SIZE * scale)
    return font
