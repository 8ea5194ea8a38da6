# node_viewer/gui/qt_file_sources.py

import logging
from typing import Callable, Optional

from PySide6.QtCore import Qt
from PySide6.QtWidgets import QFileDialog, QWidget

from node_viewer.core.file_sources import FileInputSurface, FileSource, create_file_source

logger = logging.getLogger(__name__)

DIALOG_TITLE = "Open File"
ALL_FILES_FILTER = "All files (*)"


def make_native_picker(parent: Optional[QWidget]) -> Callable[[], Optional[str]]:
    """Returns a callable that shows the modal OS dialog and returns the chosen path."""

    def pick_path() -> Optional[str]:
        # getOpenFileName blocks until the dialog closes; "" means cancelled.
        file_path, _ = QFileDialog.getOpenFileName(parent, DIALOG_TITLE, "", ALL_FILES_FILTER)
        return file_path or None

    return pick_path


class QtFileInputSurface(FileInputSurface):
    """
    A throwaway, non-blocking QFileDialog. open() shows it and returns at once;
    the fileSelected signal is the change event. The dialog deletes itself when
    closed, and closing it without a choice emits nothing.
    """

    def __init__(self, parent: Optional[QWidget] = None):
        self.dialog = QFileDialog(parent, DIALOG_TITLE)
        self.dialog.setFileMode(QFileDialog.ExistingFile)
        self.dialog.setNameFilter(ALL_FILES_FILTER)
        self.dialog.setAttribute(Qt.WA_DeleteOnClose)

    def on_change(self, callback):
        self.dialog.fileSelected.connect(callback)

    def trigger(self):
        self.dialog.open()


def build_file_source(mode: str, parent: Optional[QWidget] = None) -> FileSource:
    """Wires the Qt pickers into the file source selected for this session."""
    logger.info(f"Using the '{mode}' file picker.")
    return create_file_source(
        mode,
        pick_path=make_native_picker(parent),
        surface_factory=lambda: QtFileInputSurface(parent),
    )
