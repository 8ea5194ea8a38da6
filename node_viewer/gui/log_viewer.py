# node_viewer/gui/log_viewer.py

from PySide6.QtWidgets import QTableView, QHeaderView, QAbstractItemView

# The view only renders; every row lives in the LogModel.
from .log_model import LogModel


# --- The Activity Log View ---
class LogViewer(QTableView):
    """
    Read-only table of the session's file-acquisition events.

    The MainWindow feeds it through add_log_entry(); the rows themselves are
    held by a LogModel that the view queries for text, colors and tooltips.
    """

    def __init__(self, parent=None):
        super().__init__(parent)

        # The view owns its model, so both go away with the window.
        self._model = LogModel(self)
        self.setModel(self._model)

        # --- Appearance & Behavior ---

        # A click selects the whole event row, not a single cell.
        self.setSelectionBehavior(QAbstractItemView.SelectRows)
        # Events are a record of what happened; they cannot be edited.
        self.setEditTriggers(QAbstractItemView.NoEditTriggers)
        # Long messages stay on one line; the tooltip carries the full text.
        self.setWordWrap(False)
        self.setShowGrid(False)

        # --- Column Sizing ---
        header = self.horizontalHeader()

        # Status (index 0) is only as wide as the longest status word.
        header.setSectionResizeMode(0, QHeaderView.ResizeToContents)

        # Message (index 1) takes whatever width is left when the window resizes.
        header.setSectionResizeMode(1, QHeaderView.Stretch)

        # Time (index 2) is only as wide as an HH:MM:SS stamp.
        header.setSectionResizeMode(2, QHeaderView.ResizeToContents)

        # Row numbers add nothing; the time column already orders the events.
        self.verticalHeader().hide()

    # --- Public Methods (called by the MainWindow) ---

    def add_log_entry(self, status: str, message: str):
        """Adds an event and keeps the newest one in sight."""
        self._model.add_entry(status, message)
        self.scrollToBottom()

    def clear_logs(self):
        self._model.clear()
