# node_viewer/gui/log_model.py

import datetime

from PySide6.QtCore import QAbstractTableModel, Qt, QModelIndex
from PySide6.QtGui import QColor

# Status colors share the Nord palette of the status banner and the themes.
STATUS_COLORS = {
    "LOADED": QColor("#A3BE8C"),
    "ERROR": QColor("#BF616A"),
    "INFO": QColor("#81A1C1"),
}


# --- The Activity Log Model ---
class LogModel(QAbstractTableModel):
    """
    Table model holding the session's file-acquisition events, one row per
    state change: status, message and time.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        # Each entry is a dict: {"status": "LOADED", "message": "...", "time": "12:00:00"}
        self._log_data = []
        # Column order here is the column order in the LogViewer.
        self._headers = ["Status", "Message", "Time"]

    # --- Required Methods for QAbstractTableModel ---

    def rowCount(self, parent=QModelIndex()):
        return len(self._log_data)

    def columnCount(self, parent=QModelIndex()):
        return len(self._headers)

    def data(self, index: QModelIndex, role: int = Qt.DisplayRole):
        """Supplies cell text, the status color and a tooltip to the view."""
        # The view can ask about cells that no longer exist after a clear().
        if not index.isValid():
            return None

        row_data = self._log_data[index.row()]
        col = index.column()

        # The 'role' says what the view wants for this cell.
        if role == Qt.DisplayRole:
            if col == 0:  # Status
                return row_data["status"]
            if col == 1:  # Message
                return row_data["message"]
            if col == 2:  # Time
                return row_data["time"]

        if role == Qt.ForegroundRole and col == 0:
            # Unknown statuses are drawn in the INFO color.
            return STATUS_COLORS.get(row_data["status"], STATUS_COLORS["INFO"])

        if role == Qt.ToolTipRole:
            # Messages are not wrapped in the table, so hovering shows them whole.
            return row_data["message"]

        # Any other role gets Qt's default.
        return None

    def headerData(self, section: int, orientation: Qt.Orientation, role: int = Qt.DisplayRole):
        if role == Qt.DisplayRole and orientation == Qt.Horizontal:
            return self._headers[section]
        return None

    # --- Custom Public Methods ---

    def add_entry(self, status: str, message: str):
        """Appends one event at the end of the table."""
        # Tell attached views a row is about to appear at the bottom.
        self.beginInsertRows(QModelIndex(), self.rowCount(), self.rowCount())
        entry = {
            "status": status.upper(),  # Upper-cased so the color lookup matches.
            "message": message,
            "time": datetime.datetime.now().strftime("%H:%M:%S")
        }
        self._log_data.append(entry)
        # Views repaint only after this call.
        self.endInsertRows()

    def clear(self):
        # A reset drops every row at once instead of one removal per row.
        self.beginResetModel()
        self._log_data = []
        self.endResetModel()
