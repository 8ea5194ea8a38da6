# node_viewer/gui/widgets.py

from PySide6.QtWidgets import QWidget, QHBoxLayout, QLabel, QSizePolicy

from node_viewer.core.models import FileLoadingState, Idle, Loading, Loaded, Error

IDLE_MESSAGE = "No file opened. Use File > Open to select a file."


# --- The Status Widget ---
class StatusWidget(QWidget):
    """
    The banner above the content tabs. It mirrors the loading state: a hint
    when idle, a waiting message, the loaded file's name, or a red error.
    """

    def __init__(self, parent=None):
        super().__init__(parent)
        layout = QHBoxLayout(self)
        layout.setContentsMargins(10, 5, 10, 5)

        self.status_label = QLabel("Status:")
        # The object name lets the theme stylesheets target this label.
        self.status_label.setObjectName("StatusLabel")
        self.status_message = QLabel(IDLE_MESSAGE)
        self.status_message.setWordWrap(True)

        # Long error messages wrap, so the banner must be allowed to grow.
        self.setSizePolicy(QSizePolicy.Expanding, QSizePolicy.Minimum)

        layout.addWidget(self.status_label)
        layout.addWidget(self.status_message)
        layout.addStretch()

    def set_status(self, message: str, is_error: bool = False):
        """Updates the status message and switches to red for errors."""
        self.status_message.setText(message)
        if is_error:
            self.status_message.setStyleSheet("color: #BF616A;")
        else:
            self.status_message.setStyleSheet("")

    def show_state(self, state: FileLoadingState):
        if isinstance(state, Idle):
            self.set_status(IDLE_MESSAGE)
        elif isinstance(state, Loading):
            self.set_status("Loading...")
        elif isinstance(state, Loaded):
            self.set_status(f"File: {state.details.file_name}")
        elif isinstance(state, Error):
            self.set_status(f"Error opening file: {state.message}", is_error=True)
