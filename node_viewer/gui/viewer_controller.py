# node_viewer/gui/viewer_controller.py

import logging
from typing import Optional

from PySide6.QtCore import QObject, QTimer, Signal, Slot

from node_viewer.core.file_loading import FileLoadingController
from node_viewer.core.file_sources import FileSource
from node_viewer.core.models import Error, FileLoadingState, Loaded, Loading

logger = logging.getLogger(__name__)

# How often the redraw tick checks for a finished non-blocking request.
REDRAW_TICK_MS = 16


class ViewerController(QObject):
    """
    The non-visual link between the window and the file loading state machine.

    It owns the core FileLoadingController, drives poll_completion() from a
    redraw timer, and re-emits every state change as a Qt signal.
    """
    state_changed = Signal(object)
    log_entry_created = Signal(dict)

    def __init__(self, file_source: FileSource, pending_timeout: Optional[float] = None, parent=None):
        super().__init__(parent)
        self.loader = FileLoadingController(file_source, pending_timeout=pending_timeout)
        self.loader.add_listener(self._on_state_changed)

        self.redraw_timer = QTimer(self)
        self.redraw_timer.setInterval(REDRAW_TICK_MS)
        self.redraw_timer.timeout.connect(self.poll)
        self.redraw_timer.start()

    def current_state(self) -> FileLoadingState:
        return self.loader.current_state()

    @Slot()
    def open_file(self):
        """Routes the user's "open file" intent to the state machine."""
        self.loader.start_loading()

    @Slot()
    def poll(self):
        """One redraw tick: pick up a finished request, if any."""
        self.loader.poll_completion()

    def shutdown(self):
        logger.info("Stopping the redraw timer and the file source.")
        self.redraw_timer.stop()
        self.loader.file_source.shutdown()

    def _on_state_changed(self, state: FileLoadingState):
        logger.debug(f"Loading state is now {state.status.name}.")
        if isinstance(state, Loading):
            self.log_entry_created.emit({"status": "INFO", "message": f"Waiting for a file (request #{state.request_id})..."})
        elif isinstance(state, Loaded):
            details = state.details
            self.log_entry_created.emit(
                {"status": "LOADED", "message": f"Loaded '{details.file_name}' ({details.size} bytes)"})
        elif isinstance(state, Error):
            self.log_entry_created.emit({"status": "ERROR", "message": f"Error opening file: {state.message}"})
        self.state_changed.emit(state)
