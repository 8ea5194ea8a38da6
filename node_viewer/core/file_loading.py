# node_viewer/core/file_loading.py

import logging
import time
from typing import Callable, List, Optional

from .file_sources import FileSource, PendingAcquisition
from .models import FileAcquisitionResult, FileLoadingState, Idle, Loading, Loaded, Error

logger = logging.getLogger(__name__)

StateListener = Callable[[FileLoadingState], None]


class FileLoadingController:
    """
    Owns the FileLoadingState machine and is its only writer.

    The state moves to Loading when the user asks for a file, and to Loaded or
    Error when the active file source completes the latest request. Results of
    superseded requests are dropped: every request gets a new id, and only a
    completion carrying the latest id is ever applied.
    """

    def __init__(self, file_source: FileSource, pending_timeout: Optional[float] = None,
                 clock: Callable[[], float] = time.monotonic):
        """
        Args:
            file_source: The strategy chosen for this session.
            pending_timeout: Seconds after which an unanswered non-blocking
                request is abandoned. None waits indefinitely.
            clock: Monotonic time source, replaceable in tests.
        """
        self.file_source = file_source
        self.pending_timeout = pending_timeout
        self._clock = clock

        # --- State Machine Attributes ---
        self._state: FileLoadingState = Idle()
        self._last_request_id: int = 0
        self._pending: Optional[PendingAcquisition] = None
        self._requested_at: float = 0.0
        self._in_blocking_request: bool = False

        self._listeners: List[StateListener] = []

    # --- Public API ---

    def current_state(self) -> FileLoadingState:
        """Read-only snapshot for rendering. States are immutable."""
        return self._state

    def add_listener(self, listener: StateListener):
        """Registers a callback invoked with every new state."""
        self._listeners.append(listener)

    def is_waiting(self) -> bool:
        """True while a non-blocking request has not been answered yet."""
        return self._pending is not None

    def start_loading(self):
        """
        Starts a new acquisition and moves to Loading.

        With a blocking source the user has already answered when the call
        returns, so the outcome is applied immediately. With a non-blocking
        source the outcome arrives later through poll_completion(). A request
        made while another non-blocking one is outstanding supersedes it.
        """
        if self._in_blocking_request:
            # A modal dialog can run a nested event loop that re-delivers the
            # open action; the dialog that is already up answers it.
            logger.debug("Ignoring open request: a blocking file dialog is already showing.")
            return

        self._last_request_id += 1
        request_id = self._last_request_id

        if self._pending is not None:
            logger.info(f"Request #{request_id} supersedes pending request #{self._pending.request_id}.")
        # The old handle is dropped, so its late result has nowhere to land.
        self._pending = None

        self._set_state(Loading(request_id=request_id))

        self._in_blocking_request = self.file_source.is_blocking
        try:
            pending = self.file_source.request_file(request_id)
        except Exception as e:
            logger.error(f"Request #{request_id} could not be started: {e}", exc_info=True)
            self._set_state(Error(message=str(e)))
            return
        finally:
            self._in_blocking_request = False

        self._pending = pending
        self._requested_at = self._clock()

        if self.file_source.is_blocking:
            self.poll_completion()

    def poll_completion(self) -> bool:
        """
        Applies the outcome of the latest request if it has arrived.

        Never blocks. Meant to be called once per redraw tick. Does nothing
        unless the state is Loading with a request outstanding.

        Returns:
            True when a state transition was applied.
        """
        if self._pending is None or not isinstance(self._state, Loading):
            return False

        result = self._pending.take()
        if result is None:
            return self._check_timeout()

        self._pending = None
        return self._apply_result(result)

    # --- Internal Transitions ---

    def _apply_result(self, result: FileAcquisitionResult) -> bool:
        if result.request_id != self._last_request_id:
            logger.info(f"Discarding late result of superseded request #{result.request_id}.")
            return False

        if result.ok:
            details = result.details
            logger.info(f"Request #{result.request_id}: loaded '{details.file_name}' ({details.size} bytes).")
            self._set_state(Loaded(details=details))
        else:
            logger.warning(f"Request #{result.request_id} failed: {result.error}")
            self._set_state(Error(message=str(result.error)))
        return True

    def _check_timeout(self) -> bool:
        if self.pending_timeout is None:
            return False
        waited = self._clock() - self._requested_at
        if waited < self.pending_timeout:
            return False

        request_id = self._pending.request_id
        self._pending = None
        logger.warning(f"Request #{request_id} abandoned after waiting {waited:.1f}s for a file selection.")
        self._set_state(Error(message=f"No file was chosen within {self.pending_timeout:g} seconds"))
        return True

    def _set_state(self, new_state: FileLoadingState):
        self._state = new_state
        logger.debug(f"File loading state is now {new_state.status.name}.")
        for listener in list(self._listeners):
            listener(new_state)
