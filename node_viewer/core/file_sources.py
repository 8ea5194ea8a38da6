# node_viewer/core/file_sources.py

import logging
import threading
from abc import ABC, abstractmethod
from concurrent.futures import Executor, Future, InvalidStateError, ThreadPoolExecutor
from pathlib import Path
from typing import Callable, Optional, Union

from .errors import FileError, IoError, NameExtractionError, NoFileSelected
from .models import FileAcquisitionResult, FileDetails

logger = logging.getLogger(__name__)

PathLike = Union[str, Path]

# The two picker strategies a session can be configured with.
PICKER_NATIVE = "native"
PICKER_ASYNC = "async"
PICKER_MODES = (PICKER_NATIVE, PICKER_ASYNC)


# --- The Shared Reader ---

def read_file_details(path: PathLike) -> FileDetails:
    """
    Reads a selected file fully into memory.

    Raises:
        NameExtractionError: The path has no final component, or the name
            cannot be represented as UTF-8 text.
        IoError: The filesystem read failed; the OS reason is kept.
    """
    path = Path(path)

    file_name = path.name
    try:
        file_name.encode("utf-8")
    except UnicodeEncodeError:
        # Undecodable bytes in a POSIX name surface as lone surrogates.
        file_name = ""
    if not file_name:
        logger.error(f"Could not extract a file name from: {path}")
        raise NameExtractionError(str(path))

    try:
        file_content = path.read_bytes()
    except OSError as e:
        logger.error(f"Failed to read '{path}': {e}")
        raise IoError(e.strerror or str(e)) from e

    logger.info(f"Read {len(file_content)} bytes from '{path}'.")
    return FileDetails(file_name=file_name, file_content=file_content)


# --- The One-Shot Completion Handle ---

class PendingAcquisition:
    """
    The completion handle for a single file request.

    It wraps a Future, so it can be resolved from a reader thread and checked
    from the GUI thread. The first completion wins; anything after that is
    ignored. `take()` hands the result out exactly once.
    """

    def __init__(self, request_id: int):
        self.request_id = request_id
        self._future: Future = Future()
        self._taken = False
        self._take_lock = threading.Lock()

    def resolve(self, details: FileDetails):
        self._complete(FileAcquisitionResult.success(self.request_id, details))

    def fail(self, error: FileError):
        self._complete(FileAcquisitionResult.failure(self.request_id, error))

    def _complete(self, result: FileAcquisitionResult):
        try:
            self._future.set_result(result)
        except InvalidStateError:
            logger.debug(f"Request #{self.request_id} already completed; extra completion ignored.")

    def take(self) -> Optional[FileAcquisitionResult]:
        """Returns the result the first time it is available, then None."""
        if not self._future.done():
            return None
        with self._take_lock:
            if self._taken:
                return None
            self._taken = True
        return self._future.result()


# --- The File Source Strategies ---

class FileSource(ABC):
    """
    The capability to ask the user for one file.

    Both strategies answer through a PendingAcquisition, so the controller never
    needs to know which one is active.
    """

    # A blocking source resolves its handle before request_file() returns.
    is_blocking: bool = False

    @abstractmethod
    def request_file(self, request_id: int) -> PendingAcquisition:
        raise NotImplementedError

    def shutdown(self):
        """Releases any resources held by the source."""


class NativeFileSource(FileSource):
    """
    Blocking strategy: a modal picker occupies the caller until the user picks
    a file or cancels, then the file is read on the spot.
    """
    is_blocking = True

    def __init__(self, pick_path: Callable[[], Optional[PathLike]]):
        """
        Args:
            pick_path: Shows the modal picker and returns the chosen path, or
                None / an empty string when the user cancels.
        """
        self._pick_path = pick_path

    def request_file(self, request_id: int) -> PendingAcquisition:
        pending = PendingAcquisition(request_id)
        logger.info(f"Request #{request_id}: opening the native file dialog.")

        path = self._pick_path()
        if not path:
            logger.info(f"Request #{request_id}: dialog closed without a selection.")
            pending.fail(NoFileSelected())
            return pending

        try:
            pending.resolve(read_file_details(path))
        except FileError as e:
            pending.fail(e)
        return pending


class FileInputSurface(ABC):
    """
    A transient, non-blocking file chooser. The async source attaches a change
    listener, triggers it, and forgets about it.
    """

    @abstractmethod
    def on_change(self, callback: Callable[[PathLike], None]):
        """Registers the listener called with the chosen path."""
        raise NotImplementedError

    @abstractmethod
    def trigger(self):
        """Shows the chooser. Must return without waiting for the user."""
        raise NotImplementedError


class AsyncFileSource(FileSource):
    """
    Event-driven strategy: request_file() returns at once with an unresolved
    handle. The chain change event -> background byte read -> completion
    resolves it later. If the user dismisses the chooser, nothing ever fires
    and the handle stays pending.
    """
    is_blocking = False

    def __init__(self, surface_factory: Callable[[], FileInputSurface], reader: Optional[Executor] = None):
        self._surface_factory = surface_factory
        self._owns_reader = reader is None
        self._reader = reader or ThreadPoolExecutor(max_workers=1, thread_name_prefix="file-reader")

    def request_file(self, request_id: int) -> PendingAcquisition:
        pending = PendingAcquisition(request_id)
        surface = self._surface_factory()
        surface.on_change(lambda path: self._on_change(pending, path))
        logger.info(f"Request #{request_id}: file chooser triggered.")
        surface.trigger()
        return pending

    def _on_change(self, pending: PendingAcquisition, path: PathLike):
        if not path:
            # A change event without a file carries nothing to read.
            return
        logger.debug(f"Request #{pending.request_id}: '{path}' selected, reading in the background.")
        future = self._reader.submit(read_file_details, path)
        future.add_done_callback(lambda f: self._on_read_complete(pending, f))

    def _on_read_complete(self, pending: PendingAcquisition, future: Future):
        error = future.exception()
        if error is None:
            pending.resolve(future.result())
        elif isinstance(error, FileError):
            pending.fail(error)
        else:
            logger.error(f"Request #{pending.request_id}: unexpected read failure: {error}", exc_info=error)
            pending.fail(IoError(str(error)))

    def shutdown(self):
        if self._owns_reader:
            self._reader.shutdown(wait=False)


def create_file_source(mode: str,
                       pick_path: Optional[Callable[[], Optional[PathLike]]] = None,
                       surface_factory: Optional[Callable[[], FileInputSurface]] = None) -> FileSource:
    """
    Builds the file source for a session. This is the only place where the
    picker mode is looked at.
    """
    if mode == PICKER_NATIVE:
        if pick_path is None:
            raise ValueError("The native picker mode needs a pick_path callable.")
        return NativeFileSource(pick_path)
    if mode == PICKER_ASYNC:
        if surface_factory is None:
            raise ValueError("The async picker mode needs a surface_factory callable.")
        return AsyncFileSource(surface_factory)
    raise ValueError(f"Unknown picker mode: '{mode}'. Expected one of {', '.join(PICKER_MODES)}.")
