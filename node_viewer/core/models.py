# node_viewer/core/models.py

"""
Data models shared by the file sources, the loading controller and the GUI.

These are plain, immutable dataclasses with no Qt imports, so the whole
acquisition pipeline can be exercised from tests and from the CLI.
"""

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional

from .errors import FileError


@dataclass(frozen=True)
class FileDetails:
    """The name and complete byte content of one acquired file."""
    file_name: str
    file_content: bytes

    def __post_init__(self):
        # A mutable buffer handed in by a reader is copied, never aliased.
        if not isinstance(self.file_content, bytes):
            object.__setattr__(self, "file_content", bytes(self.file_content))

    @property
    def size(self) -> int:
        return len(self.file_content)


class LoadingStatus(Enum):
    """The tag of the FileLoadingState variant, handy for UI branching."""
    IDLE = auto()
    LOADING = auto()
    LOADED = auto()
    ERROR = auto()


# --- The FileLoadingState Variants ---
# Exactly one of these is active in a controller at any time.

@dataclass(frozen=True)
class FileLoadingState:
    status = None


@dataclass(frozen=True)
class Idle(FileLoadingState):
    """No file has been requested yet in this session."""
    status = LoadingStatus.IDLE


@dataclass(frozen=True)
class Loading(FileLoadingState):
    """An acquisition is in flight; no content is available."""
    request_id: int = 0
    status = LoadingStatus.LOADING


@dataclass(frozen=True)
class Loaded(FileLoadingState):
    """The last acquisition succeeded."""
    details: FileDetails
    status = LoadingStatus.LOADED


@dataclass(frozen=True)
class Error(FileLoadingState):
    """The last acquisition failed; `message` is meant for display."""
    message: str
    status = LoadingStatus.ERROR


@dataclass(frozen=True)
class FileAcquisitionResult:
    """
    What a file source delivers for one request: either details or an error,
    tagged with the id of the request that produced it.
    """
    request_id: int
    details: Optional[FileDetails] = None
    error: Optional[FileError] = None

    @property
    def ok(self) -> bool:
        return self.error is None

    @classmethod
    def success(cls, request_id: int, details: FileDetails) -> "FileAcquisitionResult":
        return cls(request_id=request_id, details=details)

    @classmethod
    def failure(cls, request_id: int, error: FileError) -> "FileAcquisitionResult":
        return cls(request_id=request_id, error=error)
