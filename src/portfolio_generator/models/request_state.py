"""Data models for the resume upload and generation request lifecycle."""

from __future__ import annotations

import mimetypes
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path

from portfolio_generator.models.portfolio import PortfolioDocument

ACCEPTED_EXTENSIONS = (".pdf", ".docx")

_CONTENT_TYPES = {
    ".pdf": "application/pdf",
    ".docx": "application/vnd.openxmlformats-officedocument.wordprocessingml.document",
}


class InvalidResumeError(Exception):
    """Raised when the chosen path cannot be used as a resume file."""


@dataclass(frozen=True, slots=True)
class ResumeFile:
    """A resume chosen by the user, held in memory until submission.

    Attributes:
        filename: Base name sent as the multipart filename.
        content: Raw file bytes.
        content_type: MIME type sent with the upload.
    """

    filename: str
    content: bytes = field(repr=False)
    content_type: str = "application/octet-stream"

    @property
    def size_bytes(self) -> int:
        return len(self.content)

    @classmethod
    def from_path(cls, path: Path) -> ResumeFile:
        """Read *path* into a ``ResumeFile``.

        Raises:
            InvalidResumeError: If the file is missing, unreadable, or not a
                ``.pdf``/``.docx`` document.
        """
        suffix = path.suffix.lower()
        if suffix not in ACCEPTED_EXTENSIONS:
            accepted = ", ".join(ACCEPTED_EXTENSIONS)
            raise InvalidResumeError(f"Expected a {accepted} file. Received: {path.name}")
        if not path.is_file():
            raise InvalidResumeError(f"File not found: {path}")
        try:
            content = path.read_bytes()
        except OSError as exc:
            raise InvalidResumeError(f"Could not read {path.name}: {exc}") from exc

        content_type = _CONTENT_TYPES.get(suffix) or (
            mimetypes.guess_type(path.name)[0] or "application/octet-stream"
        )
        return cls(filename=path.name, content=content, content_type=content_type)


class Phase(str, Enum):
    """Coarse lifecycle position of the current submission attempt."""

    IDLE = "idle"
    FILE_SELECTED = "file_selected"
    SUBMITTING = "submitting"
    SUCCEEDED = "succeeded"
    FAILED = "failed"


class FailureKind(str, Enum):
    VALIDATION = "validation"
    SERVER = "server"
    TRANSPORT = "transport"


@dataclass(frozen=True, slots=True)
class Idle:
    phase = Phase.IDLE


@dataclass(frozen=True, slots=True)
class FileSelected:
    phase = Phase.FILE_SELECTED


@dataclass(frozen=True, slots=True)
class Submitting:
    request_id: int
    phase = Phase.SUBMITTING


@dataclass(frozen=True, slots=True)
class Succeeded:
    request_id: int
    document: PortfolioDocument
    phase = Phase.SUCCEEDED


@dataclass(frozen=True, slots=True)
class Failed:
    message: str
    kind: FailureKind
    request_id: int | None = None
    phase = Phase.FAILED


RequestState = Idle | FileSelected | Submitting | Succeeded | Failed


@dataclass(frozen=True, slots=True)
class PendingRequest:
    """A submission that has been accepted and must be sent to the service."""

    request_id: int
    file: ResumeFile


@dataclass(slots=True)
class UploadState:
    """Single source of truth for one submission attempt and the active theme.

    Attributes:
        selected_file: The resume currently chosen, if any.
        request: Current request state.
        active_theme: Theme id used to style the views.
        last_request_id: Id of the most recently issued request (0 if none).
    """

    active_theme: str
    selected_file: ResumeFile | None = None
    request: RequestState = field(default_factory=Idle)
    last_request_id: int = 0

    @property
    def phase(self) -> Phase:
        return self.request.phase

    @property
    def is_submitting(self) -> bool:
        return isinstance(self.request, Submitting)

    @property
    def document(self) -> PortfolioDocument | None:
        if isinstance(self.request, Succeeded):
            return self.request.document
        return None

    @property
    def error_message(self) -> str | None:
        if isinstance(self.request, Failed):
            return self.request.message
        return None
