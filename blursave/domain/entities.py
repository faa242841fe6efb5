from __future__ import annotations

"""Domain value objects for documents, per-document save outcomes, and batch results."""

import os
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Optional, Tuple, Union

from .errors import SaveIOError

UNTITLED_NAME = "Untitled"


@dataclass(frozen=True)
class DocumentHandle:
    """Identifies one open document of the host's working set."""

    doc_id: str
    """Host identity of the document; survives a Save As that changes the path."""
    path: Optional[str] = None
    """Storage location on disk, ``None`` while the document is untitled."""
    name: str = ""
    """Display name; derived from ``path`` when left empty."""
    dirty: bool = False
    """Unsaved-changes flag as reported by the host. Informational only."""

    def __post_init__(self) -> None:
        if not isinstance(self.doc_id, str) or not self.doc_id.strip():
            raise ValueError("DocumentHandle.doc_id must be a non-empty string.")
        if self.path is not None and not isinstance(self.path, str):
            raise TypeError("DocumentHandle.path must be a string or None.")
        if not self.name:
            object.__setattr__(self, "name", _display_name(self.path))

    @property
    def is_untitled(self) -> bool:
        return not (self.path or "").strip()

    def with_path(self, path: str, *, name: str = "") -> "DocumentHandle":
        """Return a copy pointing at ``path``; identity is preserved."""
        return replace(self, path=path, name=name or _display_name(path))

    def __str__(self) -> str:
        return self.path or self.name


def _display_name(path: Optional[str]) -> str:
    text = (path or "").strip()
    if not text:
        return UNTITLED_NAME
    return os.path.basename(text.rstrip("/\\")) or text


# ---- Per-document outcomes (tagged union) ----
@dataclass(frozen=True)
class Saved:
    handle: DocumentHandle
    kind: str = field(default="saved", init=False)


@dataclass(frozen=True)
class Skipped:
    handle: DocumentHandle
    kind: str = field(default="skipped", init=False)


@dataclass(frozen=True)
class Cancelled:
    kind: str = field(default="cancelled", init=False)


@dataclass(frozen=True)
class Failed:
    error: SaveIOError
    kind: str = field(default="failed", init=False)


SaveOutcome = Union[Saved, Skipped, Cancelled, Failed]


class BatchStatus(str, Enum):
    """Terminal status of one save pass."""

    COMPLETED = "completed"
    COMPLETED_WITH_ERRORS = "completed_with_errors"
    CANCELLED_BY_USER = "cancelled_by_user"


@dataclass(frozen=True)
class OrchestrationResult:
    """Aggregate outcome of a sequential save pass."""

    status: BatchStatus
    handles: Tuple[DocumentHandle, ...] = ()
    """Saved or skipped documents in input order. Failed documents are absent."""
    first_error: Optional[SaveIOError] = None
    """First non-cancellation failure seen during the pass."""
    saved: int = 0
    skipped: int = 0
    failed: int = 0

    @property
    def ok(self) -> bool:
        return self.status is BatchStatus.COMPLETED

    def summary(self) -> str:
        """One-line, user-presentable description of the pass."""
        noun = "document" if self.saved == 1 else "documents"
        base = f"Saved {self.saved} {noun}"
        if self.skipped:
            base += f", skipped {self.skipped} untitled"
        if self.status is BatchStatus.CANCELLED_BY_USER:
            return f"{base}; remaining saves cancelled."
        if self.status is BatchStatus.COMPLETED_WITH_ERRORS:
            detail = self.first_error.message if self.first_error else "unknown error"
            return f"{base}; {self.failed} failed ({detail})."
        return f"{base}."


__all__ = [
    "BatchStatus",
    "Cancelled",
    "DocumentHandle",
    "Failed",
    "OrchestrationResult",
    "SaveOutcome",
    "Saved",
    "Skipped",
    "UNTITLED_NAME",
]
