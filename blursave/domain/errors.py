"""Error taxonomy for document saves.

Adapters raise whatever their I/O layer raises; the use-case layer narrows
those into the two cases a save batch distinguishes: the user backing out of
a prompt, and everything else.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:  # pragma: no cover - type checking helper
    from .entities import DocumentHandle


class SaveError(Exception):
    """Base class for per-document save failures."""

    def __init__(self, code: str, message: str):
        super().__init__(message)
        self.code = code
        self.message = message


class UserCancelled(SaveError):
    """The user dismissed an interactive save prompt (for example Save As)."""

    def __init__(self, message: str = "Save cancelled by user."):
        super().__init__("USER_CANCELLED", message)


class SaveIOError(SaveError):
    """A save attempt failed for a reason other than user cancellation."""

    def __init__(
        self,
        details: str,
        *,
        handle: Optional["DocumentHandle"] = None,
        cause: Optional[BaseException] = None,
    ):
        label = handle.name if handle is not None else "document"
        super().__init__("SAVE_FAILED", f"Could not save {label}: {details}")
        self.details = details
        self.handle = handle
        self.cause = cause


__all__ = ["SaveError", "SaveIOError", "UserCancelled"]
