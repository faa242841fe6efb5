from __future__ import annotations

from typing import Any, Awaitable, Callable, List, Optional, Protocol

from .entities import DocumentHandle

SaveFn = Callable[[DocumentHandle], Awaitable[Optional[DocumentHandle]]]


# ---- Ports (Hexagonal boundaries) ----
class WorkspacePort(Protocol):
    """Open documents of the host editor and its save command."""

    def list_open_documents(self) -> List[DocumentHandle]: ...  # snapshot, working-set order
    def is_untitled(self, handle: DocumentHandle) -> bool: ...
    async def save(self, handle: DocumentHandle) -> Optional[DocumentHandle]: ...  # may prompt
    def apply_saved(self, old: DocumentHandle, new: DocumentHandle) -> None: ...


class PreferenceStore(Protocol):
    """Key-value preferences persisted across sessions."""

    def get(self, key: str, default: Any = None) -> Any: ...
    def set(self, key: str, value: Any) -> None: ...


__all__ = ["PreferenceStore", "SaveFn", "WorkspacePort"]
