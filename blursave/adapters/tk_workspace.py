"""Workspace adapter backed by tkinter ``Text`` widgets.

Each open document is a ``Text`` widget plus an optional file path. Saving
writes the widget contents to disk as UTF-8. When the document's directory
has disappeared since it was opened, the user is asked for a new location;
dismissing that prompt raises ``UserCancelled``.
"""

from __future__ import annotations

import itertools
import logging
import os
from dataclasses import dataclass
from tkinter import filedialog
from typing import Any, Callable, Dict, List, Optional

from blursave.domain.entities import DocumentHandle
from blursave.domain.errors import UserCancelled
from blursave.domain.ports import WorkspacePort

AskSaveAsFn = Callable[..., Any]
RenamedFn = Callable[[DocumentHandle], None]


@dataclass
class TkDocument:
    """Mutable host-side record for one open ``Text`` widget."""

    doc_id: str
    text: Any
    path: Optional[str] = None

    def content(self) -> str:
        return self.text.get("1.0", "end-1c")

    def is_dirty(self) -> bool:
        return bool(self.text.edit_modified())

    def mark_clean(self) -> None:
        self.text.edit_modified(False)


class TkWorkspace(WorkspacePort):
    """Open ``Text`` documents of a tkinter editor in tab order."""

    def __init__(
        self,
        *,
        ask_save_as: Optional[AskSaveAsFn] = None,
        on_renamed: Optional[RenamedFn] = None,
        encoding: str = "utf-8",
    ) -> None:
        self._log = logging.getLogger(__name__)
        self._ask_save_as = ask_save_as or filedialog.asksaveasfilename
        self._on_renamed = on_renamed
        self._encoding = encoding
        self._documents: Dict[str, TkDocument] = {}
        self._ids = itertools.count(1)

    # ------------------------------------------------------------------
    # Document registry
    # ------------------------------------------------------------------
    def open_document(self, text: Any, path: Optional[str] = None) -> DocumentHandle:
        """Register a ``Text`` widget, loading ``path`` into it when it exists."""
        doc = TkDocument(doc_id=f"doc-{next(self._ids)}", text=text, path=path)
        if path and os.path.isfile(path):
            with open(path, "r", encoding=self._encoding) as fh:
                text.delete("1.0", "end")
                text.insert("1.0", fh.read())
            doc.mark_clean()
        self._documents[doc.doc_id] = doc
        self._log.debug("Opened %s as %s", path or "untitled document", doc.doc_id)
        return self._handle_for(doc)

    def close_document(self, doc_id: str) -> None:
        self._documents.pop(doc_id, None)

    def document(self, doc_id: str) -> Optional[TkDocument]:
        return self._documents.get(doc_id)

    def _handle_for(self, doc: TkDocument) -> DocumentHandle:
        return DocumentHandle(doc_id=doc.doc_id, path=doc.path, dirty=doc.is_dirty())

    # ------------------------------------------------------------------
    # WorkspacePort
    # ------------------------------------------------------------------
    def list_open_documents(self) -> List[DocumentHandle]:
        return [self._handle_for(doc) for doc in self._documents.values()]

    def is_untitled(self, handle: DocumentHandle) -> bool:
        doc = self._documents.get(handle.doc_id)
        if doc is None:
            # closed since the snapshot was taken; nothing to save
            return True
        return not (doc.path or "").strip()

    async def save(self, handle: DocumentHandle) -> Optional[DocumentHandle]:
        doc = self._documents.get(handle.doc_id)
        if doc is None:
            return handle
        target = doc.path or handle.path or ""
        directory = os.path.dirname(target)
        if directory and not os.path.isdir(directory):
            target = self._prompt_for_location(handle)
        with open(target, "w", encoding=self._encoding, newline="") as fh:
            fh.write(doc.content())
        doc.mark_clean()
        if target != handle.path:
            return handle.with_path(target)
        return handle

    def apply_saved(self, old: DocumentHandle, new: DocumentHandle) -> None:
        doc = self._documents.get(old.doc_id)
        if doc is None or doc.path == new.path:
            return
        doc.path = new.path
        self._log.info("Document %s moved to %s", old.doc_id, new.path)
        if self._on_renamed:
            self._on_renamed(new)

    def _prompt_for_location(self, handle: DocumentHandle) -> str:
        chosen = self._ask_save_as(
            title=f"Save {handle.name} As",
            initialfile=handle.name,
        )
        if not chosen:
            raise UserCancelled(f"Save As for {handle.name} was dismissed.")
        return str(chosen)


__all__ = ["TkDocument", "TkWorkspace"]
