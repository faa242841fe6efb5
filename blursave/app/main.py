# blursave/app/main.py
from __future__ import annotations
import asyncio
import logging
import os
import sys
from tkinter import filedialog
from typing import List, Optional

from .views.main_window import EditorWindowView
from .plugin import BlurSavePlugin, register_plugin
from ..adapters.storage_local import StorageLocal
from ..adapters.tk_workspace import TkWorkspace
from ..domain.entities import BatchStatus, DocumentHandle, Failed, OrchestrationResult, Saved
from ..usecases.save_all_documents import SaveAllDocuments
from ..utils import logging as logging_utils


class App:
    """Bootstrap: a minimal text editor with save-on-focus-lost attached."""

    def __init__(self, paths: Optional[List[str]] = None) -> None:
        self._log = logging.getLogger(__name__)
        self.win = EditorWindowView(
            on_new=self._on_new,
            on_open=self._on_open,
            on_save=self._on_save,
            on_quit=self._on_quit,
        )
        self.workspace = TkWorkspace(on_renamed=self._on_document_renamed)

        # ---- LocalStorage Adapter ----
        self._storage_root = os.environ.get("BLURSAVE_STORAGE_ROOT") or "."
        self._storage = StorageLocal(root_dir=self._storage_root)

        self.plugin: BlurSavePlugin = register_plugin(
            self.win,
            self.workspace,
            self._storage,
            menu=self.win.file_menu,
            on_result=self._on_pass_finished,
        )

        for path in paths or []:
            self._open_path(path)
        if not paths:
            self._on_new()
        self.win.set_status_message("Ready.")

    # ==================================================================
    # Document commands
    # ==================================================================
    def _open_path(self, path: Optional[str]) -> DocumentHandle:
        title = os.path.basename(path) if path else "Untitled"
        text = self.win.add_document_tab(title)
        handle = self.workspace.open_document(text, path)
        self.win.register_tab(handle.doc_id, text)
        return handle

    def _on_new(self) -> None:
        self._open_path(None)

    def _on_open(self) -> None:
        path = filedialog.askopenfilename(parent=self.win)
        if path:
            self._open_path(path)

    def _on_save(self) -> None:
        doc_id = self.win.current_doc_id()
        if doc_id is None:
            return
        handle = next((h for h in self.workspace.list_open_documents() if h.doc_id == doc_id), None)
        if handle is None:
            return
        target = handle
        if handle.is_untitled:
            path = filedialog.asksaveasfilename(parent=self.win, initialfile=handle.name)
            if not path:
                return
            target = handle.with_path(path)

        # the workspace keeps the old path until the write has succeeded
        uc = SaveAllDocuments(save_fn=self.workspace.save)
        outcome = asyncio.run(uc.save_one(target))
        if isinstance(outcome, Saved):
            if outcome.handle.path != handle.path:
                self.workspace.apply_saved(handle, outcome.handle)
            self.win.set_status_message(f"Saved {outcome.handle.path}.")
        elif isinstance(outcome, Failed):
            self.win.set_status_message(outcome.error.message)
        else:
            self.win.set_status_message("Save cancelled.")

    def _on_quit(self) -> None:
        self.plugin.unregister()
        self.win.destroy()

    # ==================================================================
    # Plugin callbacks
    # ==================================================================
    def _on_document_renamed(self, handle: DocumentHandle) -> None:
        self.win.set_tab_title(handle.doc_id, handle.name)

    def _on_pass_finished(self, result: OrchestrationResult) -> None:
        if result.status is BatchStatus.COMPLETED_WITH_ERRORS:
            self._log.warning("Autosave finished with errors: %s", result.summary())
        self.win.set_status_message(f"Autosave: {result.summary()}")

    def run(self) -> None:
        self.win.mainloop()


def main(argv: Optional[List[str]] = None) -> int:
    logging_utils.configure_root()
    args = list(sys.argv[1:] if argv is None else argv)
    App(paths=args).run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
