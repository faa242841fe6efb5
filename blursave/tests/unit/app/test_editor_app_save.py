from __future__ import annotations

import logging
from typing import Dict, List, Optional

import pytest

pytest.importorskip("tkinter")

from blursave.adapters.tk_workspace import TkWorkspace  # noqa: E402
from blursave.app import main as app_main  # noqa: E402
from blursave.app.main import App  # noqa: E402


class _Text:
    def __init__(self, content: str) -> None:
        self.content = content
        self.modified = True

    def get(self, start: str, end: str) -> str:
        return self.content

    def edit_modified(self, flag: Optional[bool] = None):
        if flag is None:
            return self.modified
        self.modified = flag
        return None


class _WindowRecorder:
    def __init__(self) -> None:
        self.current: Optional[str] = None
        self.titles: Dict[str, str] = {}
        self.messages: List[str] = []

    def current_doc_id(self) -> Optional[str]:
        return self.current

    def set_tab_title(self, doc_id: str, title: str) -> None:
        self.titles[doc_id] = title

    def set_status_message(self, message: str) -> None:
        self.messages.append(message)


def _app_for_tests() -> App:
    app = App.__new__(App)
    app._log = logging.getLogger("test.app")
    app.win = _WindowRecorder()
    app.workspace = TkWorkspace(ask_save_as=lambda **_: "", on_renamed=app._on_document_renamed)
    return app


def test_save_untitled_tab_renames_after_write(tmp_path, monkeypatch):
    app = _app_for_tests()
    handle = app.workspace.open_document(_Text("draft"), None)
    app.win.current = handle.doc_id
    target = tmp_path / "draft.txt"
    monkeypatch.setattr(app_main.filedialog, "asksaveasfilename", lambda **_: str(target))

    app._on_save()

    assert target.read_text(encoding="utf-8") == "draft"
    assert app.workspace.document(handle.doc_id).path == str(target)
    assert app.win.titles[handle.doc_id] == "draft.txt"
    assert app.win.messages[-1] == f"Saved {target}."


def test_failed_write_leaves_untitled_tab_untouched(tmp_path, monkeypatch):
    app = _app_for_tests()
    handle = app.workspace.open_document(_Text("draft"), None)
    app.win.current = handle.doc_id
    # a directory cannot be opened for writing
    monkeypatch.setattr(app_main.filedialog, "asksaveasfilename", lambda **_: str(tmp_path))

    app._on_save()

    assert app.workspace.document(handle.doc_id).path is None
    assert app.win.titles == {}
    assert app.win.messages[-1].startswith("Could not save")


def test_dismissed_save_as_does_nothing(monkeypatch):
    app = _app_for_tests()
    handle = app.workspace.open_document(_Text("draft"), None)
    app.win.current = handle.doc_id
    monkeypatch.setattr(app_main.filedialog, "asksaveasfilename", lambda **_: "")

    app._on_save()

    assert app.workspace.document(handle.doc_id).path is None
    assert app.win.messages == []
