from __future__ import annotations

import asyncio
from typing import Any, Dict, List

import pytest

from blursave.app.blur_controller import BlurSaveController
from blursave.domain.entities import BatchStatus, DocumentHandle, OrchestrationResult
from blursave.domain.errors import UserCancelled
from blursave.viewmodels.settings_vm import AutosaveSettingsVM

CANCEL = "cancel"
FAIL = "fail"


class _WorkspaceSpy:
    """Open documents with scripted save behaviour: ok, cancel, fail or rename:<path>."""

    def __init__(self) -> None:
        self.documents: List[DocumentHandle] = []
        self.behaviour: Dict[str, str] = {}
        self.save_calls: List[DocumentHandle] = []

    def open(self, handle: DocumentHandle, behaviour: str = "ok") -> None:
        self.documents.append(handle)
        self.behaviour[handle.doc_id] = behaviour

    def list_open_documents(self) -> List[DocumentHandle]:
        return list(self.documents)

    def is_untitled(self, handle: DocumentHandle) -> bool:
        return handle.is_untitled

    async def save(self, handle: DocumentHandle) -> DocumentHandle:
        self.save_calls.append(handle)
        behaviour = self.behaviour.get(handle.doc_id, "ok")
        if behaviour == CANCEL:
            raise UserCancelled()
        if behaviour == FAIL:
            raise OSError(f"cannot write {handle.path}")
        if behaviour.startswith("rename:"):
            return handle.with_path(behaviour[len("rename:"):])
        return handle

    def apply_saved(self, old: DocumentHandle, new: DocumentHandle) -> None:
        self.documents = [new if d.doc_id == old.doc_id else d for d in self.documents]


class _DictStore:
    def __init__(self) -> None:
        self.data: Dict[str, Any] = {}

    def get(self, key: str, default: Any = None) -> Any:
        return self.data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self.data[key] = value


def _controller(workspace: _WorkspaceSpy, **kwargs) -> BlurSaveController:
    vm = AutosaveSettingsVM(_DictStore())
    vm.load()
    return BlurSaveController(workspace=workspace, settings_vm=vm, **kwargs)


def _doc(doc_id: str, path: str | None = None) -> DocumentHandle:
    return DocumentHandle(doc_id=doc_id, path=path)


def test_blur_saves_open_documents():
    ws = _WorkspaceSpy()
    ws.open(_doc("a", "/w/a.txt"))
    ws.open(_doc("u"))
    results: List[OrchestrationResult] = []
    ctrl = _controller(ws, on_result=results.append)

    result = ctrl.on_blur()

    assert result is not None
    assert result.status is BatchStatus.COMPLETED
    assert [h.doc_id for h in ws.save_calls] == ["a"]
    assert results == [result]
    assert ctrl.last_result is result
    assert ctrl.busy is False


def test_disabling_toggle_stops_next_blur_and_reenabling_restores_it():
    ws = _WorkspaceSpy()
    ws.open(_doc("a", "/w/a.txt"))
    ctrl = _controller(ws)

    ctrl.settings_vm.set_enabled(False)
    assert ctrl.on_blur() is None
    assert ws.save_calls == []

    ctrl.settings_vm.set_enabled(True)
    ctrl.on_blur()
    assert [h.doc_id for h in ws.save_calls] == ["a"]


def test_rename_during_save_is_applied_to_the_workspace():
    ws = _WorkspaceSpy()
    ws.open(_doc("a", "/w/a.txt"), behaviour="rename:/w/renamed.txt")
    ctrl = _controller(ws)

    ctrl.on_blur()

    assert ws.list_open_documents()[0].path == "/w/renamed.txt"
    assert ws.list_open_documents()[0].name == "renamed.txt"


def test_cancellation_and_failure_are_reported():
    ws = _WorkspaceSpy()
    ws.open(_doc("a", "/w/a.txt"), behaviour=FAIL)
    ws.open(_doc("b", "/w/b.txt"), behaviour=CANCEL)
    ws.open(_doc("c", "/w/c.txt"))
    ctrl = _controller(ws)

    result = ctrl.on_blur()

    assert result.status is BatchStatus.CANCELLED_BY_USER
    assert [h.doc_id for h in ws.save_calls] == ["a", "b"]
    assert result.failed == 1


def test_blur_during_active_pass_is_dropped():
    ws = _WorkspaceSpy()
    ws.open(_doc("a", "/w/a.txt"))
    nested: List[Any] = []
    ctrl: BlurSaveController

    def run_pass(coro):
        # a modal prompt inside the pass would fire another blur
        nested.append(ctrl.on_blur())
        return asyncio.run(coro)

    ctrl = _controller(ws, run_pass=run_pass)

    result = ctrl.on_blur()

    assert nested == [None]
    assert result.status is BatchStatus.COMPLETED
    assert len(ws.save_calls) == 1
    assert ctrl.busy is False


def test_busy_flag_released_when_runner_fails():
    ws = _WorkspaceSpy()

    def broken_runner(coro):
        coro.close()
        raise RuntimeError("loop unavailable")

    ctrl = _controller(ws, run_pass=broken_runner)

    with pytest.raises(RuntimeError):
        ctrl.on_blur()
    assert ctrl.busy is False


@pytest.mark.asyncio
async def test_scheduled_pass_holds_busy_until_it_settles():
    ws = _WorkspaceSpy()
    ws.open(_doc("a", "/w/a.txt"))
    loop = asyncio.get_running_loop()
    ctrl = _controller(ws, run_pass=loop.create_task)

    task = ctrl.on_blur()
    assert ctrl.busy is True
    assert ctrl.on_blur() is None

    result = await task
    assert result.status is BatchStatus.COMPLETED
    assert ctrl.busy is False
