"""Controller that runs a save pass whenever the editor window loses focus.

The controller owns the one piece of state that must survive between blur
events: whether a pass is currently running. Blur events that arrive while a
pass is active (a Save As dialog steals focus, for example) are dropped.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Awaitable, Callable, Optional

from blursave.domain.entities import OrchestrationResult
from blursave.domain.ports import WorkspacePort
from blursave.usecases.save_all_documents import SaveAllDocuments
from blursave.viewmodels.settings_vm import AutosaveSettingsVM

PassRunner = Callable[[Awaitable[OrchestrationResult]], Any]
ResultHook = Callable[[OrchestrationResult], None]


def _noop_result(_: OrchestrationResult) -> None:
    """Default no-op result hook."""


class BlurSaveController:
    """Wire focus-loss events to ``SaveAllDocuments`` honoring the enabled toggle."""

    def __init__(
        self,
        *,
        workspace: WorkspacePort,
        settings_vm: AutosaveSettingsVM,
        run_pass: Optional[PassRunner] = None,
        on_result: Optional[ResultHook] = None,
    ) -> None:
        """Store collaborators for blur-triggered saves.

        Args:
            workspace: Host port listing and saving open documents.
            settings_vm: Owner of the enabled toggle, read on every blur.
            run_pass: Drives the save coroutine to completion. Defaults to
                ``asyncio.run``; an integration with a running loop can pass
                a scheduler instead.
            on_result: Receives the aggregate result of each finished pass.
        """
        self._log = logging.getLogger(__name__)
        self.workspace = workspace
        self.settings_vm = settings_vm
        self._run_pass = run_pass or asyncio.run
        self._on_result = on_result or _noop_result
        self._busy = False
        self.last_result: Optional[OrchestrationResult] = None

    @property
    def busy(self) -> bool:
        return self._busy

    def on_blur(self, _event: Any = None) -> Any:
        """Focus-loss entry point.

        Returns whatever ``run_pass`` returns: the ``OrchestrationResult`` with the
        default ``asyncio.run``, a ``Task`` with ``loop.create_task``. ``None`` when
        the toggle is off or a pass is already running.
        """
        if not self.settings_vm.enabled:
            self._log.debug("Focus lost; save on focus lost is disabled")
            return None
        if self._busy:
            self._log.debug("Focus lost during an active save pass; ignoring")
            return None

        snapshot = self.workspace.list_open_documents()
        self._log.debug("Focus lost; saving %d open document(s)", len(snapshot))
        self._busy = True
        try:
            return self._run_pass(self._save_snapshot(snapshot))
        except BaseException:
            self._busy = False
            raise

    async def _save_snapshot(self, snapshot) -> OrchestrationResult:
        uc = SaveAllDocuments(
            save_fn=self.workspace.save,
            is_untitled=self.workspace.is_untitled,
        )
        try:
            result = await uc(snapshot)
        finally:
            # released when the pass settles, also when run_pass only schedules it
            self._busy = False
        self._apply_renames(snapshot, result)
        self.last_result = result
        self._on_result(result)
        return result

    def _apply_renames(self, snapshot, result: OrchestrationResult) -> None:
        before = {doc.doc_id: doc for doc in snapshot}
        for handle in result.handles:
            old = before.get(handle.doc_id)
            if old is not None and (old.path != handle.path or old.name != handle.name):
                self.workspace.apply_saved(old, handle)


__all__ = ["BlurSaveController"]
