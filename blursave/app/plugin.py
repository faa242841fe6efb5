"""Attach save-on-focus-lost to a tkinter editor window.

``register_plugin`` is the single entry point a host calls. It loads the
persisted toggle, adds a checkable File menu item with a keyboard accelerator,
and installs window-level blur detection that drives ``BlurSaveController``.
"""

from __future__ import annotations

import logging
import tkinter as tk
from dataclasses import dataclass
from typing import Any, Callable, List, Optional, Tuple

from blursave.app.blur_controller import BlurSaveController, PassRunner, ResultHook
from blursave.domain.ports import PreferenceStore, WorkspacePort
from blursave.viewmodels.settings_vm import AutosaveSettingsVM

MENU_LABEL = "Save on Focus Lost"
ACCELERATOR_LABEL = "Ctrl+Alt+S"
ACCELERATOR_SEQUENCES: Tuple[str, ...] = ("<Control-Alt-s>", "<Control-Alt-S>")

VariableFactory = Callable[..., Any]


def unbind_handler(widget: Any, sequence: str, funcid: str) -> None:
    """Remove one handler added with ``bind(sequence, func, add="+")``.

    Before Python 3.13 ``Misc.unbind(sequence, funcid)`` clears every handler
    bound to ``sequence`` on the widget, including the host's own. Only the
    script line that calls ``funcid`` is dropped here.
    """
    prefix = f'if {{"[{funcid} '
    script = widget.bind(sequence) or ""
    keep = "\n".join(
        line for line in script.split("\n") if line.strip() and not line.startswith(prefix)
    )
    widget.bind(sequence, keep)
    widget.deletecommand(funcid)


class FocusLossDetector:
    """Turn tkinter ``<FocusOut>`` events into application-level blur callbacks.

    ``<FocusOut>`` also fires when focus moves between widgets of the same
    window. The check is deferred with ``after_idle`` so focus has settled;
    the application counts as blurred only when no widget holds focus.
    """

    def __init__(self, window: Any, on_blur: Callable[[], Any]) -> None:
        self._log = logging.getLogger(__name__)
        self.window = window
        self._on_blur = on_blur
        self._bind_id: Optional[str] = None
        self._pending: Optional[str] = None

    def install(self) -> None:
        if self._bind_id is None:
            self._bind_id = self.window.bind("<FocusOut>", self._on_focus_out, add="+")

    def uninstall(self) -> None:
        if self._bind_id is not None:
            unbind_handler(self.window, "<FocusOut>", self._bind_id)
            self._bind_id = None
        if self._pending is not None:
            try:
                self.window.after_cancel(self._pending)
            except tk.TclError:
                pass
            self._pending = None

    def _on_focus_out(self, _event: Any = None) -> None:
        if self._pending is None:
            self._pending = self.window.after_idle(self._check_focus)

    def _check_focus(self) -> None:
        self._pending = None
        if self._app_has_focus():
            return
        self._on_blur()

    def _app_has_focus(self) -> bool:
        try:
            return self.window.focus_get() is not None
        except (KeyError, tk.TclError):
            # focus_get() fails on some transient popups (ttk combobox); treat as focused
            self._log.debug("focus_get() failed; assuming focus stayed in the app")
            return True


@dataclass
class BlurSavePlugin:
    """Handle returned by ``register_plugin``."""

    window: Any
    settings_vm: AutosaveSettingsVM
    controller: BlurSaveController
    detector: FocusLossDetector
    variable: Any
    menu: Any = None
    menu_index: Optional[int] = None
    accelerator_binds: Optional[List[Tuple[str, str]]] = None

    def toggle(self, _event: Any = None) -> str:
        self.settings_vm.toggle()
        return "break"

    def unregister(self) -> None:
        self.detector.uninstall()
        for sequence, bind_id in self.accelerator_binds or []:
            unbind_handler(self.window, sequence, bind_id)
        self.accelerator_binds = None
        if self.menu is not None and self.menu_index is not None:
            self.menu.delete(self.menu_index)
            self.menu_index = None


def register_plugin(
    window: Any,
    workspace: WorkspacePort,
    store: PreferenceStore,
    *,
    menu: Any = None,
    run_pass: Optional[PassRunner] = None,
    on_result: Optional[ResultHook] = None,
    variable_factory: Optional[VariableFactory] = None,
) -> BlurSavePlugin:
    """Wire save-on-focus-lost into ``window``.

    Args:
        window: Tk root (or any widget with ``bind``/``after_idle``/``focus_get``).
        workspace: Host port for open documents and saving.
        store: Preference store holding the enabled toggle.
        menu: Menu receiving the checkable toggle item; skipped when ``None``.
        run_pass: Passed through to ``BlurSaveController``.
        on_result: Receives each pass result (status bar, toast).
        variable_factory: Builds the menu check variable, ``tk.BooleanVar`` by default.

    Unreadable preferences are logged and the toggle keeps its default (enabled).
    """
    log = logging.getLogger(__name__)
    settings_vm = AutosaveSettingsVM(store)
    settings_vm.load()

    controller = BlurSaveController(
        workspace=workspace,
        settings_vm=settings_vm,
        run_pass=run_pass,
        on_result=on_result,
    )
    detector = FocusLossDetector(window, controller.on_blur)
    detector.install()

    factory = variable_factory or tk.BooleanVar
    variable = factory(master=window, value=settings_vm.enabled)
    plugin = BlurSavePlugin(
        window=window,
        settings_vm=settings_vm,
        controller=controller,
        detector=detector,
        variable=variable,
    )
    settings_vm.add_listener(variable.set)

    if menu is not None:
        menu.add_checkbutton(
            label=MENU_LABEL,
            variable=variable,
            onvalue=True,
            offvalue=False,
            accelerator=ACCELERATOR_LABEL,
            command=lambda: settings_vm.set_enabled(variable.get()),
        )
        plugin.menu = menu
        plugin.menu_index = menu.index("end")

    plugin.accelerator_binds = [
        (sequence, window.bind(sequence, plugin.toggle, add="+"))
        for sequence in ACCELERATOR_SEQUENCES
    ]
    log.info(
        "Save on focus lost registered (%s)",
        "enabled" if settings_vm.enabled else "disabled",
    )
    return plugin


__all__ = [
    "ACCELERATOR_LABEL",
    "BlurSavePlugin",
    "FocusLossDetector",
    "MENU_LABEL",
    "register_plugin",
    "unbind_handler",
]
