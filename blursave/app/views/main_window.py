"""
EditorWindowView
----------------
Tkinter main window of the bundled demo editor. This file contains **only
View code**: no file I/O, no save logic. It exposes callback hooks that the
application layer connects to adapters and the plugin.

The window provides:
  * Menu bar with a File menu (plugins may append items)
  * Notebook with one ``Text`` tab per open document
  * StatusBar at the bottom
"""
from __future__ import annotations
import tkinter as tk
from tkinter import ttk
from typing import Callable, Dict, Optional


class EditorWindowView(tk.Tk):
    """Top-level editor window.

    UI-only. Document tabs are created on request and identified by the
    host document id so the application layer can retitle or close them.
    """

    # ---- Callback type aliases ----
    OnVoid = Optional[Callable[[], None]]

    def __init__(
        self,
        *,
        on_new: OnVoid = None,
        on_open: OnVoid = None,
        on_save: OnVoid = None,
        on_quit: OnVoid = None,
    ) -> None:
        super().__init__()

        self.title("blursave editor")
        self.geometry("900x600")
        self.minsize(480, 320)

        self._on_new = on_new
        self._on_open = on_open
        self._on_save = on_save
        self._on_quit = on_quit
        self._tabs: Dict[str, tk.Text] = {}

        self.rowconfigure(0, weight=1)
        self.columnconfigure(0, weight=1)

        self._build_menu()
        self._build_notebook()
        self._build_statusbar()

        self.bind("<Control-n>", lambda e: self._on_new and self._on_new())
        self.bind("<Control-o>", lambda e: self._on_open and self._on_open())
        self.bind("<Control-s>", lambda e: self._on_save and self._on_save())
        self.protocol("WM_DELETE_WINDOW", lambda: self._on_quit() if self._on_quit else self.destroy())

    # ------------------------------------------------------------------
    # Menu
    # ------------------------------------------------------------------
    def _build_menu(self) -> None:
        menubar = tk.Menu(self)
        self.file_menu = tk.Menu(menubar, tearoff=False)
        self.file_menu.add_command(label="New", accelerator="Ctrl+N", command=lambda: self._on_new and self._on_new())
        self.file_menu.add_command(label="Open…", accelerator="Ctrl+O", command=lambda: self._on_open and self._on_open())
        self.file_menu.add_command(label="Save", accelerator="Ctrl+S", command=lambda: self._on_save and self._on_save())
        self.file_menu.add_separator()
        self.file_menu.add_command(label="Quit", command=lambda: self._on_quit() if self._on_quit else self.destroy())
        self.file_menu.add_separator()
        menubar.add_cascade(label="File", menu=self.file_menu)
        self.config(menu=menubar)

    # ------------------------------------------------------------------
    # Notebook
    # ------------------------------------------------------------------
    def _build_notebook(self) -> None:
        self.notebook = ttk.Notebook(self)
        self.notebook.grid(row=0, column=0, sticky="nsew", padx=4, pady=(4, 0))

    def add_document_tab(self, title: str) -> tk.Text:
        frame = ttk.Frame(self.notebook)
        frame.rowconfigure(0, weight=1)
        frame.columnconfigure(0, weight=1)
        text = tk.Text(frame, undo=True, wrap="none")
        text.grid(row=0, column=0, sticky="nsew")
        scroll = ttk.Scrollbar(frame, orient="vertical", command=text.yview)
        scroll.grid(row=0, column=1, sticky="ns")
        text.configure(yscrollcommand=scroll.set)
        self.notebook.add(frame, text=title)
        self.notebook.select(frame)
        text.focus_set()
        return text

    def register_tab(self, doc_id: str, text: tk.Text) -> None:
        self._tabs[doc_id] = text

    def set_tab_title(self, doc_id: str, title: str) -> None:
        text = self._tabs.get(doc_id)
        if text is None:
            return
        self.notebook.tab(text.master, text=title)

    def current_doc_id(self) -> Optional[str]:
        selected = self.notebook.select()
        for doc_id, text in self._tabs.items():
            if str(text.master) == selected:
                return doc_id
        return None

    # ------------------------------------------------------------------
    # Status bar
    # ------------------------------------------------------------------
    def _build_statusbar(self) -> None:
        self._status_var = tk.StringVar(value="")
        bar = ttk.Label(self, textvariable=self._status_var, anchor="w", relief="sunken")
        bar.grid(row=1, column=0, sticky="ew")

    def set_status_message(self, message: str) -> None:
        self._status_var.set(message)
