"""Adapter package for host and persistence implementations.

Purpose:
    Collect concrete implementations for domain ports (preference storage,
    tkinter documents, and an in-memory workspace) used by use cases.

Dependencies:
    Individual submodules depend on ``json``, ``tkinter`` and the domain
    protocol definitions.

Call context:
    Imported by app composition modules (for runtime wiring) and by tests (for
    fakes and host-level behavior verification).
"""
