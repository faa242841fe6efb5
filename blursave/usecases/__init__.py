"""Use-case layer for save workflows.

Each module coordinates domain objects and ports without touching the host
UI or the filesystem directly.
"""
