"""Application composition layer for the tkinter host.

Controllers in this package wire views, view models, adapters, and use cases
into the save-on-focus-lost workflow without placing save logic in views.
"""
