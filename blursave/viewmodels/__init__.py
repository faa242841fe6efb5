"""View-models holding plugin UI state without performing host I/O."""
