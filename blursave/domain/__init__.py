"""Domain package exports for documents, outcomes, and errors."""

from .entities import (
    BatchStatus,
    Cancelled,
    DocumentHandle,
    Failed,
    OrchestrationResult,
    SaveOutcome,
    Saved,
    Skipped,
)
from .errors import SaveError, SaveIOError, UserCancelled

__all__ = [
    "BatchStatus",
    "Cancelled",
    "DocumentHandle",
    "Failed",
    "OrchestrationResult",
    "SaveError",
    "SaveIOError",
    "SaveOutcome",
    "Saved",
    "Skipped",
    "UserCancelled",
]
