"""Sequential save of a working-set snapshot with partial-failure reporting.

Saves run one at a time. A save may open a modal prompt (Save As, an error
notice), and running them concurrently would stack those prompts. One failed
document does not stop the batch; a user cancellation does.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Callable, Iterable, List, Optional

from blursave.domain.entities import (
    BatchStatus,
    Cancelled,
    DocumentHandle,
    Failed,
    OrchestrationResult,
    SaveOutcome,
    Saved,
    Skipped,
)
from blursave.domain.errors import SaveIOError, UserCancelled
from blursave.domain.ports import SaveFn
from blursave.usecases.error_mapping import map_save_error

UntitledCheck = Callable[[DocumentHandle], bool]


def _handle_is_untitled(handle: DocumentHandle) -> bool:
    return handle.is_untitled


@dataclass
class SaveAllDocuments:
    """Use-case saving documents strictly in order, one save in flight at a time."""

    save_fn: SaveFn
    is_untitled: UntitledCheck = _handle_is_untitled
    _log: logging.Logger = field(
        default_factory=lambda: logging.getLogger(__name__), init=False, repr=False
    )

    async def save_one(self, document: DocumentHandle) -> SaveOutcome:
        """Save a single document and classify what happened."""
        if self.is_untitled(document):
            self._log.debug("Skipping untitled document %s", document.name)
            return Skipped(document)
        try:
            updated = await self.save_fn(document)
        except Exception as exc:
            err = map_save_error(exc, handle=document)
            if isinstance(err, UserCancelled):
                self._log.info("Save of %s cancelled by user", document)
                return Cancelled()
            self._log.warning("Save of %s failed: %s", document, err.details)
            return Failed(err)
        saved = updated if updated is not None else document
        if saved.path != document.path:
            self._log.debug("Document %s now saved as %s", document.doc_id, saved.path)
        else:
            self._log.debug("Saved %s", saved)
        return Saved(saved)

    async def __call__(self, documents: Iterable[DocumentHandle]) -> OrchestrationResult:
        cancelled = False
        results: List[DocumentHandle] = []
        first_error: Optional[SaveIOError] = None
        saved = skipped = failed = 0

        for document in list(documents):
            if cancelled:
                break
            outcome = await self.save_one(document)
            if isinstance(outcome, Saved):
                results.append(outcome.handle)
                saved += 1
            elif isinstance(outcome, Skipped):
                results.append(outcome.handle)
                skipped += 1
            elif isinstance(outcome, Cancelled):
                cancelled = True
            else:
                failed += 1
                if first_error is None:
                    first_error = outcome.error

        if cancelled:
            status = BatchStatus.CANCELLED_BY_USER
        elif first_error is not None:
            status = BatchStatus.COMPLETED_WITH_ERRORS
        else:
            status = BatchStatus.COMPLETED

        result = OrchestrationResult(
            status=status,
            handles=tuple(results),
            first_error=first_error,
            saved=saved,
            skipped=skipped,
            failed=failed,
        )
        self._log.info("Save pass finished (%s): %s", status.value, result.summary())
        return result


async def save_all(
    documents: Iterable[DocumentHandle],
    save_fn: SaveFn,
    *,
    is_untitled: UntitledCheck = _handle_is_untitled,
) -> OrchestrationResult:
    """Functional shortcut for ``SaveAllDocuments(save_fn, is_untitled)(documents)``."""
    return await SaveAllDocuments(save_fn, is_untitled)(documents)


__all__ = ["SaveAllDocuments", "save_all"]
