"""Translate exceptions raised by host save commands into save errors."""

from __future__ import annotations

import errno
from typing import Optional

from blursave.domain.entities import DocumentHandle
from blursave.domain.errors import SaveError, SaveIOError, UserCancelled

_ERRNO_HINTS = {
    errno.EACCES: "permission denied",
    errno.EPERM: "operation not permitted",
    errno.ENOENT: "location no longer exists",
    errno.ENOSPC: "disk full",
    errno.EROFS: "read-only file system",
}


def map_save_error(exc: BaseException, *, handle: Optional[DocumentHandle] = None) -> SaveError:
    """Map an arbitrary save failure to ``UserCancelled`` or ``SaveIOError``.

    ``UserCancelled`` passes through untouched so callers can check it by type.
    An existing ``SaveIOError`` is kept as is; other ``SaveError`` subclasses and
    plain exceptions are wrapped with a short, user-facing detail string.
    """
    if isinstance(exc, (UserCancelled, SaveIOError)):
        return exc
    if isinstance(exc, SaveError):
        return SaveIOError(exc.message, handle=handle, cause=exc)
    if isinstance(exc, OSError):
        return SaveIOError(_describe_os_error(exc), handle=handle, cause=exc)
    details = str(exc).strip() or exc.__class__.__name__
    return SaveIOError(details, handle=handle, cause=exc)


def _describe_os_error(exc: OSError) -> str:
    hint = _ERRNO_HINTS.get(exc.errno or 0)
    reason = hint or (exc.strerror or "").strip() or str(exc) or "I/O error"
    if exc.filename:
        return f"{reason} ({exc.filename})"
    return reason


__all__ = ["map_save_error"]
