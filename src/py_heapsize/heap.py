"""Heap-size probe for a running process.

``read_heap_size`` ties the pieces together: fetch the maps listing
from the proc filesystem, then sum its anonymous mappings.  A failed
read is logged and re-raised untouched, so callers can tell a missing
process (``FileNotFoundError``) from a forbidden one
(``PermissionError``).
"""

from __future__ import annotations

from py_heapsize.logging import Logger, LogLevel
from py_heapsize.maps import sum_heap_lines
from py_heapsize.procfs import ProcFilesystem

_SOURCE = "heap"


def _describe(pid: int | None) -> str:
    return "self" if pid is None else f"pid {pid}"


def read_heap_size(
    pid: int | None = None,
    *,
    procfs: ProcFilesystem | None = None,
    logger: Logger | None = None,
) -> int:
    """Return the total size in bytes of a process's heap-like mappings.

    Args:
        pid: Process to probe, or ``None`` for the calling process.
        procfs: Where to read maps listings from (``/proc`` by default).
        logger: Optional audit log that receives one entry per probe.

    Returns:
        The summed size of all anonymous, zero-offset mappings.

    Raises:
        OSError: If the maps listing cannot be read.

    """
    reader = procfs if procfs is not None else ProcFilesystem()
    path = reader.maps_path(pid)
    try:
        listing = reader.read_maps(pid)
    except OSError as exc:
        if logger is not None:
            logger.log(LogLevel.ERROR, f"cannot read {path}: {exc}", source=_SOURCE, pid=pid)
        raise

    total = sum_heap_lines(listing)
    if logger is not None:
        logger.log(
            LogLevel.INFO,
            f"read {len(listing)} chars from {path}",
            source=_SOURCE,
            pid=pid,
        )
        logger.log(
            LogLevel.INFO,
            f"{_describe(pid)}: {total} bytes in heap-like mappings",
            source=_SOURCE,
            pid=pid,
        )
    return total
