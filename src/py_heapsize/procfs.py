"""Reading maps listings from the proc filesystem.

On Linux every process has a ``/proc/<pid>/maps`` file, generated by
the kernel on each read, listing the process's memory mappings.
``/proc/self`` is an alias for whichever process opens it::

    /proc/
    ├── [pid]/
    │   └── maps     — Memory mappings of that process
    └── self/
        └── maps     — Memory mappings of the reader

This module only fetches the text.  Errors from the read (no such
process, permission denied) are raised as the ``OSError`` the
filesystem produced, unchanged.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from py_heapsize.config import DEFAULT_PROC_ROOT

if TYPE_CHECKING:
    from py_heapsize.config import HeapSizeConfig

_SELF = "self"
_MAPS = "maps"


class ProcFilesystem:
    """Access to per-process maps files under a proc mount point."""

    def __init__(self, root: Path = DEFAULT_PROC_ROOT) -> None:
        """Create a reader rooted at *root* (``/proc`` by default)."""
        self._root = Path(root)

    @classmethod
    def from_config(cls, config: HeapSizeConfig) -> ProcFilesystem:
        """Create a reader for the configured proc root."""
        return cls(config.proc_root)

    @property
    def root(self) -> Path:
        """Return the proc mount point."""
        return self._root

    def maps_path(self, pid: int | None = None) -> Path:
        """Return the maps file path for *pid*, or for the caller if ``None``.

        Raises:
            ValueError: If *pid* is negative.

        """
        if pid is None:
            return self._root / _SELF / _MAPS
        if pid < 0:
            msg = f"Invalid pid: {pid}"
            raise ValueError(msg)
        return self._root / str(pid) / _MAPS

    def read_maps(self, pid: int | None = None) -> str:
        """Return the maps listing text for *pid*.

        Args:
            pid: Process id to read, or ``None`` for the calling process.

        Returns:
            The full listing, one mapping per line.

        Raises:
            OSError: Whatever the read raised, e.g. ``FileNotFoundError``
                when the process does not exist.

        """
        return self.maps_path(pid).read_text(encoding="utf-8", errors="replace")
