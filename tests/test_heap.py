"""Tests for the read_heap_size entry point.

``read_heap_size`` fetches a maps listing and sums its heap-like
mappings.  Read failures must reach the caller as the original
``OSError`` subclass, after being recorded in the audit log.
"""

from pathlib import Path

import pytest

from py_heapsize import read_heap_size
from py_heapsize.logging import Logger, LogLevel
from py_heapsize.procfs import ProcFilesystem

SELF_MAPS = """\
5650a3a00000-5650a3a01000 r-xp 00000000 fd:01 23470129                   /usr/bin/java
5650a4d0a000-5650a4d2b000 rw-p 00000000 00:00 0                          [heap]
7ff6acdf0000-7ff6acdf4000 ---p 00000000 00:00 0
7ff6acdf4000-7ff6acff1000 rw-p 00000000 00:00 0
"""
SELF_HEAP_BYTES = 0x21000 + 0x4000 + 0x1FD000

PID_MAPS = """\
10000000-10100000 rw-p 00000000 00:00 0
7ff6b7bff000-7ff6b7c00000 rw-p 00037000 fd:01 23470072   /usr/lib/libjavajpeg.so
20000000-20040000 rw-p 00000000 00:00 0
"""
PID = 4321


class _DeniedProcFilesystem(ProcFilesystem):
    """A proc reader whose every read is refused."""

    def read_maps(self, pid: int | None = None) -> str:
        msg = f"Permission denied: '{self.maps_path(pid)}'"
        raise PermissionError(msg)


@pytest.fixture
def procfs(tmp_path: Path) -> ProcFilesystem:
    """Return a reader over a fake proc tree with ``self`` and PID."""
    (tmp_path / "self").mkdir()
    (tmp_path / "self" / "maps").write_text(SELF_MAPS)
    (tmp_path / str(PID)).mkdir()
    (tmp_path / str(PID) / "maps").write_text(PID_MAPS)
    return ProcFilesystem(tmp_path)


class TestReadHeapSize:
    """Verify totals for self and other processes."""

    def test_self(self, procfs: ProcFilesystem) -> None:
        """No pid reads the calling process's listing."""
        assert read_heap_size(procfs=procfs) == SELF_HEAP_BYTES

    def test_pid(self, procfs: ProcFilesystem) -> None:
        """A pid reads that process's listing."""
        assert read_heap_size(PID, procfs=procfs) == 0x140000

    def test_empty_listing_is_zero(self, tmp_path: Path) -> None:
        """An empty maps file is valid and totals zero."""
        (tmp_path / "7").mkdir()
        (tmp_path / "7" / "maps").write_text("")
        assert read_heap_size(7, procfs=ProcFilesystem(tmp_path)) == 0

    def test_real_process(self) -> None:
        """The running interpreter has some anonymous memory."""
        if not ProcFilesystem().maps_path().exists():
            pytest.skip("no /proc filesystem on this platform")
        assert read_heap_size() > 0


class TestReadHeapSizeErrors:
    """I/O failures propagate unchanged."""

    def test_missing_process(self, procfs: ProcFilesystem) -> None:
        """An unknown pid raises FileNotFoundError."""
        with pytest.raises(FileNotFoundError):
            read_heap_size(99999, procfs=procfs)

    def test_permission_denied(self, tmp_path: Path) -> None:
        """A refused read raises PermissionError."""
        with pytest.raises(PermissionError, match="Permission denied"):
            read_heap_size(1, procfs=_DeniedProcFilesystem(tmp_path))

    def test_other_read_error(self, tmp_path: Path) -> None:
        """Other OSErrors (here: maps is a directory) also propagate."""
        (tmp_path / "5" / "maps").mkdir(parents=True)
        with pytest.raises(OSError):  # noqa: PT011
            read_heap_size(5, procfs=ProcFilesystem(tmp_path))


class TestReadHeapSizeLogging:
    """Verify the audit trail left by a probe."""

    def test_success_logs_info(self, procfs: ProcFilesystem) -> None:
        """A successful probe logs the read and the total."""
        logger = Logger()
        read_heap_size(PID, procfs=procfs, logger=logger)
        entries = logger.filter(source="heap")
        assert len(entries) == 2
        assert all(e.level is LogLevel.INFO for e in entries)
        assert all(e.pid == PID for e in entries)
        assert str(0x140000) in entries[-1].message

    def test_failure_logs_error(self, procfs: ProcFilesystem) -> None:
        """A failed read is logged at ERROR before being re-raised."""
        logger = Logger()
        with pytest.raises(FileNotFoundError):
            read_heap_size(99999, procfs=procfs, logger=logger)
        errors = logger.filter(min_level=LogLevel.ERROR)
        assert len(errors) == 1
        assert "99999" in errors[0].message

    def test_self_entries_have_no_pid(self, procfs: ProcFilesystem) -> None:
        """Probes of the calling process log pid None."""
        logger = Logger()
        read_heap_size(procfs=procfs, logger=logger)
        assert {e.pid for e in logger.entries} == {None}
