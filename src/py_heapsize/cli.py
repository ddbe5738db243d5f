"""Command-line interface: ``py-heapsize [PID]``.

Prints the heap-like footprint of a process (or of itself when no pid
is given).  The formatting helpers are pure and testable; ``main`` is
the thin I/O wrapper around them.
"""

import argparse
import sys
from collections.abc import Sequence
from pathlib import Path

from py_heapsize.config import ConfigError, HeapSizeConfig
from py_heapsize.heap import read_heap_size
from py_heapsize.logging import Logger
from py_heapsize.procfs import ProcFilesystem

_PROG = "py-heapsize"
_UNITS = ("B", "KiB", "MiB", "GiB", "TiB")
_UNIT_STEP = 1024

EXIT_OK = 0
EXIT_FAILURE = 1


def format_size(num_bytes: int) -> str:
    """Format a byte count with binary units, e.g. ``1.25 MiB``.

    Plain bytes are shown without decimals.
    """
    if num_bytes < _UNIT_STEP:
        return f"{num_bytes} B"
    value = float(num_bytes)
    unit = _UNITS[0]
    for unit in _UNITS[1:]:
        value /= _UNIT_STEP
        if value < _UNIT_STEP:
            break
    return f"{value:.2f} {unit}"


def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser."""
    parser = argparse.ArgumentParser(
        prog=_PROG,
        description="Sum the anonymous, zero-offset memory mappings of a process.",
    )
    parser.add_argument(
        "pid",
        nargs="?",
        type=int,
        default=None,
        help="process id to inspect (default: this process)",
    )
    parser.add_argument(
        "--bytes",
        action="store_true",
        help="print the raw byte count instead of a human-readable size",
    )
    parser.add_argument(
        "--proc-root",
        type=Path,
        default=None,
        help="proc filesystem mount point (default: $PY_HEAPSIZE_PROC_ROOT or /proc)",
    )
    parser.add_argument(
        "-v",
        "--verbose",
        action="store_true",
        help="echo the probe log to stderr",
    )
    return parser


def main(argv: Sequence[str] | None = None) -> int:
    """Run the command and return its exit status.

    This is the ``py-heapsize`` console entry point.
    """
    args = build_parser().parse_args(argv)

    if args.proc_root is not None:
        config = HeapSizeConfig(proc_root=args.proc_root)
    else:
        try:
            config = HeapSizeConfig.from_environ()
        except ConfigError as exc:
            print(f"{_PROG}: {exc}", file=sys.stderr)  # noqa: T201
            return EXIT_FAILURE

    logger = Logger()
    status = EXIT_OK
    try:
        total = read_heap_size(
            args.pid,
            procfs=ProcFilesystem.from_config(config),
            logger=logger,
        )
    except (OSError, ValueError) as exc:
        print(f"{_PROG}: {exc}", file=sys.stderr)  # noqa: T201
        status = EXIT_FAILURE
    else:
        print(total if args.bytes else format_size(total))  # noqa: T201

    if args.verbose:
        for entry in logger.entries:
            print(entry, file=sys.stderr)  # noqa: T201
    return status


if __name__ == "__main__":
    sys.exit(main())
