"""Heap-like region recognition for ``/proc/<pid>/maps`` listings.

Every line of a maps listing describes one virtual memory mapping::

    address           perms offset  dev   inode      pathname
    7ff6ad5f8000-7ff6ad7f5000 rw-p 00000000 00:00 0
    7ff6b79c8000-7ff6b79fe000 r-xp 00000000 fd:01 23470072   /usr/lib/libjpeg.so

A mapping with a zero offset, no device (``00:00``) and no inode (``0``)
has no file behind it: it is *anonymous*.  Allocators get their memory
from exactly these mappings, so summing them gives an approximate heap
footprint without attaching a debugger.

Two layers:

- **recognize_heap** — scan one line, returning its range or ``None``.
- **sum_heap_lines** — recognize every line of a listing and add up
  the sizes of the accepted ranges.

The recognizer never raises on bad input.  Malformed lines and
well-formed non-anonymous lines are both just "no match", and the
aggregator drops them silently.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from collections.abc import Iterator

# Addresses are parsed into a full 64-bit virtual address word.
MAX_ADDRESS = 2**64 - 1

_HEX_DIGITS: frozenset[str] = frozenset("0123456789abcdefABCDEF")
_WHITESPACE: frozenset[str] = frozenset(" \t\r\n")
_PERMISSION_CHARS: frozenset[str] = frozenset("rwpx-")

_ANON_OFFSET = "00000000"
_ANON_DEVICE = "00:00"
_ANON_INODE = "0"

# Only real line endings. The kernel escapes "\n" in pathnames but leaves
# other control characters (form feed, NEL, ...) in place.
_LINE_BREAK = re.compile(r"\r\n|\r|\n")


@dataclass(frozen=True)
class AddressRange:
    """A half-open ``[start, end)`` interval of virtual address space."""

    start: int
    end: int

    @property
    def size(self) -> int:
        """Return the number of bytes the range covers.

        An inverted range (end below start) covers nothing.
        """
        return max(self.end - self.start, 0)

    def __str__(self) -> str:
        """Format like the address column of a maps line."""
        return f"{self.start:x}-{self.end:x}"


@dataclass(frozen=True)
class Recognition:
    """A successfully recognized heap line.

    Attributes:
        range: The address range of the mapping.
        tail: Whatever followed the inode field (usually blank or a
            pathname).  Kept for completeness; callers ignore it.

    """

    range: AddressRange
    tail: str


# -- Scanning primitives ------------------------------------------------------
#
# Each primitive takes the line and a position, and returns the position
# after what it consumed, or None when the input does not match.


def _take_while(line: str, pos: int, allowed: frozenset[str]) -> int | None:
    """Consume one or more characters drawn from *allowed*."""
    end = pos
    while end < len(line) and line[end] in allowed:
        end += 1
    return end if end > pos else None


def _tag(line: str, pos: int, literal: str) -> int | None:
    """Consume *literal* exactly."""
    if line.startswith(literal, pos):
        return pos + len(literal)
    return None


def _hex_number(line: str, pos: int) -> tuple[int, int] | None:
    """Consume a run of hex digits, returning ``(value, new_pos)``."""
    end = _take_while(line, pos, _HEX_DIGITS)
    if end is None:
        return None
    value = int(line[pos:end], 16)
    if value > MAX_ADDRESS:
        return None
    return value, end


def _separated_field(line: str, pos: int, literal: str) -> int | None:
    """Consume whitespace followed by *literal*."""
    after_space = _take_while(line, pos, _WHITESPACE)
    if after_space is None:
        return None
    return _tag(line, after_space, literal)


# -- Public API ---------------------------------------------------------------


def recognize_heap(line: str) -> Recognition | None:
    """Recognize an anonymous, zero-offset mapping line.

    The line must read ``start-end perms 00000000 00:00 0`` with
    whitespace runs between the fields.  The permissions field may be
    any combination of ``r``, ``w``, ``p``, ``x`` and ``-``; its value
    is not checked.  Anything after the inode is left as the tail.

    Args:
        line: One line of a maps listing, with or without its newline.

    Returns:
        The recognized range and tail, or ``None`` if the line is not a
        heap-like mapping.

    """
    parsed = _hex_number(line, 0)
    if parsed is None:
        return None
    start, pos = parsed

    pos = _tag(line, pos, "-")
    if pos is None:
        return None

    parsed = _hex_number(line, pos)
    if parsed is None:
        return None
    end, pos = parsed

    pos = _take_while(line, pos, _WHITESPACE)
    if pos is None:
        return None
    pos = _take_while(line, pos, _PERMISSION_CHARS)
    if pos is None:
        return None

    for literal in (_ANON_OFFSET, _ANON_DEVICE, _ANON_INODE):
        pos = _separated_field(line, pos, literal)
        if pos is None:
            return None

    return Recognition(range=AddressRange(start=start, end=end), tail=line[pos:])


def heap_ranges(listing: str) -> Iterator[AddressRange]:
    """Yield the range of every heap-like line in *listing*, top to bottom."""
    for line in _LINE_BREAK.split(listing):
        recognized = recognize_heap(line)
        if recognized is not None:
            yield recognized.range


def sum_heap_lines(listing: str) -> int:
    """Return the total size in bytes of all heap-like mappings.

    Lines that do not match are skipped.  An empty listing, or one with
    no anonymous mappings at all, totals ``0``.
    """
    return sum(r.size for r in heap_ranges(listing))
