"""py-heapsize — approximate heap footprint from /proc/<pid>/maps.

Re-exports public symbols so callers can write::

    from py_heapsize import read_heap_size
"""

from py_heapsize.heap import read_heap_size
from py_heapsize.maps import AddressRange, Recognition, heap_ranges, recognize_heap, sum_heap_lines
from py_heapsize.procfs import ProcFilesystem

__all__ = [
    "AddressRange",
    "ProcFilesystem",
    "Recognition",
    "heap_ranges",
    "read_heap_size",
    "recognize_heap",
    "sum_heap_lines",
]
