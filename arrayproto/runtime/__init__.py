"""
arrayproto.runtime - The arrayproto Runtime Library

This package contains the iteration engine and the values it works on.

Submodules:
- types: HOLE marker, _MISSING sentinel and the error taxonomy
- sparse: SparseArray, a mutable array with holes
- core: map, forEach, filter and reduce (array_map, array_for_each, ...)

The runtime has no dependencies on the reader or the CLI.
"""

# Re-export core functions
from arrayproto.runtime.core import (
    IndexedView,
    array_filter,
    array_for_each,
    array_map,
    array_reduce,
    bind_receiver,
    to_object,
)

# Re-export the container
from arrayproto.runtime.sparse import SparseArray

# Re-export types
from arrayproto.runtime.types import (
    _MISSING,
    HOLE,
    InvalidReceiver,
    IterationError,
    NotAFunction,
    ReduceOfEmptySequence,
    is_hole,
)

__all__ = [
    # Types
    "HOLE",
    "_MISSING",
    "is_hole",
    "IterationError",
    "InvalidReceiver",
    "NotAFunction",
    "ReduceOfEmptySequence",
    # Container
    "SparseArray",
    # Engine
    "IndexedView",
    "to_object",
    "bind_receiver",
    "array_map",
    "array_for_each",
    "array_filter",
    "array_reduce",
]
