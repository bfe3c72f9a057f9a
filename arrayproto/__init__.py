"""
arrayproto - JavaScript array iteration semantics for Python

map, forEach, filter and reduce over sequences that may contain holes,
with the validation, receiver binding and hole-skipping rules of
Array.prototype.

    >>> from arrayproto import HOLE, array_map
    >>> array_map([10, 2, HOLE, 4], lambda x, i, arr: x * 2)
    SparseArray([20, 4, <hole>, 8])
"""

from arrayproto.runtime import (
    HOLE,
    InvalidReceiver,
    IterationError,
    NotAFunction,
    ReduceOfEmptySequence,
    SparseArray,
    array_filter,
    array_for_each,
    array_map,
    array_reduce,
    is_hole,
)

__version__ = "0.1.0"

__all__ = [
    "HOLE",
    "is_hole",
    "SparseArray",
    "IterationError",
    "InvalidReceiver",
    "NotAFunction",
    "ReduceOfEmptySequence",
    "array_map",
    "array_for_each",
    "array_filter",
    "array_reduce",
]
