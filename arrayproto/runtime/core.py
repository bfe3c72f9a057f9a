"""
arrayproto.runtime.core - The sequence iteration engine

This module implements map, forEach, filter and reduce with the observable
contract of JavaScript's Array.prototype methods:

- Validation: the receiver must not be None and the callback must be
  callable. Both are checked before anything is visited or allocated.
- Coercion: the receiver is viewed as an indexable object. Non-indexable
  receivers behave as zero-length sequences.
- Traversal: one forward scan over 0..n-1 with n read once up front.
  Holes are skipped, values are re-read from the live container at each
  step.

Categories:
- Receiver views: to_object, IndexedView
- Callback binding: bind_receiver
- Operations: array_map, array_for_each, array_filter, array_reduce
"""

from collections.abc import Mapping, Sequence
from functools import partial
from types import MethodType
from typing import Any, Callable

from arrayproto.runtime.sparse import SparseArray
from arrayproto.runtime.types import (
    _MISSING,
    HOLE,
    InvalidReceiver,
    NotAFunction,
    ReduceOfEmptySequence,
)

# =============================================================================
# Receiver Views
# =============================================================================


def _to_length(value: Any) -> int:
    """Coerce an array-like's length to a non-negative integer."""
    try:
        # Strings go through float so "3.5" and "1e1" read as numbers
        n = int(float(value)) if isinstance(value, str) else int(value)
    except (TypeError, ValueError, OverflowError):
        return 0
    return n if n > 0 else 0


class IndexedView:
    """
    Object-like indexable view over a receiver.

    The length is computed once, when the view is built. Presence and values
    are looked up on the live target on every call.
    """

    __slots__ = ("target", "length")

    def __init__(self, target: Any):
        self.target = target
        if isinstance(target, SparseArray):
            self.length = len(target)
        elif isinstance(target, Mapping):
            self.length = _to_length(target.get("length", 0))
        elif isinstance(target, Sequence):
            self.length = len(target)
        else:
            self.length = 0

    def has(self, index: int) -> bool:
        target = self.target
        if isinstance(target, SparseArray):
            return target.has(index)
        if isinstance(target, Mapping):
            return index in target or str(index) in target
        if isinstance(target, Sequence):
            return index < len(target) and target[index] is not HOLE
        return False

    def get(self, index: int) -> Any:
        target = self.target
        if isinstance(target, Mapping):
            if index in target:
                return target[index]
            return target[str(index)]
        return target[index]


def to_object(receiver: Any) -> IndexedView:
    """Return the indexable view of receiver."""
    return IndexedView(receiver)


# =============================================================================
# Validation and Binding
# =============================================================================


def _validate(operation: str, receiver: Any, callback: Any) -> None:
    if receiver is None:
        raise InvalidReceiver(operation)
    if not callable(callback):
        raise NotAFunction(callback)


def _is_bound(callback: Callable) -> bool:
    if isinstance(callback, (MethodType, partial)):
        return True
    return getattr(callback, "__self__", None) is not None


def bind_receiver(callback: Callable, this_arg: Any = None) -> Callable:
    """
    Bind this_arg as the receiver of callback.

    The bound callable passes this_arg as the first positional argument,
    the way a method receives self. A callback that is already bound
    (a bound method, a bound builtin such as "{}".format, or a
    functools.partial) keeps its own arguments. With this_arg None,
    callback is returned unchanged.
    """
    if this_arg is None or _is_bound(callback):
        return callback
    return MethodType(callback, this_arg)


# =============================================================================
# Operations
# =============================================================================


def array_map(arr, callback, this_arg=None) -> SparseArray:
    """Return a new array of callback(value, index, arr) over arr.

    The result has the same length as arr and holes at the same indices.
    Holes are never passed to callback.

    Args:
        arr: The receiver sequence
        callback: Called with (value, index, arr) for each present index
        this_arg: Optional receiver bound to callback

    Raises:
        InvalidReceiver: If arr is None
        NotAFunction: If callback is not callable
    """
    _validate("map", arr, callback)
    view = to_object(arr)
    n = view.length
    fn = bind_receiver(callback, this_arg)
    result = SparseArray(length=n)
    for i in range(n):
        if view.has(i):
            result[i] = fn(view.get(i), i, arr)
    return result


def array_for_each(arr, callback, this_arg=None) -> None:
    """Call callback(value, index, arr) for each present index of arr."""
    _validate("forEach", arr, callback)
    view = to_object(arr)
    n = view.length
    fn = bind_receiver(callback, this_arg)
    for i in range(n):
        if view.has(i):
            fn(view.get(i), i, arr)


def array_filter(arr, predicate) -> SparseArray:
    """Return a new dense array of the present values of arr passing predicate.

    predicate is called as predicate(value, index, arr) with no bound
    receiver; its result is tested with bool().
    """
    _validate("filter", arr, predicate)
    view = to_object(arr)
    n = view.length
    result = SparseArray()
    for i in range(n):
        if view.has(i):
            value = view.get(i)
            if predicate(value, i, arr):
                result.append(value)
    return result


def array_reduce(arr, callback, initial=_MISSING):
    """Fold arr with callback(acc, value, index, arr).

    (array_reduce arr f) - seeds from the first present element
    (array_reduce arr f init) - seeds from init, which may be any value

    Raises:
        InvalidReceiver: If arr is None
        NotAFunction: If callback is not callable
        ReduceOfEmptySequence: If no initial value was given and arr has
            no present element
    """
    _validate("reduce", arr, callback)
    view = to_object(arr)
    n = view.length
    start = 0
    if initial is _MISSING:
        while start < n and not view.has(start):
            start += 1
        if start >= n:
            raise ReduceOfEmptySequence()
        acc = view.get(start)
        start += 1
    else:
        acc = initial
    for i in range(start, n):
        if view.has(i):
            acc = callback(acc, view.get(i), i, arr)
    return acc
