"""
arrayproto.runtime.sparse - A mutable array with holes

SparseArray models a JavaScript array: a length plus a set of present
slots. Indices below the length that hold no slot are holes. Holes are
distinct from slots holding None, and iteration, equality and repr all
show them as the HOLE marker.
"""

import operator
from typing import Any, Iterable, Iterator, Optional

from arrayproto.runtime.types import _MISSING, HOLE


class SparseArray:
    """
    An ordered, indexable container whose slots are either present or holes.

    SparseArray([1, HOLE, 3]) has length 3 with a hole at index 1.
    SparseArray(length=3) has length 3 and no present slot, like Array(3).

    Writing past the end grows the array, leaving holes in between.
    Deleting an index leaves a hole and keeps the length.
    """

    __slots__ = ("_slots", "_length")

    def __init__(self, items: Iterable[Any] = (), length: Optional[int] = None):
        self._slots: dict[int, Any] = {}
        count = 0
        for i, value in enumerate(items):
            if value is not HOLE:
                self._slots[i] = value
            count = i + 1
        if length is not None:
            if length < count:
                raise ValueError(
                    f"length {length} is shorter than the {count} items given"
                )
            count = length
        self._length = count

    # -------------------------------------------------------------------------
    # Length
    # -------------------------------------------------------------------------

    @property
    def length(self) -> int:
        return self._length

    @length.setter
    def length(self, n: int) -> None:
        n = operator.index(n)
        if n < 0:
            raise ValueError(f"Invalid array length: {n}")
        if n < self._length:
            for i in [i for i in self._slots if i >= n]:
                del self._slots[i]
        self._length = n

    def __len__(self):
        return self._length

    # -------------------------------------------------------------------------
    # Slot access
    # -------------------------------------------------------------------------

    def _normalize(self, index) -> int:
        i = operator.index(index)
        if i < 0:
            i += self._length
        return i

    def has(self, index: int) -> bool:
        """Return True if index is present (holds a value, possibly None)."""
        return index in self._slots

    def get(self, index: int, default: Any = None) -> Any:
        """Return the value at index, or default for holes and out-of-range indices."""
        i = self._normalize(index)
        return self._slots.get(i, default)

    def __getitem__(self, index):
        i = self._normalize(index)
        if i < 0 or i >= self._length:
            raise IndexError(f"Index {index} out of range for length {self._length}")
        return self._slots.get(i, HOLE)

    def __setitem__(self, index, value):
        i = self._normalize(index)
        if i < 0:
            raise IndexError(f"Index {index} out of range for length {self._length}")
        if value is HOLE:
            self._slots.pop(i, None)
        else:
            self._slots[i] = value
        if i >= self._length:
            self._length = i + 1

    def __delitem__(self, index):
        i = self._normalize(index)
        if i < 0 or i >= self._length:
            raise IndexError(f"Index {index} out of range for length {self._length}")
        self._slots.pop(i, None)

    def append(self, value: Any) -> None:
        """Add value at the end (JavaScript push)."""
        if value is not HOLE:
            self._slots[self._length] = value
        self._length += 1

    def present_indices(self) -> Iterator[int]:
        """Iterate over present indices in ascending order."""
        return iter(sorted(self._slots))

    def count_present(self) -> int:
        return len(self._slots)

    def to_list(self, fill: Any = None) -> list:
        """Return a plain list with every hole replaced by fill."""
        return [self._slots.get(i, fill) for i in range(self._length)]

    # -------------------------------------------------------------------------
    # Python protocols
    # -------------------------------------------------------------------------

    def __iter__(self):
        slots = self._slots
        for i in range(self._length):
            yield slots.get(i, HOLE)

    def __contains__(self, value):
        return value in self._slots.values()

    def __eq__(self, other):
        if isinstance(other, SparseArray):
            return self._length == other._length and self._slots == other._slots
        if isinstance(other, (list, tuple)):
            return len(other) == self._length and list(self) == list(other)
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def __repr__(self):
        return f"SparseArray([{', '.join(repr(v) for v in self)}])"

    # -------------------------------------------------------------------------
    # Iteration protocol
    # -------------------------------------------------------------------------

    def map(self, callback, this_arg=None) -> "SparseArray":
        """See arrayproto.runtime.core.array_map."""
        from arrayproto.runtime.core import array_map

        return array_map(self, callback, this_arg)

    def for_each(self, callback, this_arg=None) -> None:
        """See arrayproto.runtime.core.array_for_each."""
        from arrayproto.runtime.core import array_for_each

        array_for_each(self, callback, this_arg)

    def filter(self, predicate) -> "SparseArray":
        """See arrayproto.runtime.core.array_filter."""
        from arrayproto.runtime.core import array_filter

        return array_filter(self, predicate)

    def reduce(self, callback, initial=_MISSING):
        """See arrayproto.runtime.core.array_reduce."""
        from arrayproto.runtime.core import array_reduce

        return array_reduce(self, callback, initial)
