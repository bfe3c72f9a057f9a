"""
arrayproto.runtime.types - Core type definitions for arrayproto

This module contains the fundamental values shared by the engine, the
sparse array container and the reader:
- HOLE: Marker for an absent slot in a sequence
- _MISSING: Sentinel for "argument not supplied"
- IterationError: Base class of the errors raised by the engine
- InvalidReceiver: An operation was invoked on None
- NotAFunction: A callback argument is not callable
- ReduceOfEmptySequence: reduce found nothing to seed its accumulator with

All errors derive from TypeError, matching the error kind the JavaScript
array builtins throw in the same situations.
"""

from typing import Any

# Sentinel for missing values
_MISSING = object()


class _Hole:
    """The marker for an absent slot.

    A hole is not a value: a slot holding None is present, a slot holding
    HOLE is not. There is exactly one instance.
    """

    __slots__ = ()
    _instance = None

    def __new__(cls):
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __repr__(self):
        return "<hole>"

    def __reduce__(self):
        return (_Hole, ())


HOLE = _Hole()


def is_hole(value: Any) -> bool:
    """Return True if value is the hole marker."""
    return value is HOLE


class IterationError(TypeError):
    """Base class for errors detected by the iteration engine."""

    pass


class InvalidReceiver(IterationError):
    """Raised when an operation is invoked on a None receiver."""

    def __init__(self, operation: str):
        self.operation = operation
        super().__init__(f"{operation} called on None")


class NotAFunction(IterationError):
    """Raised when a callback, predicate or reducer is not callable."""

    def __init__(self, value: Any):
        self.value = value
        super().__init__(f"{value!r} is not a function")


class ReduceOfEmptySequence(IterationError):
    """Raised by reduce with no initial value on a sequence with no present element."""

    def __init__(self):
        super().__init__("Reduce of empty array with no initial value")
