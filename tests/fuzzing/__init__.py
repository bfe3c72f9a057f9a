"""Fuzz testing suite for arrayproto."""

from .fuzz import Fuzzer, FuzzRunner, random_value, run_suite

__all__ = ["Fuzzer", "FuzzRunner", "random_value", "run_suite"]
