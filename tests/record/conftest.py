"""
Shared fixtures for DynamicRecord tests.
"""

import collections.abc as _abc
import typing as _typing

import pytest as _pytest

import dynrecord.record as records


@_pytest.fixture
def nested_record() -> records.DynamicRecord:
    """Record built from nested raw data (maps inside lists inside maps)."""
    return records.DynamicRecord(
        {
            "a": {"b": 23, "d": {"e": "abc"}},
            "f": [{"g": 44, "h": 29}, 12],
        }
    )


@_pytest.fixture
def defaulted_record() -> records.DynamicRecord:
    """Record with a fixed default of 0 and one stored key."""
    return records.DynamicRecord({"present": "here"}, default=0)


class _UnreadableMapping(_abc.Mapping[str, int]):
    """A Mapping that lists a key it can't return."""

    def __getitem__(self, key: str) -> int:
        raise KeyError(key)

    def __iter__(self) -> _typing.Iterator[str]:
        return iter(["a"])

    def __len__(self) -> int:
        return 1


@_pytest.fixture
def unreadable_mapping() -> _abc.Mapping[str, int]:
    """Mapping-shaped input whose items() raises KeyError."""
    return _UnreadableMapping()
