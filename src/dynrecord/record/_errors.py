"""
Exceptions raised by DynamicRecord.

- NoSuchAccessorError: an attribute-style name matched no dispatch rule
- InvalidSourceDataError: construction or merge input is not key/value data
"""

from __future__ import annotations

import typing as _typing


class NoSuchAccessorError(AttributeError):
    """
    Raised when an attribute-style access matches none of the dispatch rules.

    The name is not a stored key, not a mutator (``name=``), predicate
    (``name?``) or forcing accessor (``name!``), and does not look like a
    plain identifier that could fall back to the record's default.

    Subclasses AttributeError so ``hasattr`` and three-argument ``getattr``
    keep working on records.
    """

    def __init__(self, name: str, record_type: str = "DynamicRecord") -> None:
        super().__init__(
            f"'{record_type}' has no key, mutator, predicate or forcing "
            f"accessor named {name!r}"
        )
        # AttributeError.__init__ resets .name, so assign afterwards
        self.name = name
        self.record_type = record_type


class InvalidSourceDataError(TypeError):
    """Raised when source data can't be read as key/value pairs."""

    def __init__(self, source: _typing.Any, reason: str) -> None:
        self.source = source
        self.reason = reason
        super().__init__(
            f"Cannot build a record from {type(source).__name__}: {reason}"
        )
