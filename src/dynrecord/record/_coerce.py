"""
Key normalization and value coercion for DynamicRecord.

Every value written into a record passes through coerce_value():
- Mappings become DynamicRecords (recursively)
- Sequences are rebuilt with each element coerced
- Anything else is stored as-is

Example:
    >>> value = coerce_value({"a": [{"b": 1}, 2]})
    >>> value
    <DynamicRecord a=[<DynamicRecord b=1>, 2]>
"""

from __future__ import annotations

import collections.abc as _abc
import enum as _enum
import logging as _logging
import typing as _typing

import dynrecord.record._errors as _errors

_logger = _logging.getLogger(__name__)


class Shape(_enum.Enum):
    """Structural shape of a value, as far as coercion cares."""

    MAPPING = "mapping"
    SEQUENCE = "sequence"
    OPAQUE = "opaque"


# Sequences that are really scalars
_TEXT_TYPES = (str, bytes, bytearray, memoryview)


def normalize_key(key: _typing.Hashable) -> str:
    """
    Convert a key-like value to its canonical string form.

    Two keys that render to the same text are the same key, so
    ``1`` and ``"1"`` address the same entry.
    """
    if isinstance(key, str):
        return key
    return str(key)


def shape_of(value: _typing.Any) -> Shape:
    """
    Classify a value by capability, not by concrete type.

    - Any Mapping (dict, DynamicRecord, MappingProxyType, ...) → MAPPING
    - Any Sequence except text and bytes → SEQUENCE
    - Everything else → OPAQUE
    """
    if isinstance(value, _abc.Mapping):
        return Shape.MAPPING
    if isinstance(value, _abc.Sequence) and not isinstance(value, _TEXT_TYPES):
        return Shape.SEQUENCE
    return Shape.OPAQUE


def is_mapping(value: _typing.Any) -> bool:
    """Check if a value is mapping-shaped."""
    return shape_of(value) is Shape.MAPPING


def coerce_value(value: _typing.Any, duplicate: bool = False) -> _typing.Any:
    """
    Convert raw data into the record's canonical representation.

    Args:
        value: The value to coerce.
        duplicate: If True, existing DynamicRecords are rebuilt instead of
            reused, so the result shares no records with the input. Used
            by deep merges to avoid aliasing caller-owned data.

    Returns:
        A DynamicRecord for mappings, a new sequence of coerced elements
        for sequences (tuple stays tuple, anything else becomes list),
        or the value unchanged.
    """
    import dynrecord.record._core as _core

    shape = shape_of(value)

    if shape is Shape.MAPPING:
        if isinstance(value, _core.DynamicRecord):
            if not duplicate:
                return value
            return value._rebuild(duplicate=True)
        return _core.DynamicRecord._from_mapping(value, duplicate=duplicate)

    if shape is Shape.SEQUENCE:
        items = [coerce_value(item, duplicate) for item in value]
        if isinstance(value, tuple):
            return tuple(items)
        return items

    return value


def export_value(value: _typing.Any) -> _typing.Any:
    """
    Convert a coerced value back into plain builtins.

    Records become dicts, sequences are rebuilt, everything else is
    returned as-is. The inverse of coerce_value() for to_dict().
    """
    shape = shape_of(value)
    if shape is Shape.MAPPING:
        return {normalize_key(k): export_value(v) for k, v in value.items()}
    if shape is Shape.SEQUENCE:
        items = [export_value(item) for item in value]
        if isinstance(value, tuple):
            return tuple(items)
        return items
    return value


def _as_pair(item: _typing.Any) -> tuple[_typing.Any, _typing.Any]:
    """Unpack one element of pair input; text is never a pair."""
    if shape_of(item) is not Shape.SEQUENCE or len(item) != 2:
        raise ValueError(f"expected a key/value pair, got {item!r}")
    return item[0], item[1]


def source_pairs(source: _typing.Any) -> list[tuple[str, _typing.Any]]:
    """
    Return normalized (key, raw value) pairs from construction or merge input.

    Accepts any Mapping, or an iterable of two-item sequences (tuples,
    lists). Strings are never read as pairs, so ``["ab"]`` is rejected
    rather than becoming ``{"a": "b"}``.

    Raises:
        InvalidSourceDataError: If source can't be read as key/value pairs,
            including a Mapping whose items() fails. Raised before anything
            is returned, so callers never apply a partial update.
    """
    try:
        if isinstance(source, _abc.Mapping):
            pairs = list(source.items())
        else:
            pairs = [_as_pair(item) for item in source]
    except (KeyError, TypeError, ValueError) as e:
        _logger.debug("Rejected source data of type %s: %s", type(source).__name__, e)
        raise _errors.InvalidSourceDataError(source, str(e)) from e

    return [(normalize_key(key), value) for key, value in pairs]
