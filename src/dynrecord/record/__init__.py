"""
DynamicRecord — a nested string-keyed mapping with attribute-style access.

Mappings stored in a record become records themselves, at any depth, and
unrecognized attribute names are resolved through an explicit dispatch
table (``name=``, ``name?``, ``name!``, stored key, default).

Example:
    >>> from dynrecord.record import DynamicRecord
    >>> record = DynamicRecord({"model": {"name": "llama", "size": "7b"}})
    >>> record.model.size
    '7b'
    >>> record.deep_merge({"model": {"size": "70b"}}).model
    <DynamicRecord name='llama' size='70b'>
"""

from dynrecord.record._coerce import (
    Shape,
    coerce_value,
    normalize_key,
    shape_of,
)
from dynrecord.record._core import DynamicRecord, RecordMap
from dynrecord.record._dispatch import (
    Assigned,
    Defaulted,
    DispatchResult,
    Forced,
    Found,
    Presence,
    dispatch,
)
from dynrecord.record._errors import InvalidSourceDataError, NoSuchAccessorError
from dynrecord.record._types import UNSET

__all__ = [
    "Assigned",
    "Defaulted",
    "DispatchResult",
    "DynamicRecord",
    "Forced",
    "Found",
    "InvalidSourceDataError",
    "NoSuchAccessorError",
    "Presence",
    "RecordMap",
    "Shape",
    "UNSET",
    "coerce_value",
    "dispatch",
    "normalize_key",
    "shape_of",
]
