"""
DynamicRecord: a string-keyed mapping with attribute-style access.

Keys are normalized to strings, nested mappings are converted to
DynamicRecords on the way in, and unrecognized attribute names are
resolved through an explicit dispatch table (see _dispatch).

Read semantics:
- record["key"] / record.key: the stored value
- record.get("key"): stored value or fallback, never the record default
- record.key for an unset identifier-shaped name: the record default
- getattr(record, "key?") / getattr(record, "key!"): predicate / force

Write semantics:
- record["key"] = value / record.key = value: normalize, coerce, store
- update(): single-level overwrite per key
- deep_merge_in_place(): recursive merge, replace on conflict

Thread safety: NOT thread-safe for concurrent writes. Callers must
synchronize set(), update(), force_key() and deep_merge_in_place().
"""

from __future__ import annotations

import builtins as _builtins
import collections.abc as _abc
import copy as _copy
import logging as _logging
import reprlib as _reprlib
import typing as _typing

import dynrecord.record._coerce as _coerce
import dynrecord.record._dispatch as _dispatch
import dynrecord.record._errors as _errors
import dynrecord.record._types as _types

_logger = _logging.getLogger(__name__)

# Instance state; everything else assigned as an attribute becomes a key
_SLOTS = ("_data", "_default", "_default_factory")


class RecordMap(dict[str, _typing.Any]):
    """
    Plain dict export of a DynamicRecord that keeps the record's default.

    Missing keys return the fixed default without storing it. With no
    default configured, a miss raises KeyError like any dict.

    Example:
        >>> exported = DynamicRecord({"a": 1}, default=0).to_record_map()
        >>> exported["missing"]
        0
        >>> "missing" in exported
        False
    """

    def __init__(
        self,
        data: _abc.Mapping[str, _typing.Any] | None = None,
        /,
        default: _typing.Any = _types.UNSET,
    ) -> None:
        super().__init__(data or {})
        self.default = default

    def __missing__(self, key: str) -> _typing.Any:
        if self.default is _types.UNSET:
            raise KeyError(key)
        return self.default


class DynamicRecord(_abc.MutableMapping[str, _typing.Any]):
    """
    A string-keyed mapping with attribute-style access and deep merging.

    Any mapping stored in a record, at any depth, is itself a
    DynamicRecord; sequences are rebuilt with their elements converted.

    Example:
        >>> record = DynamicRecord({"a": {"b": 23}, "f": [{"g": 44}, 12]})
        >>> record.a.b
        23
        >>> record.f[0].g
        44
        >>> getattr(record, "author?")
        False
        >>> getattr(record, "author!").name = "Michael"
        >>> record.author
        <DynamicRecord name='Michael'>

    Args:
        source: A mapping or iterable of key/value pairs to copy in.
        default: Fixed default for unset keys (see resolve_default()).
        default_factory: Per-key default rule, called as
            ``default_factory(record, key)``.
        **kwargs: Additional keys, stored after source.

    Raises:
        InvalidSourceDataError: If source can't be read as key/value pairs.

    Note:
        **Copy semantics:** copy() is shallow. Nested records are shared
        between a record and its copy, so ``copy.a.b = 1`` is visible
        through the original. Use deep_copy() for a fully independent
        record. deep_merge() never mutates shared nested records.
    """

    __slots__ = _SLOTS

    def __init__(
        self,
        source: _typing.Any = None,
        /,
        default: _typing.Any = _types.UNSET,
        default_factory: _types.DefaultFactory | None = None,
        **kwargs: _typing.Any,
    ) -> None:
        object.__setattr__(self, "_data", {})
        object.__setattr__(self, "_default", default)
        object.__setattr__(self, "_default_factory", default_factory)
        if source is not None:
            self._absorb(source)
        if kwargs:
            self._absorb(kwargs)

    @classmethod
    def _from_mapping(
        cls,
        mapping: _abc.Mapping[_typing.Any, _typing.Any],
        duplicate: bool = False,
    ) -> DynamicRecord:
        """Build a record from a raw mapping, coercing every value."""
        record = cls()
        record._absorb(mapping, duplicate)
        return record

    def _absorb(self, source: _typing.Any, duplicate: bool = False) -> None:
        """Store every pair of source, coerced. Existing keys are replaced."""
        coerced = [
            (key, _coerce.coerce_value(value, duplicate))
            for key, value in _coerce.source_pairs(source)
        ]
        self._data.update(coerced)

    def _rebuild(self, duplicate: bool) -> DynamicRecord:
        """Return a new record with the same defaults and re-coerced values."""
        new = type(self)(default=self._default, default_factory=self._default_factory)
        new._absorb(self._data, duplicate)
        return new

    # =========================================================================
    # Defaults
    # =========================================================================

    @property
    def default(self) -> _typing.Any:
        """The fixed default, or UNSET if none was configured."""
        return self._default

    @default.setter
    def default(self, value: _typing.Any) -> None:
        object.__setattr__(self, "_default", value)

    @property
    def default_factory(self) -> _types.DefaultFactory | None:
        """The per-key default rule, if any."""
        return self._default_factory

    @default_factory.setter
    def default_factory(self, value: _types.DefaultFactory | None) -> None:
        object.__setattr__(self, "_default_factory", value)

    def _has_configured_default(self) -> bool:
        return self._default is not _types.UNSET or self._default_factory is not None

    def resolve_default(self, key: _typing.Any = _types.UNSET) -> _typing.Any:
        """
        Return the default value for key.

        Resolution order:
        1. key is a symbolic name (a str that is a valid identifier) that
           is stored in the record → the stored value itself
        2. key given and a default_factory configured →
           ``default_factory(record, normalized_key)``
        3. otherwise → the fixed default (None if none was configured)

        Args:
            key: The key being defaulted. Omit for the key-less default.
        """
        if isinstance(key, str) and key.isidentifier() and key in self._data:
            return self._data[key]
        if key is not _types.UNSET and key is not None and self._default_factory is not None:
            return self._default_factory(self, _coerce.normalize_key(key))
        if self._default is _types.UNSET:
            return None
        return self._default

    # =========================================================================
    # Core accessors
    # =========================================================================

    def get(self, key: _typing.Any, fallback: _typing.Any = None) -> _typing.Any:
        """Return the stored value for key, or fallback. Ignores the record default."""
        return self._data.get(_coerce.normalize_key(key), fallback)

    def set(self, key: _typing.Any, value: _typing.Any) -> None:
        """Store value under the normalized key, converting nested data."""
        self._data[_coerce.normalize_key(key)] = _coerce.coerce_value(value)

    def has(self, key: _typing.Any) -> bool:
        """Check if the normalized key is stored."""
        return _coerce.normalize_key(key) in self._data

    def force_key(self, key: _typing.Any) -> _typing.Any:
        """
        Return the value at key, storing an empty record there first if absent.

        Materializes intermediate nesting levels without building the path
        up front. Calling it again returns the same value; an existing
        value is never reset.

        Example:
            >>> record = DynamicRecord()
            >>> record.force_key("author").name = "Michael"
            >>> record
            <DynamicRecord author=<DynamicRecord name='Michael'>>
        """
        normalized = _coerce.normalize_key(key)
        if normalized not in self._data:
            _logger.debug("Forcing empty record at key %r", normalized)
            self[normalized] = DynamicRecord()
        return self._data[normalized]

    @property
    def id(self) -> _typing.Any:
        """The stored "id" value if present, otherwise the object identity."""
        if "id" in self._data:
            return self._data["id"]
        return _builtins.id(self)

    # =========================================================================
    # MutableMapping protocol
    # =========================================================================

    def __getitem__(self, key: _typing.Any) -> _typing.Any:
        """
        Get the stored value for key.

        On a miss, returns resolve_default(key) if a default or default
        factory is configured; nothing is stored.

        Raises:
            KeyError: If key is missing and no default is configured.
        """
        normalized = _coerce.normalize_key(key)
        try:
            return self._data[normalized]
        except KeyError:
            if not self._has_configured_default():
                raise
        return self.resolve_default(normalized)

    def __setitem__(self, key: _typing.Any, value: _typing.Any) -> None:
        self.set(key, value)

    def __delitem__(self, key: _typing.Any) -> None:
        del self._data[_coerce.normalize_key(key)]

    def __iter__(self) -> _typing.Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __contains__(self, key: object) -> bool:
        """Check if key is stored. Never consults the record default."""
        return self.has(key)

    def pop(self, key: _typing.Any, *fallback: _typing.Any) -> _typing.Any:
        """Remove key and return its value (or fallback, if given)."""
        return self._data.pop(_coerce.normalize_key(key), *fallback)

    def setdefault(self, key: _typing.Any, default: _typing.Any = None) -> _typing.Any:
        """Store default at key if absent; return the stored value."""
        normalized = _coerce.normalize_key(key)
        if normalized not in self._data:
            self.set(normalized, default)
        return self._data[normalized]

    def clear(self) -> None:
        self._data.clear()

    def update(  # type: ignore[override]
        self,
        other: _typing.Any = (),
        /,
        **kwargs: _typing.Any,
    ) -> DynamicRecord:
        """
        Overwrite top-level keys from other (and kwargs); return self.

        Each key is written through the ``key=`` mutator, so nested
        mappings in other replace existing values rather than merging
        into them. Use deep_merge_in_place() to merge.

        Raises:
            InvalidSourceDataError: If other can't be read as key/value pairs,
                at any depth. Nothing is written in that case.
        """
        pairs = _coerce.source_pairs(other) + _coerce.source_pairs(kwargs)
        coerced = [(key, _coerce.coerce_value(value)) for key, value in pairs]
        for key, value in coerced:
            _dispatch.dispatch(self, key + "=", value)
        return self

    merge_in_place = update

    # =========================================================================
    # Attribute-style access
    # =========================================================================

    def dispatch(self, name: str, *args: _typing.Any) -> _dispatch.DispatchResult:
        """
        Resolve an attribute-style name against this record.

        See _dispatch.dispatch() for the rules.

        Raises:
            NoSuchAccessorError: If no rule matches.
        """
        return _dispatch.dispatch(self, name, *args)

    def send(self, name: str, *args: _typing.Any) -> _typing.Any:
        """Like dispatch(), but return only the resulting value."""
        return _dispatch.dispatch(self, name, *args).value

    def __getattr__(self, name: str) -> _typing.Any:
        # Protocol probes (copy, pickle, ...) must never reach the table
        if name.startswith("__") and name.endswith("__"):
            raise AttributeError(name)
        try:
            object.__getattribute__(self, "_data")
        except AttributeError:
            raise AttributeError(name) from None
        return _dispatch.dispatch(self, name).value

    def __setattr__(self, name: str, value: _typing.Any) -> None:
        if name in _SLOTS:
            object.__setattr__(self, name, value)
            return
        attr = getattr(type(self), name, None)
        if isinstance(attr, property) and attr.fset is not None:
            object.__setattr__(self, name, value)
            return
        _dispatch.dispatch(self, name + "=", value)

    def __delattr__(self, name: str) -> None:
        if name in _SLOTS or name not in self._data:
            raise _errors.NoSuchAccessorError(name, type(self).__name__)
        del self._data[name]

    def __dir__(self) -> _typing.Iterable[str]:
        keys = {key for key in self._data if key.isidentifier()}
        return sorted(set(super().__dir__()) | keys)

    # =========================================================================
    # Merging
    # =========================================================================

    def deep_merge(self, other: _typing.Any) -> DynamicRecord:
        """
        Return a copy of this record with other deep-merged into it.

        Neither this record nor its nested records are modified.
        """
        return self.copy().deep_merge_in_place(other)

    def deep_merge_in_place(self, other: _typing.Any) -> DynamicRecord:
        """
        Recursively merge other into this record; return self.

        For each key in other:
        - both sides mapping-shaped → merged recursively
        - anything else (scalar, sequence, type mismatch) → other's value
          replaces the current one, copied so it shares nothing with other

        Sequences are never merged element-wise.

        Raises:
            InvalidSourceDataError: If other can't be read as key/value pairs,
                at any depth. The record is left unchanged in that case.
        """
        pairs = _coerce.source_pairs(other)
        _logger.debug("Deep merging %d keys into %s", len(pairs), type(self).__name__)

        # Build every merged value first; write only once all of them succeed
        staged: dict[str, _typing.Any] = {}
        for key, value in pairs:
            current = staged.get(key, self._data.get(key, _types.UNSET))
            if _coerce.is_mapping(current) and not isinstance(current, DynamicRecord):
                current = DynamicRecord._from_mapping(current)
            if isinstance(current, DynamicRecord) and _coerce.is_mapping(value):
                staged[key] = current.deep_merge(value)
            else:
                staged[key] = _coerce.coerce_value(value, duplicate=True)

        self._data.update(staged)
        return self

    deep_update = deep_merge_in_place

    def __or__(self, other: _typing.Any) -> DynamicRecord:
        if not isinstance(other, _abc.Mapping):
            return NotImplemented
        return self.deep_merge(other)

    def __ior__(self, other: _typing.Any) -> DynamicRecord:
        return self.deep_merge_in_place(other)

    # =========================================================================
    # Export, display, copying
    # =========================================================================

    def to_record_map(self) -> RecordMap:
        """
        Return the stored keys and values as a plain dict.

        Shallow: nested records stay records. The fixed default is kept
        as the result's fallback for missing keys.
        """
        return RecordMap(self._data, default=self._default)

    def to_dict(self) -> dict[str, _typing.Any]:
        """
        Return a deep plain-builtins copy (records become dicts).

        Useful for serialization (JSON, etc.) or for code that
        type-checks against dict.
        """
        return {key: _coerce.export_value(value) for key, value in self._data.items()}

    @_reprlib.recursive_repr(fillvalue="<...>")
    def describe(self) -> str:
        """
        Render the record as ``<TypeName k1=v1 k2=v2>``, keys sorted.

        Stable across runs for the same content.
        """
        parts = [type(self).__name__]
        parts.extend(f"{key}={self._data[key]!r}" for key in sorted(self._data))
        return f"<{' '.join(parts)}>"

    def __repr__(self) -> str:
        return self.describe()

    __str__ = __repr__

    def copy(self) -> DynamicRecord:
        """
        Return a shallow copy with the same defaults.

        Top-level keys are independent; nested records are shared.
        """
        return self._rebuild(duplicate=False)

    dup = copy

    def deep_copy(self) -> DynamicRecord:
        """Return a fully independent copy (nested records and values included)."""
        return _copy.deepcopy(self)

    def __copy__(self) -> DynamicRecord:
        return self.copy()

    def __deepcopy__(self, memo: dict[int, _typing.Any]) -> DynamicRecord:
        new = type(self).__new__(type(self))
        memo[id(self)] = new
        new.__setstate__(
            (
                _copy.deepcopy(self._data, memo),
                _copy.deepcopy(self._default, memo),
                self._default_factory,
            )
        )
        return new

    def __getstate__(
        self,
    ) -> tuple[dict[str, _typing.Any], _typing.Any, _types.DefaultFactory | None]:
        return (self._data, self._default, self._default_factory)

    def __setstate__(
        self,
        state: tuple[dict[str, _typing.Any], _typing.Any, _types.DefaultFactory | None],
    ) -> None:
        data, default, default_factory = state
        object.__setattr__(self, "_data", data)
        object.__setattr__(self, "_default", default)
        object.__setattr__(self, "_default_factory", default_factory)
