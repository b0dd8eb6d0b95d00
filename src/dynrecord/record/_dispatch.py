"""
Attribute-style dispatch for DynamicRecord.

A name (plus zero or one argument) is resolved against a fixed rule table
and the outcome is returned as a tagged result:

    name=  with 1 arg   → Assigned   (set the key)
    name?  with 0 args  → Presence   (does the key exist?)
    name!  with 0 args  → Forced     (create an empty record if absent)
    stored key          → Found      (the stored value)
    identifier-shaped   → Defaulted  (the record's default for that name)
    anything else       → NoSuchAccessorError

Example:
    >>> record = DynamicRecord()
    >>> dispatch(record, "name?")
    Presence(key='name', value=False)
    >>> dispatch(record, "name=", "Bob")
    Assigned(key='name', value='Bob')
    >>> dispatch(record, "name")
    Found(key='name', value='Bob')
"""

from __future__ import annotations

import dataclasses as _dataclasses
import logging as _logging
import typing as _typing

import dynrecord.config as config
import dynrecord.constants as constants
import dynrecord.record._errors as _errors

if _typing.TYPE_CHECKING:
    import dynrecord.record._core as _core

_logger = _logging.getLogger(__name__)


@_dataclasses.dataclass(frozen=True, slots=True)
class DispatchResult:
    """Base class for dispatch outcomes."""

    key: str
    value: _typing.Any


@_dataclasses.dataclass(frozen=True, slots=True)
class Assigned(DispatchResult):
    """A ``name=`` mutator stored a value. ``value`` is the stored form."""


@_dataclasses.dataclass(frozen=True, slots=True)
class Presence(DispatchResult):
    """A ``name?`` predicate. ``value`` is True if the key exists."""


@_dataclasses.dataclass(frozen=True, slots=True)
class Forced(DispatchResult):
    """A ``name!`` accessor. ``value`` is the (possibly new) stored value."""


@_dataclasses.dataclass(frozen=True, slots=True)
class Found(DispatchResult):
    """A plain name that is a stored key."""


@_dataclasses.dataclass(frozen=True, slots=True)
class Defaulted(DispatchResult):
    """A plain, unset, identifier-shaped name. ``value`` is the default."""


def _strip(name: str, suffix: str) -> str | None:
    """Return name without suffix, or None if it doesn't end in suffix."""
    if name.endswith(suffix):
        return name[: -len(suffix)]
    return None


def dispatch(
    record: _core.DynamicRecord,
    name: str,
    *args: _typing.Any,
) -> DispatchResult:
    """
    Resolve an attribute-style access against a record.

    Rules are tried in order; the first match wins.

    Args:
        record: The record being accessed.
        name: The accessor name, including any ``=``, ``?`` or ``!`` suffix.
        *args: The assigned value for ``name=``; otherwise empty.

    Returns:
        The DispatchResult describing what happened.

    Raises:
        NoSuchAccessorError: If no rule matches.
    """
    stem = _strip(name, constants.MUTATOR_SUFFIX)
    if stem is not None and len(args) == 1:
        record.set(stem, args[0])
        return Assigned(stem, record.get(stem))

    stem = _strip(name, constants.PREDICATE_SUFFIX)
    if stem is not None and not args:
        return Presence(stem, record.has(stem))

    stem = _strip(name, constants.FORCE_SUFFIX)
    if stem is not None and not args:
        return Forced(stem, record.force_key(stem))

    if record.has(name):
        return Found(name, record.get(name))

    settings = config.get_settings()
    if settings.identifier_regex.match(name):
        value = record.resolve_default(name)
        level = _logging.INFO if settings.log_default_reads else _logging.DEBUG
        _logger.log(
            level,
            "Unset attribute %r read on %s, returning default %r",
            name,
            type(record).__name__,
            value,
        )
        return Defaulted(name, value)

    _logger.debug("No accessor matches %r on %s", name, type(record).__name__)
    raise _errors.NoSuchAccessorError(name, type(record).__name__)
