"""
Type aliases and sentinels for DynamicRecord.

This module provides:
- DefaultFactory: per-key default rule, called as factory(record, key)
- UNSET: sentinel for "no fixed default configured" and "no key given"
"""

from __future__ import annotations

import typing as _typing

if _typing.TYPE_CHECKING:
    import dynrecord.record._core as _core

DefaultFactory: _typing.TypeAlias = _typing.Callable[["_core.DynamicRecord", str], _typing.Any]


def _get_unset_singleton() -> _UnsetType:
    """Return the UNSET singleton. Called by pickle to reconstruct."""
    return UNSET


class _UnsetType:
    """Sentinel type marking an omitted argument or an unconfigured default."""

    __slots__ = ()

    def __repr__(self) -> str:
        return "<UNSET>"

    def __bool__(self) -> bool:
        return False

    def __reduce__(self) -> tuple[_typing.Callable[[], _UnsetType], tuple[()]]:
        """Pickle support: ensure singleton is preserved."""
        return (_get_unset_singleton, ())


UNSET = _UnsetType()
