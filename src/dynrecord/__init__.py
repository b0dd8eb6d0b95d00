"""
dynrecord - nested records with attribute-style access

A string-keyed mapping that converts nested data into records of its own
type, answers ``record.name``-style reads and writes, and deep-merges.
"""

import importlib.metadata as _metadata

# Version is defined in pyproject.toml - read it and parse into tuple (primary representation)
_raw_version = _metadata.version("dynrecord")
__version_info__: tuple[int, int, int] = tuple(int(x) for x in _raw_version.split(".")[:3])  # type: ignore[assignment]
__version__: str = ".".join(str(x) for x in __version_info__)
__author__ = "dynrecord Contributors"

from dynrecord.config import Settings  # noqa: E402
from dynrecord.record import (  # noqa: E402
    DynamicRecord,
    InvalidSourceDataError,
    NoSuchAccessorError,
    RecordMap,
)

__all__ = [
    "__version__",
    "__version_info__",
    "DynamicRecord",
    "InvalidSourceDataError",
    "NoSuchAccessorError",
    "RecordMap",
    "Settings",
]
