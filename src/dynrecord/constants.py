"""
Shared constants for dynrecord.

This module provides a single source of truth for default values
that are used across multiple modules.
"""

DEFAULT_IDENTIFIER_PATTERN = r"^[a-z][a-z0-9A-Z_]+$"
"""Attribute names that fall back to the record's default when unset.

A lowercase letter followed by at least one letter, digit or underscore.
Names outside this shape (``_private``, ``X``, ``a``) raise
NoSuchAccessorError instead of silently returning the default.
"""

ENV_PREFIX = "DYNRECORD_"
"""Prefix for environment variables read by Settings."""

ENV_FILE_VAR = "DYNRECORD_ENV_FILE"
"""Environment variable naming an optional .env file."""

MUTATOR_SUFFIX = "="
"""Suffix of assignment accessors (``name=``)."""

PREDICATE_SUFFIX = "?"
"""Suffix of existence predicates (``name?``)."""

FORCE_SUFFIX = "!"
"""Suffix of forcing accessors (``name!``)."""
