from __future__ import annotations


class EntityMatchError(Exception):
    """Base class for errors raised by entity_match."""


class InvalidTimestampError(EntityMatchError, ValueError):
    """A time argument (``now``, a window) is not a finite number."""


class UsageRecordError(EntityMatchError, ValueError):
    """A persisted usage payload does not have the expected shape."""


class ConfigError(EntityMatchError, ValueError):
    """A configuration mapping has unknown keys or badly typed values."""


class StoreError(EntityMatchError):
    """A reference usage store could not read its backing data."""
