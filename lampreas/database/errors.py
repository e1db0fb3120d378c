"""Error taxonomy for the data-access layer and the export.

Not-found is not an error: lookups return ``None`` and updates/deletes
return a zero row count.
"""


class DataAccessError(Exception):
    """Any failure originating from the relational store."""


class ConfigurationError(DataAccessError):
    """Connection configuration is missing, unreadable or incomplete."""


class StoreConnectionError(DataAccessError):
    """The store cannot be opened or reached."""


class ConstraintViolationError(DataAccessError):
    """Duplicate key, foreign key or other integrity failure."""


class ExportError(OSError):
    """Export directory or file could not be written."""
