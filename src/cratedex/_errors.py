"""Cratedex error types."""


class CratedexError(Exception):
    """Base error for all cratedex failures."""


class CratedexIOError(CratedexError):
    """Input or output file could not be opened, read or written."""


class CratedexRecordError(CratedexError):
    """A row could not be coerced to its record schema."""


class CratedexPopulationError(CratedexError):
    """Fewer crates loaded than the configured index size requires."""


class CratedexDuplicateError(CratedexError):
    """Two crates produced the same index key."""
