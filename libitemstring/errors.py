"""Errors raised by libitemstring.

Malformed item strings are never errors: they decode to an empty record.
"""


class LibItemStringError(Exception):
    """Base error for this package."""


class LibraryVersionError(LibItemStringError):
    """Raised when a library version string cannot be parsed."""


class LibraryNotInitialized(LibItemStringError):
    """Raised when the process-wide library is used before initialize()."""


class ScanSurfaceBusy(LibItemStringError):
    """Raised when the tooltip scan surface is already leased."""


class CatalogError(LibItemStringError):
    """Raised when an item catalog file cannot be loaded."""


class SettingsError(LibItemStringError):
    """Raised when the settings file holds an invalid value."""
