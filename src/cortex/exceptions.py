"""Error taxonomy for block conversion and the entry store"""


class CortexError(Exception):
    """Base exception for cortex operations."""


class EntryNotFoundError(CortexError, LookupError):
    """No entry matched the requested id (and state)."""

    def __init__(self, entry_id: str):
        self.entry_id = entry_id
        super().__init__(f"Entry with ID '{entry_id}' was not found")


class StoreError(CortexError):
    """The record store could not be queried or committed."""


class ConfigError(CortexError, ValueError):
    """Configuration file or values are invalid."""
