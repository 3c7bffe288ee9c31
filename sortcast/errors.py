"""Exceptions raised by the sortcast engine.

Requests that are merely ignored (starting while a run is active,
cancelling while idle, replacing the dataset mid-run) are not errors:
they return ``False`` and are logged.
"""


class SortcastError(Exception):
    """Base class for every sortcast error."""


class InvalidDatasetError(SortcastError, ValueError):
    """Dataset is empty, holds duplicates, or holds non-positive integers."""


class InvalidSpeedError(SortcastError, ValueError):
    """Speed must be a positive number."""


class UnknownAlgorithmError(SortcastError, KeyError):
    """No algorithm is registered under the requested name."""

    def __str__(self) -> str:
        return str(self.args[0]) if self.args else "unknown algorithm"


class IndexOutOfRange(SortcastError, IndexError):
    """An algorithm addressed an index outside ``[0, n)``.

    This is a contract violation inside an algorithm, never a user error.
    """
