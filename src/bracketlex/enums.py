"""Enumerations for bracketlex type-safe constants.

Uses StrEnum for automatic string conversion.

Python 3.13+.
"""

from enum import StrEnum


class LoadState(StrEnum):
    """Outcome of registering interest in a tag's lexicon.

    StrEnum provides automatic string conversion: str(LoadState.LOADED) == "loaded"
    """

    LOADED = "loaded"
    """Lexicon already installed; the success callback fires immediately."""

    JOINED = "joined"
    """A load is in flight; callbacks were queued on it."""

    CREATED = "created"
    """No load was in flight; a new pending load was created."""


__all__ = [
    "LoadState",
]
