"""Exceptions raised by the stash domain core.

Every error is a deterministic validation failure, checked before any
holding is touched. The core raises them directly and never logs.
"""


class StashError(Exception):
    """Base exception for all stash errors."""


class UnknownDenomination(StashError):
    """Raised when an amount map or lookup names a denomination not in the catalog."""

    def __init__(self, name: str, message: str | None = None) -> None:
        self.name = name
        super().__init__(message or f"Stash does not have a denomination definition for: {name}")


class InvalidDenomination(UnknownDenomination):
    """Raised when a stash is seeded with a denomination not in its catalog."""

    def __init__(self, name: str) -> None:
        super().__init__(name, f"Cannot seed stash with unsupported denomination: {name}")


class InvalidAmount(StashError):
    """Raised when an amount is negative or not a whole number."""

    def __init__(self, name: str, value: object) -> None:
        self.name = name
        self.value = value
        super().__init__(f"Invalid amount for {name}: {value!r} (must be a non-negative integer)")


class InsufficientFunds(StashError):
    """Raised when a withdrawal asks for more value than the stash holds."""

    def __init__(self, requested: int, available: int) -> None:
        self.requested = requested
        self.available = available
        super().__init__(f"Insufficient funds: requested {requested}, available {available}")


class InvalidCatalog(StashError):
    """Raised when a denomination catalog breaks the divisible-chain rules."""
