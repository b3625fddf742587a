"""Domain models and types for stash.

This package contains the functional core:
- Pure functions with no side effects (change-making, conversions)
- No I/O operations
- Easy to test
- The Stash ledger keeps its state in memory only
"""

from stash.domain.denomination import Catalog, Denomination, default_catalog
from stash.domain.errors import (
    InsufficientFunds,
    InvalidAmount,
    InvalidCatalog,
    InvalidDenomination,
    StashError,
    UnknownDenomination,
)
from stash.domain.ledger import Stash
from stash.domain.models import AmountMap, Count, DenominationName, Value
from stash.domain.unit import Unit

__all__ = [
    # Types
    "AmountMap",
    "Count",
    "DenominationName",
    "Value",
    # Catalog
    "Catalog",
    "Denomination",
    "default_catalog",
    # Ledger
    "Stash",
    "Unit",
    # Errors
    "InsufficientFunds",
    "InvalidAmount",
    "InvalidCatalog",
    "InvalidDenomination",
    "StashError",
    "UnknownDenomination",
]
