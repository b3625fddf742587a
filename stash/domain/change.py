"""Pure functions for withdrawal and change-making.

This module contains the functional core for withdrawals:
- No I/O operations (no files, no console)
- No side effects: balances in, new balance out
- Easy to test

All values are in base units (the smallest denomination).
"""

from collections.abc import Mapping

from stash.domain.denomination import Catalog, Denomination
from stash.domain.errors import InsufficientFunds
from stash.domain.models import AmountMap, Value


def balance_value(catalog: Catalog, balance: Mapping[str, int]) -> Value:
    """Total worth of a balance snapshot in base units."""
    return catalog.to_base_units(balance)


def is_affordable(catalog: Catalog, balance: Mapping[str, int], amounts: Mapping[str, object]) -> bool:
    """Check whether a balance covers the value of an amount map.

    Args:
        catalog: Denomination catalog.
        balance: Current counts per denomination.
        amounts: Sparse amounts being requested.

    Returns:
        True if the requested value does not exceed the balance's value.
    """
    return catalog.to_base_units(amounts) <= balance_value(catalog, balance)


def find_pivot(catalog: Catalog, balance: Mapping[str, int], requested: int) -> tuple[Denomination, Value]:
    """Find the smallest tier whose own holding covers what is still unpaid.

    Scans from the smallest denomination upwards. Every tier that cannot
    cover the remainder on its own is consumed whole and its value taken
    off the remainder.

    Args:
        catalog: Denomination catalog.
        balance: Current counts per denomination.
        requested: Withdrawal value in base units; must not exceed the
            balance's total value.

    Returns:
        Tuple of (pivot denomination, remainder the pivot has to cover).
    """
    remaining = requested
    tiers = catalog.ascending()
    for denomination in tiers:
        held = balance.get(denomination.name, 0) * denomination.multiplier
        if held >= remaining:
            return denomination, Value(remaining)
        remaining -= held

    # Only reachable when requested exceeds the total; callers check first
    raise InsufficientFunds(requested, balance_value(catalog, balance))


def withdraw_from(catalog: Catalog, balance: Mapping[str, int], amounts: Mapping[str, object]) -> AmountMap:
    """Compute the balance left after a withdrawal.

    The pivot tier's holding pays the remainder and what is left of it is
    cascaded down through every smaller tier with floor division. Tiers
    above the pivot keep their counts.

    Args:
        catalog: Denomination catalog.
        balance: Current counts per denomination.
        amounts: Sparse amounts to withdraw.

    Returns:
        New full balance, largest denomination first.

    Raises:
        UnknownDenomination: If `amounts` names an unregistered denomination.
        InvalidAmount: If an amount is negative or not an integer.
        InsufficientFunds: If the withdrawal is worth more than the balance.
    """
    requested = catalog.to_base_units(amounts)
    available = balance_value(catalog, balance)
    if requested > available:
        raise InsufficientFunds(requested, available)

    pivot, remaining = find_pivot(catalog, balance, requested)
    leftover = balance.get(pivot.name, 0) * pivot.multiplier - remaining

    result = catalog.breakdown(leftover, top=pivot.name)
    for denomination in catalog:
        if denomination is pivot:
            break
        result[denomination.name] = balance.get(denomination.name, 0)
    return result
