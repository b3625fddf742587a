"""The stash: a ledger of holdings across a denomination catalog.

The stash is the imperative shell around the pure functions in
`stash.domain.change`. Every call validates its whole input before touching
a holding, so a failed call leaves the stash exactly as it was.
"""

from collections.abc import Mapping
from threading import RLock

from stash.domain.change import is_affordable, withdraw_from
from stash.domain.denomination import Catalog, check_amount
from stash.domain.errors import InvalidDenomination, UnknownDenomination
from stash.domain.models import AmountMap, Count, DenominationName, Value
from stash.domain.unit import Unit


class Stash:
    """Holdings of every denomination in a catalog.

    Reads and mutations share one re-entrant lock, so a withdrawal's
    check-then-apply sequence is never interleaved with another call.
    """

    def __init__(self, catalog: Catalog, initial: Mapping[str, int] | None = None) -> None:
        """Create a stash seeded with initial counts.

        Args:
            catalog: Denominations this stash supports.
            initial: Sparse starting counts; missing denominations start at 0.

        Raises:
            InvalidDenomination: If `initial` names a denomination not in the catalog.
            InvalidAmount: If an initial count is negative or not an integer.
        """
        initial = initial or {}
        for name, amount in initial.items():
            if name not in catalog:
                raise InvalidDenomination(name)
            check_amount(name, amount)

        self._catalog = catalog
        self._lock = RLock()
        self._vault: dict[DenominationName, Unit] = {
            d.name: Unit(d, Count(initial.get(d.name, 0))) for d in catalog
        }

    @property
    def catalog(self) -> Catalog:
        return self._catalog

    def balance(self) -> AmountMap:
        """Count of every denomination, largest first."""
        with self._lock:
            return {name: unit.count for name, unit in self._vault.items()}

    def values(self) -> AmountMap:
        """Base-unit value of every denomination, largest first."""
        with self._lock:
            return {name: unit.value for name, unit in self._vault.items()}

    def total_value(self) -> Value:
        with self._lock:
            return Value(sum(unit.value for unit in self._vault.values()))

    def value_of(self, name: str) -> Value:
        """Base-unit value held in one denomination.

        Raises:
            UnknownDenomination: If the name is not registered.
        """
        with self._lock:
            return self._unit(name).value

    def amount_of(self, name: str) -> Count:
        """Count held in one denomination.

        Raises:
            UnknownDenomination: If the name is not registered.
        """
        with self._lock:
            return self._unit(name).count

    def deposit(self, amounts: Mapping[str, object]) -> AmountMap:
        """Add counts to the matching holdings.

        Args:
            amounts: Sparse counts to add per denomination.

        Returns:
            The balance after the deposit.

        Raises:
            UnknownDenomination: If a name is not registered.
            InvalidAmount: If an amount is negative or not an integer.
        """
        validated = self._catalog.validate_amounts(amounts)
        with self._lock:
            for name, amount in validated.items():
                self._vault[name].count = Count(self._vault[name].count + amount)
            return self.balance()

    def deposit_to(self, name: str, amount: int) -> AmountMap:
        """Add `amount` units of a single denomination."""
        return self.deposit({name: amount})

    def has_sufficient_funds(self, amounts: Mapping[str, object]) -> bool:
        """Check whether `withdraw(amounts)` would succeed.

        Raises:
            UnknownDenomination: If a name is not registered.
            InvalidAmount: If an amount is negative or not an integer.
        """
        with self._lock:
            return is_affordable(self._catalog, self.balance(), amounts)

    def withdraw(self, amounts: Mapping[str, object]) -> AmountMap:
        """Remove the value of `amounts`, making change from larger holdings.

        Args:
            amounts: Sparse counts to withdraw per denomination.

        Returns:
            The balance after the withdrawal.

        Raises:
            UnknownDenomination: If a name is not registered.
            InvalidAmount: If an amount is negative or not an integer.
            InsufficientFunds: If the stash holds less value than requested.
        """
        with self._lock:
            updated = withdraw_from(self._catalog, self.balance(), amounts)
            for name, count in updated.items():
                self._vault[name].count = Count(count)
            return self.balance()

    def _unit(self, name: str) -> Unit:
        try:
            return self._vault[DenominationName(name)]
        except KeyError:
            raise UnknownDenomination(name) from None

    def __repr__(self) -> str:
        return f"Stash({self.balance()!r})"
