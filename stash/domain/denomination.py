"""Denominations and the catalog that orders them.

A catalog is an immutable, validated chain of denominations sorted from the
largest multiplier to the smallest. Each multiplier must divide evenly by the
one immediately below it, so any base-unit value has exactly one canonical
breakdown. Catalogs hold no balances and can be shared by any number of
stashes.
"""

from collections.abc import Iterable, Iterator, Mapping
from dataclasses import dataclass, field
from typing import Any

from stash.domain.errors import InvalidAmount, InvalidCatalog, UnknownDenomination
from stash.domain.models import AmountMap, DenominationName, Value

DEFAULT_DENOMINATIONS: tuple[tuple[str, int], ...] = (
    ("platinum", 1000),
    ("gold", 100),
    ("silver", 10),
    ("copper", 1),
)


@dataclass(frozen=True)
class Denomination:
    """Immutable named unit worth `multiplier` base units."""

    name: DenominationName
    multiplier: int

    def __post_init__(self) -> None:
        if not isinstance(self.name, str) or not self.name.strip():
            raise InvalidCatalog(f"Denomination name must be a non-empty string, got {self.name!r}")
        if isinstance(self.multiplier, bool) or not isinstance(self.multiplier, int) or self.multiplier <= 0:
            raise InvalidCatalog(
                f"Multiplier for {self.name} must be a positive integer, got {self.multiplier!r}"
            )


def check_amount(name: str, amount: object) -> int:
    """Validate a single transaction amount.

    Args:
        name: Denomination the amount belongs to (used in the error).
        amount: Candidate amount.

    Returns:
        The amount as an int.

    Raises:
        InvalidAmount: If the amount is not a non-negative integer.
    """
    if isinstance(amount, bool) or not isinstance(amount, int) or amount < 0:
        raise InvalidAmount(name, amount)
    return amount


def validate_chain(denominations: tuple[Denomination, ...]) -> None:
    """Check that descending denominations form an evenly divisible chain.

    Args:
        denominations: Denominations sorted by multiplier, largest first.

    Raises:
        InvalidCatalog: If the chain is empty, names repeat, or a multiplier
            does not divide evenly by the next smaller one.
    """
    if not denominations:
        raise InvalidCatalog("Catalog must contain at least one denomination")

    seen: set[str] = set()
    for denomination in denominations:
        if denomination.name in seen:
            raise InvalidCatalog(f"Duplicate denomination name: {denomination.name}")
        seen.add(denomination.name)

    for higher, lower in zip(denominations, denominations[1:]):
        if higher.multiplier == lower.multiplier:
            raise InvalidCatalog(
                f"{higher.name} and {lower.name} share multiplier {higher.multiplier}"
            )
        if higher.multiplier % lower.multiplier != 0:
            raise InvalidCatalog(
                f"{higher.name} ({higher.multiplier}) is not a whole multiple of "
                f"{lower.name} ({lower.multiplier})"
            )


@dataclass(frozen=True)
class Catalog:
    """Read-only chain of denominations, largest multiplier first."""

    denominations: tuple[Denomination, ...]
    _by_name: dict[str, Denomination] = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        ordered = tuple(sorted(self.denominations, key=lambda d: d.multiplier, reverse=True))
        validate_chain(ordered)
        object.__setattr__(self, "denominations", ordered)
        object.__setattr__(self, "_by_name", {d.name: d for d in ordered})

    @classmethod
    def from_entries(cls, entries: Iterable[Mapping[str, Any]]) -> "Catalog":
        """Build a catalog from `{name, multiplier}` mappings (e.g. parsed TOML).

        Args:
            entries: Iterable of mappings with "name" and "multiplier" keys.

        Returns:
            Validated catalog.

        Raises:
            InvalidCatalog: If an entry is malformed or the chain is invalid.
        """
        denominations = []
        for entry in entries:
            if not isinstance(entry, Mapping) or "name" not in entry or "multiplier" not in entry:
                raise InvalidCatalog(f"Denomination entry needs 'name' and 'multiplier': {entry!r}")
            denominations.append(Denomination(DenominationName(entry["name"]), entry["multiplier"]))
        return cls(tuple(denominations))

    def __iter__(self) -> Iterator[Denomination]:
        return iter(self.denominations)

    def __len__(self) -> int:
        return len(self.denominations)

    def __contains__(self, name: object) -> bool:
        return name in self._by_name

    @property
    def base(self) -> Denomination:
        """The smallest denomination."""
        return self.denominations[-1]

    def names(self) -> list[DenominationName]:
        return [d.name for d in self.denominations]

    def ascending(self) -> tuple[Denomination, ...]:
        return self.denominations[::-1]

    def get(self, name: str) -> Denomination:
        """Look up a denomination by name.

        Raises:
            UnknownDenomination: If the name is not registered.
        """
        try:
            return self._by_name[name]
        except KeyError:
            raise UnknownDenomination(name) from None

    def ratio(self, name: str) -> int | None:
        """How many units of the next smaller tier one unit of `name` is worth.

        Returns:
            The ratio, or None for the base denomination.
        """
        denomination = self.get(name)
        index = self.denominations.index(denomination)
        if index == len(self.denominations) - 1:
            return None
        return denomination.multiplier // self.denominations[index + 1].multiplier

    def zero(self) -> AmountMap:
        """Amount map with every denomination set to 0, largest first."""
        return {d.name: 0 for d in self.denominations}

    def validate_amounts(self, amounts: Mapping[str, object]) -> AmountMap:
        """Check every entry of a sparse amount map against this catalog.

        Args:
            amounts: Mapping of denomination name to amount.

        Returns:
            A plain copy of the validated amounts.

        Raises:
            UnknownDenomination: If a name is not registered.
            InvalidAmount: If an amount is negative or not an integer.
        """
        validated: AmountMap = {}
        for name, amount in amounts.items():
            if name not in self._by_name:
                raise UnknownDenomination(name)
            validated[DenominationName(name)] = check_amount(name, amount)
        return validated

    def to_base_units(self, amounts: Mapping[str, object]) -> Value:
        """Total worth of an amount map in base units.

        Args:
            amounts: Sparse mapping of denomination name to amount.

        Returns:
            Sum of amount * multiplier over the map.
        """
        validated = self.validate_amounts(amounts)
        return Value(sum(amount * self._by_name[name].multiplier for name, amount in validated.items()))

    def breakdown(self, value: int, top: str | None = None) -> AmountMap:
        """Express a base-unit value in canonical form.

        Walks the chain from `top` (or the largest tier) down to the base,
        taking as many whole units of each tier as fit. Tiers above `top`
        are left at 0.

        Args:
            value: Worth in base units.
            top: Largest denomination allowed in the result.

        Returns:
            Full amount map, largest denomination first.

        Raises:
            InvalidAmount: If value is negative, not an integer, or not a
                multiple of the base multiplier.
            UnknownDenomination: If `top` is not registered.
        """
        remaining = check_amount("value", value)
        start = 0 if top is None else self.denominations.index(self.get(top))

        result = self.zero()
        for denomination in self.denominations[start:]:
            result[denomination.name], remaining = divmod(remaining, denomination.multiplier)

        if remaining:
            raise InvalidAmount("value", value)
        return result


def default_catalog() -> Catalog:
    """Build the platinum/gold/silver/copper catalog (10:1 at every step)."""
    return Catalog(
        tuple(Denomination(DenominationName(name), multiplier) for name, multiplier in DEFAULT_DENOMINATIONS)
    )
