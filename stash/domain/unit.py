"""A holding of a single denomination."""

from dataclasses import dataclass

from stash.domain.denomination import Catalog, Denomination
from stash.domain.errors import UnknownDenomination
from stash.domain.models import AmountMap, Count, Value


@dataclass
class Unit:
    """On-hand count of one denomination.

    The denomination is a reference into a shared catalog. The count is
    changed only by the owning stash, which is responsible for keeping it
    non-negative.
    """

    denomination: Denomination
    count: Count = Count(0)

    @property
    def value(self) -> Value:
        """Worth of this holding in base units."""
        return Value(self.count * self.denomination.multiplier)

    def convert(self, target: Denomination, catalog: Catalog) -> AmountMap:
        """Express this holding with `target` as the largest denomination.

        Args:
            target: Denomination to convert into.
            catalog: Catalog both denominations belong to.

        Returns:
            Full amount map: whole units of `target`, any remainder broken
            down over the smaller tiers, every larger tier 0.

        Raises:
            UnknownDenomination: If `target` is not one of the catalog's
                denominations.
        """
        if catalog.get(target.name) != target:
            raise UnknownDenomination(target.name)
        return catalog.breakdown(self.value, top=target.name)
