"""Amount-map parsing for stash.

Pure functions turning command-line text like "gold=1,silver=5" into amount
maps and back.
"""

from collections.abc import Iterable, Mapping

from stash.domain.models import AmountMap, DenominationName


def parse_amounts(tokens: Iterable[str]) -> AmountMap:
    """Parse `name=amount` pairs into an amount map.

    Each token may hold several comma-separated pairs. Names are lower-cased
    and amounts for a repeated name are summed.

    Args:
        tokens: Strings such as "gold=1,silver=5" or "copper=45".

    Returns:
        Sparse amount map in the order names first appear.

    Raises:
        ValueError: If a pair is malformed or its amount is not an integer.
    """
    amounts: AmountMap = {}
    for token in tokens:
        for pair in token.split(","):
            pair = pair.strip()
            if not pair:
                continue

            name, sep, raw_amount = pair.partition("=")
            name = name.strip().lower()
            if not sep or not name:
                raise ValueError(f"Expected name=amount, got '{pair}'")

            try:
                amount = int(raw_amount.strip())
            except ValueError:
                raise ValueError(f"Amount for {name} must be a whole number, got '{raw_amount.strip()}'") from None

            key = DenominationName(name)
            amounts[key] = amounts.get(key, 0) + amount

    return amounts


def format_amounts(amounts: Mapping[str, int]) -> str:
    """Render an amount map as "gold=1, silver=5", skipping zero entries.

    Returns:
        The rendered pairs, or "nothing" when every amount is zero.
    """
    parts = [f"{name}={amount}" for name, amount in amounts.items() if amount]
    return ", ".join(parts) if parts else "nothing"
