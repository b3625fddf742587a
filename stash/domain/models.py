"""Domain type definitions for stash.

These NewTypes provide semantic clarity and help with type checking:
- DenominationName: Unique name of a denomination (e.g. "gold")
- Count: Number of units of one denomination on hand
- Value: Worth expressed in base units (the smallest denomination)
"""

from typing import NewType

# Denomination names are the keys of every amount map
DenominationName = NewType("DenominationName", str)

# Units on hand are whole, non-negative numbers
Count = NewType("Count", int)

# All arithmetic across tiers happens in base units to keep it exact
Value = NewType("Value", int)

# Sparse mapping of denomination name to amount; missing names count as 0
AmountMap = dict[DenominationName, int]
