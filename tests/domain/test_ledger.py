"""Tests for stash.domain.ledger.Stash."""

import threading

import pytest

from stash.domain.denomination import default_catalog
from stash.domain.errors import (
    InsufficientFunds,
    InvalidAmount,
    InvalidDenomination,
    UnknownDenomination,
)
from stash.domain.ledger import Stash


def make_stash(**initial: int) -> Stash:
    return Stash(default_catalog(), initial)


class TestConstruction:
    """Tests for Stash construction."""

    def test_defaults_to_empty(self) -> None:
        """Should start every denomination at zero."""
        stash = Stash(default_catalog())

        assert stash.balance() == {"platinum": 0, "gold": 0, "silver": 0, "copper": 0}
        assert stash.total_value() == 0

    def test_seeds_sparse_initial_amounts(self) -> None:
        """Should fill missing denominations with zero."""
        stash = make_stash(gold=1, copper=30)

        assert stash.balance() == {"platinum": 0, "gold": 1, "silver": 0, "copper": 30}

    def test_balance_is_largest_first(self) -> None:
        """Should list denominations in catalog order."""
        stash = make_stash(copper=1, platinum=1)

        assert list(stash.balance()) == ["platinum", "gold", "silver", "copper"]

    def test_rejects_unknown_initial_denomination(self) -> None:
        """Should refuse to seed a denomination missing from the catalog."""
        with pytest.raises(InvalidDenomination) as exc_info:
            make_stash(mithril=1)

        assert exc_info.value.name == "mithril"
        assert isinstance(exc_info.value, UnknownDenomination)

    def test_rejects_negative_initial_amount(self) -> None:
        """Should refuse a negative starting count."""
        with pytest.raises(InvalidAmount):
            make_stash(gold=-1)

    def test_stashes_share_a_catalog(self) -> None:
        """Should reference the catalog rather than copy it."""
        catalog = default_catalog()
        first = Stash(catalog, {"gold": 1})
        second = Stash(catalog, {"silver": 1})

        assert first.catalog is second.catalog
        assert first.balance() != second.balance()


class TestQueries:
    """Tests for value and amount lookups."""

    def test_values_per_denomination(self) -> None:
        """Should report each holding's base-unit value."""
        stash = make_stash(platinum=1, gold=2, silver=3, copper=4)

        assert stash.values() == {"platinum": 1000, "gold": 200, "silver": 30, "copper": 4}
        assert stash.total_value() == 1234

    def test_value_and_amount_of(self) -> None:
        """Should report a single denomination's value and count."""
        stash = make_stash(gold=3)

        assert stash.amount_of("gold") == 3
        assert stash.value_of("gold") == 300
        assert stash.amount_of("silver") == 0

    def test_unknown_lookup(self) -> None:
        """Should reject lookups of unregistered denominations."""
        stash = make_stash()

        with pytest.raises(UnknownDenomination):
            stash.value_of("mithril")
        with pytest.raises(UnknownDenomination):
            stash.amount_of("mithril")

    def test_total_is_sum_of_holdings(self) -> None:
        """Should keep total value equal to the sum of count times multiplier."""
        stash = make_stash(platinum=2, gold=17, silver=3, copper=2)
        stash.withdraw({"gold": 20, "copper": 7})

        catalog = stash.catalog
        assert stash.total_value() == sum(stash.amount_of(d.name) * d.multiplier for d in catalog)

    def test_balance_is_a_snapshot(self) -> None:
        """Should not let callers change holdings through the returned map."""
        stash = make_stash(gold=1)
        snapshot = stash.balance()
        snapshot["gold"] = 99

        assert stash.amount_of("gold") == 1


class TestDeposit:
    """Tests for Stash.deposit."""

    def test_deposit_into_empty_stash(self) -> None:
        """Should hold exactly what was deposited."""
        deposit = {"platinum": 10, "gold": 10, "silver": 10, "copper": 10}
        stash = make_stash(platinum=0, gold=0, silver=0, copper=0)

        stash.deposit(deposit)

        assert stash.balance() == deposit

    def test_deposit_is_not_consolidated(self) -> None:
        """Should keep deposited coins as given, even past a tier's ratio."""
        stash = make_stash(copper=5)

        result = stash.deposit({"copper": 20})

        assert result == {"platinum": 0, "gold": 0, "silver": 0, "copper": 25}

    def test_deposit_to_single_denomination(self) -> None:
        """Should add to one denomination."""
        stash = make_stash(silver=1)

        stash.deposit_to("silver", 4)

        assert stash.amount_of("silver") == 5

    def test_unknown_denomination_is_atomic(self) -> None:
        """Should apply nothing when any name is unregistered."""
        stash = make_stash(gold=1)

        with pytest.raises(UnknownDenomination):
            stash.deposit({"gold": 5, "mithril": 1})

        assert stash.balance() == {"platinum": 0, "gold": 1, "silver": 0, "copper": 0}

    def test_negative_amount_is_atomic(self) -> None:
        """Should apply nothing when any amount is negative."""
        stash = make_stash(gold=1)

        with pytest.raises(InvalidAmount):
            stash.deposit({"gold": 5, "copper": -1})

        assert stash.total_value() == 100


class TestWithdraw:
    """Tests for Stash.withdraw."""

    def test_insufficient_funds(self) -> None:
        """Should raise and leave the balance alone."""
        stash = make_stash(platinum=0, gold=0, silver=0, copper=10)

        with pytest.raises(InsufficientFunds, match="Insufficient funds"):
            stash.withdraw({"platinum": 0, "gold": 0, "silver": 0, "copper": 15})

        assert stash.balance() == {"platinum": 0, "gold": 0, "silver": 0, "copper": 10}

    def test_copper_covers_withdrawal(self) -> None:
        """Should take copper when copper covers the withdrawal."""
        stash = make_stash(copper=30)

        stash.withdraw({"copper": 15})

        assert stash.amount_of("copper") == 15

    def test_breaks_silver(self) -> None:
        """Should use all copper and some silver when copper runs short."""
        stash = make_stash(silver=5, copper=30)

        stash.withdraw({"copper": 45})

        assert stash.amount_of("silver") == 3
        assert stash.amount_of("copper") == 5

    def test_breaks_gold(self) -> None:
        """Should use all copper and silver and some gold."""
        stash = make_stash(gold=1, silver=5, copper=30)

        stash.withdraw({"silver": 5, "copper": 45})

        assert stash.amount_of("gold") == 0
        assert stash.amount_of("silver") == 8
        assert stash.amount_of("copper") == 5

    def test_breaks_platinum(self) -> None:
        """Should use all copper, silver, gold and some platinum."""
        stash = make_stash(platinum=2, gold=2)

        result = stash.withdraw({"silver": 20, "copper": 1000})

        assert result == {"platinum": 1, "gold": 0, "silver": 0, "copper": 0}

    def test_unknown_denomination_is_atomic(self) -> None:
        """Should apply nothing when any name is unregistered."""
        stash = make_stash(gold=1)

        with pytest.raises(UnknownDenomination):
            stash.withdraw({"copper": 5, "mithril": 1})

        assert stash.balance() == {"platinum": 0, "gold": 1, "silver": 0, "copper": 0}

    def test_invalid_amount_is_atomic(self) -> None:
        """Should apply nothing when any amount is invalid."""
        stash = make_stash(gold=1)

        with pytest.raises(InvalidAmount):
            stash.withdraw({"copper": 5, "silver": -2})

        assert stash.total_value() == 100

    def test_deposit_then_withdraw_restores_balance(self) -> None:
        """Should return to a canonical balance after an equal deposit and withdrawal."""
        stash = make_stash(gold=1, silver=2, copper=3)
        before = stash.balance()

        stash.deposit({"platinum": 1, "silver": 4})
        stash.withdraw({"platinum": 1, "silver": 4})

        assert stash.balance() == before
        assert stash.total_value() == 123

    def test_deposit_then_withdraw_restores_value(self) -> None:
        """Should always restore total value, even from an uncanonical balance."""
        stash = make_stash(copper=15)

        stash.deposit({"silver": 1})
        stash.withdraw({"silver": 1})

        assert stash.total_value() == 15


class TestHasSufficientFunds:
    """Tests for Stash.has_sufficient_funds."""

    @pytest.mark.parametrize(
        "amounts",
        [
            {"copper": 180},
            {"copper": 181},
            {"gold": 2},
            {"silver": 18},
            {"gold": 1, "silver": 8},
            {},
        ],
    )
    def test_matches_withdraw_outcome(self, amounts: dict[str, int]) -> None:
        """Should be true exactly when the same withdrawal succeeds."""
        stash = make_stash(gold=1, silver=5, copper=30)
        expected = stash.has_sufficient_funds(amounts)

        try:
            stash.withdraw(amounts)
            succeeded = True
        except InsufficientFunds:
            succeeded = False

        assert expected == succeeded

    def test_does_not_mutate(self) -> None:
        """Should leave holdings unchanged."""
        stash = make_stash(silver=5, copper=30)

        assert stash.has_sufficient_funds({"copper": 45})
        assert stash.balance() == {"platinum": 0, "gold": 0, "silver": 5, "copper": 30}

    def test_unknown_denomination(self) -> None:
        """Should reject unregistered names instead of ignoring them."""
        with pytest.raises(UnknownDenomination):
            make_stash(gold=1).has_sufficient_funds({"mithril": 1})


class TestConcurrency:
    """Tests for sharing a stash between threads."""

    def test_concurrent_withdrawals_never_overdraw(self) -> None:
        """Should apply each withdrawal whole when threads race."""
        stash = make_stash(gold=10)
        failures: list[InsufficientFunds] = []

        def worker() -> None:
            for _ in range(50):
                try:
                    stash.withdraw({"copper": 1})
                except InsufficientFunds as e:
                    failures.append(e)

        threads = [threading.Thread(target=worker) for _ in range(25)]
        for thread in threads:
            thread.start()
        for thread in threads:
            thread.join()

        assert stash.total_value() == 0
        assert len(failures) == 250
