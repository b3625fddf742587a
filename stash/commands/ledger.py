"""Ledger commands: balance, deposit, withdraw, check and convert.

These commands are stateless. The opening balance comes from the command
line, the operation runs against an in-memory Stash, and the result is
printed. Nothing is saved.
"""

import sys

from rich.console import Console
from rich.table import Table

from stash.config import load_catalog
from stash.domain.errors import InsufficientFunds, StashError
from stash.domain.ledger import Stash
from stash.domain.models import Count
from stash.domain.unit import Unit
from stash.parsing import format_amounts, parse_amounts

console = Console()


def open_stash(balance: list[str] | None) -> Stash:
    """Build a stash from the configured catalog and a balance argument.

    Exits with status 1 on any parse, catalog or validation error.
    """
    try:
        catalog = load_catalog()
        return Stash(catalog, parse_amounts(balance or []))
    except (StashError, ValueError, OSError) as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)


def render_balance(stash: Stash, title: str = "Balance") -> None:
    """Print counts and values for every denomination plus the total."""
    table = Table(title=title)
    table.add_column("Denomination", style="cyan")
    table.add_column("Count", justify="right")
    table.add_column("Value", justify="right", style="dim")

    values = stash.values()
    for name, count in stash.balance().items():
        table.add_row(name, f"{count:,}", f"{values[name]:,}")

    console.print(table)
    console.print(f"[bold]Total value:[/bold] {stash.total_value():,} {stash.catalog.base.name}")


def balance_command(balance: list[str] | None = None) -> None:
    """Show a balance broken down by denomination."""
    stash = open_stash(balance)
    render_balance(stash)


def deposit_command(amounts: list[str], balance: list[str] | None = None) -> None:
    """Deposit amounts into the opening balance and show the result."""
    stash = open_stash(balance)

    try:
        deposit = parse_amounts(amounts)
        stash.deposit(deposit)
    except (StashError, ValueError) as e:
        console.print(f"[red]Deposit failed: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Deposited {format_amounts(deposit)}")
    render_balance(stash)


def withdraw_command(amounts: list[str], balance: list[str] | None = None) -> None:
    """Withdraw amounts from the opening balance, making change as needed."""
    stash = open_stash(balance)

    try:
        withdrawal = parse_amounts(amounts)
        stash.withdraw(withdrawal)
    except InsufficientFunds as e:
        console.print(f"[red]{e}[/red]", style="bold")
        sys.exit(1)
    except (StashError, ValueError) as e:
        console.print(f"[red]Withdrawal failed: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"[green]✓[/green] Withdrew {format_amounts(withdrawal)}")
    render_balance(stash)


def check_command(amounts: list[str], balance: list[str] | None = None) -> None:
    """Report whether the opening balance covers the amounts."""
    stash = open_stash(balance)

    try:
        request = parse_amounts(amounts)
        sufficient = stash.has_sufficient_funds(request)
        requested = stash.catalog.to_base_units(request)
    except (StashError, ValueError) as e:
        console.print(f"[red]Check failed: {e}[/red]", style="bold")
        sys.exit(1)

    base = stash.catalog.base.name
    if sufficient:
        console.print(f"[green]✓[/green] Sufficient funds: {requested:,} of {stash.total_value():,} {base}")
    else:
        console.print(f"[red]✗[/red] Insufficient funds: {requested:,} of {stash.total_value():,} {base}")
        sys.exit(1)


def convert_command(amount: str, target: str) -> None:
    """Convert a single-denomination holding into a target denomination."""
    try:
        catalog = load_catalog()
        parsed = parse_amounts([amount])
        if len(parsed) != 1:
            raise ValueError(f"Expected exactly one name=amount, got '{amount}'")
        ((name, count),) = catalog.validate_amounts(parsed).items()
        unit = Unit(catalog.get(name), Count(count))
        converted = unit.convert(catalog.get(target.lower()), catalog)
    except (StashError, ValueError, OSError) as e:
        console.print(f"[red]Conversion failed: {e}[/red]", style="bold")
        sys.exit(1)

    console.print(f"{format_amounts(parsed)} = {format_amounts(converted)}")
