"""CLI entry point for stash."""

import typer

from stash.commands.admin import add_denomination_command, denominations_command, init_command
from stash.commands.ledger import (
    balance_command,
    check_command,
    convert_command,
    deposit_command,
    withdraw_command,
)

app = typer.Typer(
    name="stash",
    help="stash - A denomination ledger that makes change",
    add_completion=False,
)

BALANCE_HELP = "Opening balance as name=amount pairs (e.g. 'gold=1,silver=5')"


@app.callback()
def main() -> None:
    """stash - A denomination ledger that makes change."""
    pass


@app.command(name="init")
def init(
    force: bool = typer.Option(False, "--force", "-f", help="Overwrite existing config"),
) -> None:
    """Write the default denomination catalog to your config file."""
    init_command(force)


@app.command()
def denominations() -> None:
    """List the denominations in your catalog."""
    denominations_command()


@app.command(name="add-denomination")
def add_denomination(
    name: str = typer.Argument(..., help="Denomination name, e.g. electrum"),
    multiplier: int = typer.Argument(..., help="Worth in base units, e.g. 50"),
) -> None:
    """Add a denomination to your catalog, or change its multiplier."""
    add_denomination_command(name, multiplier)


@app.command()
def balance(
    opening: list[str] = typer.Option(None, "--balance", "-b", help=BALANCE_HELP),
) -> None:
    """Show a balance broken down by denomination."""
    balance_command(opening)


@app.command()
def deposit(
    amounts: list[str] = typer.Argument(..., help="Amounts to deposit as name=amount pairs"),
    opening: list[str] = typer.Option(None, "--balance", "-b", help=BALANCE_HELP),
) -> None:
    """Deposit amounts and show the resulting balance."""
    deposit_command(amounts, opening)


@app.command()
def withdraw(
    amounts: list[str] = typer.Argument(..., help="Amounts to withdraw as name=amount pairs"),
    opening: list[str] = typer.Option(None, "--balance", "-b", help=BALANCE_HELP),
) -> None:
    """Withdraw amounts, breaking larger coins for change as needed."""
    withdraw_command(amounts, opening)


@app.command()
def check(
    amounts: list[str] = typer.Argument(..., help="Amounts to check as name=amount pairs"),
    opening: list[str] = typer.Option(None, "--balance", "-b", help=BALANCE_HELP),
) -> None:
    """Check whether a balance covers the amounts."""
    check_command(amounts, opening)


@app.command()
def convert(
    amount: str = typer.Argument(..., help="Holding to convert, e.g. platinum=1"),
    target: str = typer.Argument(..., help="Denomination to convert into"),
) -> None:
    """Convert a holding into another denomination."""
    convert_command(amount, target)


if __name__ == "__main__":
    app()
