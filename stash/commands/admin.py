"""Admin commands for config initialization and catalog editing."""

import sys

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from stash.config import add_denomination, create_default_config, get_config_path, get_denomination, load_catalog
from stash.domain.errors import StashError

console = Console()


def init_command(force: bool = False) -> None:
    """Write the default denomination catalog to the config file."""
    config_path = get_config_path()

    # Guard: refuse to overwrite without force flag
    if config_path.exists() and not force:
        console.print("[red]Initialization failed:[/red]", style="bold")
        console.print(f"  Config already exists: {config_path}")
        console.print("\n[yellow]Use 'stash init --force' to overwrite[/yellow]")
        sys.exit(1)

    try:
        console.print(f"[cyan]Creating config file at {config_path}...[/cyan]")
        create_default_config(config_path)
        console.print("[green]✓[/green] Config file created (permissions: 600)")
    except OSError as e:
        console.print(f"[red]Initialization failed: {e}[/red]", style="bold")
        sys.exit(1)


def denominations_command() -> None:
    """Show the configured denomination catalog."""
    try:
        catalog = load_catalog()
    except (StashError, OSError, ValueError) as e:
        console.print(f"[red]Could not load catalog: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    table = Table(title="Denominations")
    table.add_column("Name", style="cyan")
    table.add_column("Multiplier", justify="right")
    table.add_column("Ratio", justify="right", style="dim")

    for denomination in catalog:
        ratio = catalog.ratio(denomination.name)
        table.add_row(denomination.name, f"{denomination.multiplier:,}", f"{ratio}:1" if ratio else "base")

    console.print(table)


def add_denomination_command(name: str, multiplier: int) -> None:
    """Add a denomination to the configured catalog, or change its multiplier."""
    config_path = get_config_path()
    name = name.strip().lower()

    try:
        if not config_path.exists():
            create_default_config(config_path)
        previous = get_denomination(name, config_path)
        catalog = add_denomination({"name": name, "multiplier": multiplier}, config_path)
    except (StashError, OSError, ValueError) as e:
        console.print(f"[red]Could not update catalog: {escape(str(e))}[/red]", style="bold")
        sys.exit(1)

    if previous is None:
        console.print(f"[green]✓[/green] Added {name} worth {multiplier:,} {catalog.base.name}")
    else:
        console.print(f"[green]✓[/green] Changed {name} from {previous.get('multiplier')} to {multiplier:,}")
    console.print(f"[dim]Catalog: {', '.join(catalog.names())}[/dim]")
