"""Configuration file management for stash.

The config file holds the denomination catalog. It never holds balances.
"""

import os
import tomllib
from pathlib import Path
from typing import Any

import tomli_w

from stash.domain.denomination import DEFAULT_DENOMINATIONS, Catalog, default_catalog
from stash.domain.errors import InvalidCatalog


def get_xdg_config_home() -> Path:
    """Base directory for per-user config: $XDG_CONFIG_HOME, else ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Location of the catalog file.

    Returns:
        <config home>/stash/config.toml
    """
    return get_xdg_config_home() / "stash" / "config.toml"


def default_entries() -> list[dict[str, Any]]:
    """The platinum/gold/silver/copper catalog as config table entries."""
    return [{"name": name, "multiplier": multiplier} for name, multiplier in DEFAULT_DENOMINATIONS]


def create_default_config(config_path: Path | None = None) -> None:
    """Write the default coin catalog, readable by the owner only.

    Args:
        config_path: Where to write. If None, uses get_config_path().
    """
    save_config({"denominations": default_entries()}, config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Read the raw config table.

    Args:
        config_path: File to read. If None, uses get_config_path().

    Returns:
        Parsed TOML document.

    Raises:
        FileNotFoundError: If the file is missing.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Write the config table, creating its directory and restricting it to mode 600.

    Args:
        config: Document to write.
        config_path: Destination. If None, uses get_config_path().
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def load_catalog(config_path: Path | None = None) -> Catalog:
    """Build the denomination catalog from the config file.

    Without a config file the default platinum/gold/silver/copper catalog
    is used.

    Args:
        config_path: File to read. If None, uses get_config_path().

    Returns:
        Validated catalog.

    Raises:
        InvalidCatalog: If the configured denominations are malformed.
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        return default_catalog()

    config = load_config(config_path)
    return Catalog.from_entries(config.get("denominations", []))


def get_denomination(name: str, config_path: Path | None = None) -> dict[str, Any] | None:
    """Find the configured entry for one denomination.

    Args:
        name: Denomination name.
        config_path: File to read. If None, uses get_config_path().

    Returns:
        The `{name, multiplier}` table, or None if the name is not configured.
    """
    config = load_config(config_path)

    for entry in config.get("denominations", []):
        if isinstance(entry, dict) and entry.get("name") == name:
            return entry

    return None


def add_denomination(entry: dict[str, Any], config_path: Path | None = None) -> Catalog:
    """Add a denomination to the catalog, or change an existing one's multiplier.

    The edited chain is validated before anything is written, so a rejected
    entry leaves the file as it was.

    Args:
        entry: Table with "name" and "multiplier".
        config_path: File to edit. If None, uses get_config_path().

    Returns:
        The catalog as saved.

    Raises:
        FileNotFoundError: If the config file is missing.
        InvalidCatalog: If an existing entry is not a table, or the edit
            would break the evenly divisible chain.
    """
    config = load_config(config_path)
    entries = config.get("denominations", [])

    for existing in entries:
        if not isinstance(existing, dict):
            raise InvalidCatalog(f"Denomination entry must be a table: {existing!r}")

    for i, existing in enumerate(entries):
        if existing.get("name") == entry.get("name"):
            entries[i] = entry
            break
    else:
        entries.append(entry)

    catalog = Catalog.from_entries(entries)

    config["denominations"] = entries
    save_config(config, config_path)
    return catalog
