"""Configuration file management for tally."""

import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import tomli_w

DEFAULT_CATEGORIES = ["food", "transport", "salary", "entertainment", "shopping", "bills", "other"]
DEFAULT_CURRENCY = "₹"


@dataclass(frozen=True)
class Settings:
    """Resolved configuration values."""

    categories: list[str] = field(default_factory=lambda: list(DEFAULT_CATEGORIES))
    currency: str = DEFAULT_CURRENCY
    db_path: Path | None = None


def get_xdg_config_home() -> Path:
    """Get XDG config directory, with fallback to ~/.config."""
    xdg_config = os.environ.get("XDG_CONFIG_HOME")
    if xdg_config:
        return Path(xdg_config)
    return Path.home() / ".config"


def get_config_path() -> Path:
    """Get the config file path (XDG compliant).

    Returns:
        Path to the config file.
    """
    return get_xdg_config_home() / "tally" / "config.toml"


def create_default_config(config_path: Path | None = None) -> None:
    """Create default config file with secure permissions.

    Args:
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    config_path.parent.mkdir(parents=True, exist_ok=True)

    default_config: dict[str, Any] = {
        "currency": DEFAULT_CURRENCY,
        "categories": list(DEFAULT_CATEGORIES),
    }

    save_config(default_config, config_path)


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load configuration from TOML file.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Configuration dictionary.

    Raises:
        FileNotFoundError: If config file doesn't exist.
        tomllib.TOMLDecodeError: If the file is not valid TOML.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "rb") as f:
        return tomllib.load(f)


def save_config(config: dict[str, Any], config_path: Path | None = None) -> None:
    """Save configuration to TOML file.

    Args:
        config: Configuration dictionary.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    with open(config_path, "wb") as f:
        tomli_w.dump(config, f)

    os.chmod(config_path, 0o600)


def settings_from_config(config: dict[str, Any]) -> Settings:
    """Resolve a raw config dictionary into Settings.

    Missing keys fall back to defaults.

    Raises:
        ValueError: If a key has the wrong type.
    """
    categories = config.get("categories", DEFAULT_CATEGORIES)
    if not isinstance(categories, list) or not all(isinstance(c, str) and c.strip() for c in categories):
        raise ValueError("'categories' must be a list of non-empty strings")

    currency = config.get("currency", DEFAULT_CURRENCY)
    if not isinstance(currency, str):
        raise ValueError("'currency' must be a string")

    db_path = config.get("db_path")
    if db_path is not None and not isinstance(db_path, str):
        raise ValueError("'db_path' must be a string")

    return Settings(
        categories=[c.strip() for c in categories],
        currency=currency,
        db_path=Path(db_path).expanduser() if db_path else None,
    )


def load_settings(config_path: Path | None = None) -> Settings:
    """Load settings, using defaults when no config file exists.

    Args:
        config_path: Path to config file. If None, uses default location.

    Returns:
        Resolved Settings.

    Raises:
        tomllib.TOMLDecodeError: If the file is not valid TOML.
        ValueError: If a key has the wrong type.
    """
    try:
        config = load_config(config_path)
    except FileNotFoundError:
        return Settings()
    return settings_from_config(config)


def add_category(name: str, config_path: Path | None = None) -> None:
    """Add a category to the config file, creating the file if needed.

    Args:
        name: Category name.
        config_path: Path to config file. If None, uses default location.
    """
    if config_path is None:
        config_path = get_config_path()

    if not config_path.exists():
        create_default_config(config_path)

    config = load_config(config_path)
    categories = config.get("categories", list(DEFAULT_CATEGORIES))

    if name not in categories:
        categories.append(name)

    config["categories"] = categories
    save_config(config, config_path)
