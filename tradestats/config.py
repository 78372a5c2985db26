"""Configuration loading for TradeStats.

Settings live in ``~/.config/tradestats/config.toml``::

    [display]
    unit = "currency"        # or "r"
    currency_symbol = "$"
    recent_months = 6

    [storage]
    db_path = "~/.config/tradestats/tradestats.db"
"""

import logging
from pathlib import Path
from typing import Optional

import toml
from pydantic import BaseModel, Field

from tradestats.formatting import DisplayUnit

logger = logging.getLogger(__name__)

CONFIG_DIR = Path.home() / ".config" / "tradestats"
DEFAULT_CONFIG_PATH = CONFIG_DIR / "config.toml"
DEFAULT_DB_PATH = CONFIG_DIR / "tradestats.db"


class Settings(BaseModel):
    """Display and storage settings."""

    display_unit: DisplayUnit = Field(default=DisplayUnit.CURRENCY, description="Display unit")
    currency_symbol: str = Field(default="$", description="Currency symbol for display")
    recent_months: int = Field(default=6, gt=0, description="Months shown in monthly breakdowns")
    db_path: Path = Field(default=DEFAULT_DB_PATH, description="SQLite database path")

    model_config = {"frozen": True}


def load_settings(config_path: Optional[Path] = None) -> Settings:
    """Load settings from a TOML file.

    Args:
        config_path: Path to the config file. Defaults to
            ``~/.config/tradestats/config.toml``.

    Returns:
        Settings from the file, or defaults if the file is missing or
        unreadable.
    """
    path = config_path or DEFAULT_CONFIG_PATH

    if not path.exists():
        return Settings()

    try:
        config = toml.load(path)
    except (toml.TomlDecodeError, OSError) as e:
        logger.warning("Could not read config %s: %s", path, e)
        return Settings()

    display = config.get("display", {})
    storage = config.get("storage", {})

    values = {}
    if "unit" in display:
        values["display_unit"] = display["unit"]
    if "currency_symbol" in display:
        values["currency_symbol"] = display["currency_symbol"]
    if "recent_months" in display:
        values["recent_months"] = display["recent_months"]
    if "db_path" in storage:
        values["db_path"] = Path(storage["db_path"]).expanduser()

    return Settings(**values)
