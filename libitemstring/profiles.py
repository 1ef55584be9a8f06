"""User settings stored as TOML in the click app dir."""
from __future__ import annotations

import sys
from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

import click
from loguru import logger

from libitemstring.config import ITEM_LEVEL_FORMAT, TOOLTIP_MAXLINE_LEVEL
from libitemstring.errors import SettingsError

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

LEVEL_ADJUST_TABLES = ("upgraded", "timewarped", "timewarped_warforged")


@dataclass
class Settings:
    item_level_format: str = ITEM_LEVEL_FORMAT
    tooltip_max_lines: int = TOOLTIP_MAXLINE_LEVEL
    all_hyperlinks: bool = False
    catalog: Optional[Path] = None
    level_adjust: dict[str, dict[int, int]] = field(default_factory=dict)


def get_settings_path() -> Path:
    """Return the TOML settings file path via click.get_app_dir."""
    return Path(click.get_app_dir("libitemstring")) / "config.toml"


def _parse_level_adjust(data) -> dict[str, dict[int, int]]:
    if not isinstance(data, dict):
        raise SettingsError("level_adjust must be a table of level tables")
    tables: dict[str, dict[int, int]] = {}
    for name, entries in data.items():
        if name not in LEVEL_ADJUST_TABLES:
            raise SettingsError(
                f"Unknown level_adjust table '{name}'. Expected one of: {', '.join(LEVEL_ADJUST_TABLES)}"
            )
        try:
            tables[name] = {int(k): int(v) for k, v in entries.items()}
        except (AttributeError, TypeError, ValueError):
            raise SettingsError(f"level_adjust.{name} must map integer keys to integer levels") from None
    return tables


def load_settings(path: Optional[Path] = None) -> Settings:
    """Read TOML settings. Returns defaults if the file is missing."""
    path = path or get_settings_path()
    if not path.exists():
        return Settings()

    with open(path, "rb") as f:
        try:
            data = tomllib.load(f)
        except tomllib.TOMLDecodeError as e:
            raise SettingsError(f"Invalid settings file {path}: {e}") from e

    settings = Settings()
    fmt = data.get("item_level_format", settings.item_level_format)
    if not isinstance(fmt, str) or "%d" not in fmt:
        raise SettingsError("item_level_format must be a string containing '%d'")
    settings.item_level_format = fmt

    max_lines = data.get("tooltip_max_lines", settings.tooltip_max_lines)
    if isinstance(max_lines, bool) or not isinstance(max_lines, int) or max_lines < 2:
        raise SettingsError("tooltip_max_lines must be an integer of at least 2")
    settings.tooltip_max_lines = max_lines

    all_hyperlinks = data.get("all_hyperlinks", False)
    if not isinstance(all_hyperlinks, bool):
        raise SettingsError("all_hyperlinks must be true or false")
    settings.all_hyperlinks = all_hyperlinks

    catalog = data.get("catalog")
    if catalog is not None and not isinstance(catalog, str):
        raise SettingsError("catalog must be a path string")
    if catalog:
        settings.catalog = Path(catalog)
    settings.level_adjust = _parse_level_adjust(data.get("level_adjust", {}))

    logger.debug("Loaded settings from {}", path)
    return settings


def save_settings(settings: Settings, path: Optional[Path] = None) -> Path:
    """Write settings to TOML using literal strings for paths."""
    path = path or get_settings_path()
    path.parent.mkdir(parents=True, exist_ok=True)

    fmt = settings.item_level_format.replace("\\", "\\\\").replace('"', '\\"')
    lines: list[str] = [
        f"item_level_format = \"{fmt}\"",
        f"tooltip_max_lines = {settings.tooltip_max_lines}",
        f"all_hyperlinks = {'true' if settings.all_hyperlinks else 'false'}",
    ]
    if settings.catalog:
        # Use TOML literal strings (single quotes) so backslashes aren't escapes
        lines.append(f"catalog = '{settings.catalog}'")
    lines.append("")

    for name in LEVEL_ADJUST_TABLES:
        entries = settings.level_adjust.get(name)
        if not entries:
            continue
        lines.append(f"[level_adjust.{name}]")
        for key, level in sorted(entries.items()):
            lines.append(f"\"{key}\" = {level}")
        lines.append("")

    path.write_text("\n".join(lines), encoding="utf-8")
    return path
