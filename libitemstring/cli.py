"""Click CLI for inspecting item strings."""
from __future__ import annotations

from pathlib import Path
from typing import Optional

import click

from libitemstring.errors import LibItemStringError
from libitemstring.library import LibItemString, __version__
from libitemstring.log import configure_logging
from libitemstring.profiles import (
    Settings,
    get_settings_path,
    load_settings,
    save_settings,
)


class Context:
    """Holds settings and the library instance derived from them."""

    def __init__(self, all_links: bool = False):
        self._all_links = all_links
        self._settings: Settings | None = None
        self._library: LibItemString | None = None

    @property
    def settings(self) -> Settings:
        if self._settings is None:
            try:
                self._settings = load_settings()
            except LibItemStringError as e:
                raise click.UsageError(str(e)) from e
            if self._all_links:
                self._settings.all_hyperlinks = True
        return self._settings

    @property
    def library(self) -> LibItemString:
        if self._library is None:
            self._library = LibItemString(__version__, settings=self.settings)
        return self._library


pass_ctx = click.make_pass_decorator(Context)


def _load_catalog(ctx: Context, catalog: Optional[Path]):
    from libitemstring.catalog import JsonCatalog

    path = catalog or ctx.settings.catalog
    if path is None:
        raise click.UsageError(
            "No item catalog provided. Either:\n"
            "  1. Pass --catalog <path> explicitly\n"
            "  2. Run 'lis init' and set a default catalog"
        )
    try:
        return JsonCatalog.load(path)
    except LibItemStringError as e:
        raise click.ClickException(str(e)) from e


def _parse_key(key: str):
    try:
        return int(key)
    except ValueError:
        return key


@click.group()
@click.option("--all-links", is_flag=True, help="Decode any hyperlink type, not only item:")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
@click.version_option(version=__version__, prog_name="lis")
@click.pass_context
def cli(ctx, all_links: bool, verbose: bool):
    """lis - inspect item strings.

    Decode item links into named fields, look up single fields, re-encode
    them and resolve item levels against an item catalog.
    """
    configure_logging(verbose)
    ctx.ensure_object(dict)
    ctx.obj = Context(all_links=all_links)


@cli.command()
@click.argument("link")
@pass_ctx
def parse(ctx: Context, link: str):
    """Show every field of an item link with its name."""
    record = ctx.library.new(link)
    if not record:
        click.echo("No item string found.")
        return

    click.echo(f"Link type: {record.link_type}")
    click.echo(f"Bonus IDs: {record.num_bonus_ids}")
    click.echo()
    click.echo(f"{'Index':>5}  {'Field':<22}  {'Value':>10}")
    click.echo("-" * 41)
    for index, name, value in record.named_fields():
        click.echo(f"{index:>5}  {name:<22}  {value:>10}")


@cli.command()
@click.argument("link")
@click.argument("key")
@pass_ctx
def field(ctx: Context, link: str, key: str):
    """Look up one field by name (itemID, bonusID2) or index (1, -1)."""
    record = ctx.library.new(link)
    value = record.get(_parse_key(key))
    if value is None:
        click.echo("(absent)")
        click.get_current_context().exit(1)
    click.echo(value)


@cli.command()
@click.argument("link")
@pass_ctx
def encode(ctx: Context, link: str):
    """Decode an item link and print it re-encoded."""
    record = ctx.library.new(link)
    if not record:
        click.echo("No item string found.")
        click.get_current_context().exit(1)
    click.echo(record.encode())


@cli.command()
@click.argument("index", type=int)
@click.option("--bonus-ids", "num_bonus_ids", type=int, default=None,
              help="Number of bonusIDs, to name fields after the bonus run")
def name(index: int, num_bonus_ids: Optional[int]):
    """Print the field name at a 1-based index."""
    click.echo(LibItemString.get_field_name(index, num_bonus_ids))


@cli.command()
@click.argument("link")
@click.option("--catalog", "-c", type=click.Path(exists=True, dir_okay=False, path_type=Path),
              default=None, help="Item catalog JSON (default: from settings)")
@click.option("--heuristic", is_flag=True,
              help="Use the level adjustment tables instead of a tooltip scan")
@pass_ctx
def level(ctx: Context, link: str, catalog: Optional[Path], heuristic: bool):
    """Resolve the true item level of an item link."""
    from libitemstring.tooltip.scan import ScanTip, StaticTooltipSurface

    item_catalog = _load_catalog(ctx, catalog)
    lib = ctx.library

    if heuristic:
        result = lib.get_upgraded_item_level(lib.new(link), item_catalog)
    else:
        lib.scan_tip = ScanTip(StaticTooltipSurface.from_catalog(item_catalog))
        result = lib.get_true_item_level(link)

    if result is None:
        click.echo("Item level unknown.")
        click.get_current_context().exit(1)
    click.echo(result)


@cli.command()
@click.argument("links_file", type=click.Path(exists=True, dir_okay=False, path_type=Path))
@click.option("--format", "fmt", type=click.Choice(["json", "csv"]), default="json")
@click.option("--output", "-o", "output_path", type=click.Path(), default=None,
              help="Write output to a file instead of stdout")
@pass_ctx
def export(ctx: Context, links_file: Path, fmt: str, output_path: Optional[str]):
    """Decode one item link per line and export the named fields."""
    from libitemstring.export.csv_export import export_csv
    from libitemstring.export.json_export import export_json

    lines = links_file.read_text(encoding="utf-8").splitlines()
    records = [ctx.library.new(line) for line in lines if line.strip()]

    output = export_json(records) if fmt == "json" else export_csv(records)
    if output_path:
        Path(output_path).write_text(output, encoding="utf-8")
        click.echo(f"Exported {len(records)} item strings to {output_path}")
    else:
        click.echo(output)


@cli.command()
def init():
    """Write the settings file (interactive)."""
    try:
        current = load_settings()
    except LibItemStringError as e:
        click.echo(f"Ignoring invalid settings: {e}")
        current = Settings()

    settings = Settings(level_adjust=current.level_adjust)
    while True:
        fmt = click.prompt("Item level format", default=current.item_level_format)
        if "%d" in fmt:
            break
        click.echo("The format must contain %d where the level number appears.")
    settings.item_level_format = fmt
    settings.tooltip_max_lines = click.prompt(
        "Tooltip lines to scan", default=current.tooltip_max_lines, type=click.IntRange(min=2))
    settings.all_hyperlinks = click.confirm(
        "Decode every hyperlink type?", default=current.all_hyperlinks)

    catalog = click.prompt("Default item catalog (blank for none)",
                           default=str(current.catalog or ""), show_default=False).strip()
    settings.catalog = Path(catalog.strip('"').strip("'")) if catalog else None

    saved_path = save_settings(settings)
    click.echo(f"\nSettings saved to {saved_path}")


@cli.command("settings")
@pass_ctx
def show_settings(ctx: Context):
    """Show the active settings."""
    s = ctx.settings
    click.echo(f"File:              {get_settings_path()}")
    click.echo(f"Item level format: {s.item_level_format}")
    click.echo(f"Tooltip lines:     {s.tooltip_max_lines}")
    click.echo(f"All hyperlinks:    {'yes' if s.all_hyperlinks else 'no'}")
    click.echo(f"Catalog:           {s.catalog or '(none)'}")
    for table, entries in s.level_adjust.items():
        click.echo(f"level_adjust.{table}: {len(entries)} entries")
