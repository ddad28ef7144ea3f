"""Command-line interface for songdeck.

Main entry point for the application.
"""
# Created: 2026-10-16

import sys
import logging
from pathlib import Path
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.table import Table

from . import __version__
from .catalog import CatalogError, SongCatalog, default_catalog, load_catalog
from .config.settings import Settings, load_settings
from .models import SongInput
from .validation import is_valid_url, validate_song_input


console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich handler."""
    level = logging.DEBUG if verbose else logging.INFO

    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)]
    )


def resolve_catalog(path: Optional[str], settings: Settings) -> SongCatalog:
    """Load the catalog from ``path``, the settings, or the built-in sample."""
    path = path or settings.catalog.path
    if path:
        return load_catalog(path)
    return default_catalog()


@click.group(invoke_without_command=True)
@click.option('--version', is_flag=True, help='Show version and exit')
@click.option('-v', '--verbose', is_flag=True, help='Enable verbose logging')
@click.option('--config-dir', type=click.Path(),
              default=None, help='Configuration directory')
@click.pass_context
def cli(ctx: click.Context, version: bool, verbose: bool, config_dir: Optional[str]):
    """songdeck - browse, add and edit songs in the terminal."""
    if version:
        click.echo(f"songdeck v{__version__}")
        sys.exit(0)

    setup_logging(verbose)

    ctx.ensure_object(dict)
    ctx.obj['verbose'] = verbose
    ctx.obj['settings'] = load_settings(Path(config_dir) if config_dir else None)

    # If no subcommand, run the main TUI
    if ctx.invoked_subcommand is None:
        ctx.invoke(run)


@cli.command()
@click.option('--catalog', 'catalog_path', type=click.Path(exists=True, dir_okay=False),
              default=None, help='YAML catalog to browse')
@click.option('--strict-validation', is_flag=True,
              help='Report every invalid field instead of the last one')
@click.pass_context
def run(ctx: click.Context, catalog_path: Optional[str] = None, strict_validation: bool = False):
    """Run the songdeck TUI application."""
    settings = ctx.obj['settings']
    if strict_validation:
        settings.validation.accumulate_all_errors = True

    try:
        from .app import SongCatalogApp

        catalog = resolve_catalog(catalog_path, settings)
        app = SongCatalogApp(catalog=catalog, settings=settings)
        app.run()

    except CatalogError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)
    except ImportError as e:
        console.print(f"[red]Error:[/red] Missing dependencies: {e}")
        console.print("Please install all requirements: pip install -e .")
        sys.exit(1)


@cli.command()
@click.argument('catalog_path', type=click.Path(exists=True, dir_okay=False))
@click.option('--strict-validation', is_flag=True,
              help='Report every invalid field instead of the last one')
@click.pass_context
def validate(ctx: click.Context, catalog_path: str, strict_validation: bool):
    """Check every song in a YAML catalog against the song form rules."""
    settings = ctx.obj['settings']
    accumulate_all = strict_validation or settings.validation.accumulate_all_errors

    try:
        catalog = load_catalog(catalog_path)
    except CatalogError as e:
        console.print(f"[red]Error:[/red] {escape(str(e))}")
        sys.exit(1)

    table = Table(title=f"Validation of {catalog_path}")
    table.add_column("Id", style="dim")
    table.add_column("Song")
    table.add_column("Problems")

    invalid = 0
    for song in catalog.songs():
        data = SongInput(
            id=song.id,
            title=song.title.strip(),
            artist=song.artist.strip(),
            last_edited=song.last_edited,
            link=song.link.strip(),
            genre_id=song.genre_id,
        )
        errors = validate_song_input(data, is_valid_url, accumulate_all)
        if errors:
            invalid += 1
            table.add_row(escape(song.id), escape(str(song)), errors.strip())
        elif catalog.genre_name(song.genre_id) is None:
            table.add_row(
                escape(song.id),
                escape(str(song)),
                f"[yellow]Unknown genre: {escape(song.genre_id or '-')}[/yellow]"
            )

    if table.row_count:
        console.print(table)

    if invalid:
        console.print(f"[red]{invalid} of {len(catalog)} songs are invalid[/red]")
        sys.exit(1)

    console.print(f"[green]All {len(catalog)} songs are valid[/green]")


def main():
    """Main entry point."""
    try:
        cli()
    except KeyboardInterrupt:
        console.print("\n[yellow]Interrupted by user[/yellow]")
        sys.exit(0)
    except Exception as e:
        console.print(f"\n[red]Unexpected error:[/red] {e}")
        console.print_exception()
        sys.exit(1)


if __name__ == '__main__':
    main()
