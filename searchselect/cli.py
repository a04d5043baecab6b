"""searchselect CLI - search partner API records from the terminal."""

import asyncio
import logging
from typing import Optional

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from .config import ConfigManager
from .control import call_fetch
from .errors import SearchSelectError
from .sources import FETCHERS, PartnerApiClient, build_fetcher
from .theme import PALETTE

console = Console()

KINDS = click.Choice(sorted(FETCHERS))


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(message)s",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
    )


def _client(config: ConfigManager) -> PartnerApiClient:
    try:
        return PartnerApiClient(config.get_api_config())
    except SearchSelectError as e:
        raise click.ClickException(str(e))


def _fetcher_options(kind: str, exclude: Optional[str]) -> dict:
    if exclude is None:
        return {}
    if kind != "partners":
        raise click.UsageError("--exclude only applies to partners")
    return {"exclude_id": exclude}


@click.group()
@click.option("--config", "config_path", type=click.Path(dir_okay=False), default=None,
              help="Path to config.yaml")
@click.option("--verbose", "-v", is_flag=True, help="Log diagnostics to stderr")
@click.pass_context
def cli(ctx, config_path, verbose):
    """searchselect - search-as-you-type pickers for the partner API.

    Pick partners, addresses or countries interactively, or run one-shot
    searches.
    """
    _setup_logging(verbose)
    ctx.obj = ConfigManager(config_path)


@cli.command()
@click.argument("kind", type=KINDS)
@click.option("--value", help="Preselect this value (e.g. when editing a record)")
@click.option("--min-length", type=int, default=None, help="Minimum characters before searching")
@click.option("--debounce", type=int, default=None, help="Quiet period in milliseconds")
@click.option("--exclude", default=None, help="Partner id to leave out of the results")
@click.pass_obj
def pick(config, kind, value, min_length, debounce, exclude):
    """Interactively pick one KIND record and print its value."""
    from .app import PickerApp

    try:
        ac_config = config.get_autocomplete_config(
            min_search_length=min_length, debounce_ms=debounce,
        )
    except SearchSelectError as e:
        raise click.ClickException(str(e))

    fetcher_options = _fetcher_options(kind, exclude)
    client = _client(config)
    app = PickerApp(
        build_fetcher(kind, client, **fetcher_options),
        title=f"Select {kind}",
        config=ac_config,
        value=value,
        on_shutdown=client.aclose,
    )
    option = app.run()
    if option is None:
        raise SystemExit(1)
    click.echo(option.value)


@cli.command()
@click.argument("kind", type=KINDS)
@click.argument("term", default="")
@click.option("--exclude", default=None, help="Partner id to leave out of the results")
@click.pass_obj
def find(config, kind, term, exclude):
    """Search KIND records matching TERM and print them as a table."""
    fetcher_options = _fetcher_options(kind, exclude)

    async def run():
        async with _client(config) as client:
            return await call_fetch(build_fetcher(kind, client, **fetcher_options), term.strip())

    try:
        options = asyncio.run(run())
    except SearchSelectError as e:
        raise click.ClickException(str(e))

    if not options:
        console.print(config.get_autocomplete_config().no_results_text, style="dim")
        return

    table = Table(title=f"{kind} matching '{term}'" if term else kind,
                  title_style=f"bold {PALETTE.accent}")
    table.add_column("Value", style=PALETTE.text_dim, no_wrap=True)
    table.add_column("Label", style=PALETTE.text_bright)
    for option in options:
        table.add_row(option.value, option.label)
    console.print(table)


@cli.command(name="config")
@click.pass_obj
def show_config(config):
    """Show configuration."""
    console.print(f"Config file: {config.config_path}")
    try:
        api = config.get_api_config()
        console.print(f"API base URL: {api.base_url}")
    except SearchSelectError as e:
        console.print(str(e), style=PALETTE.error)
    console.print(f"Autocomplete: {config.get_autocomplete_config()}")


if __name__ == "__main__":
    cli()
