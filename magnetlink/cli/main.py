"""Command line interface for magnetlink."""

from __future__ import annotations

import json

import click
from rich.console import Console
from rich.table import Table
from rich.text import Text

from magnetlink.config.config import init_config
from magnetlink.core.magnet import (
    MagnetLink,
    TorrentMagnetLink,
    parse_magnet_link,
    parse_torrent_magnet_link,
)
from magnetlink.models import Config, LogLevel, ParseOptions
from magnetlink.utils.exceptions import (
    ConfigurationError,
    MagnetLinkError,
    WrongMagnetLinkTypeError,
)
from magnetlink.utils.logging_config import get_logger, log_exception, setup_logging

logger = get_logger(__name__)

# Number of -v flags -> log level
VERBOSITY_LEVELS: dict[int, LogLevel] = {
    1: LogLevel.INFO,
    2: LogLevel.DEBUG,
}


class NotATorrentError(click.ClickException):
    """Raised when a valid magnet link carries no btih exact topic."""

    exit_code = 3


def _parse_options(ctx: click.Context, strict: bool | None) -> ParseOptions:
    config: Config = ctx.obj["config"]
    if strict is None:
        return config.parse
    return ParseOptions(strict=strict)


def _link_table(link: MagnetLink, title: str) -> Table:
    table = Table(title=title)
    table.add_column("Parameter", style="cyan")
    table.add_column("Value", style="green")

    for key, values in link.to_dict().items():
        if isinstance(values, dict):
            for name, sub_values in values.items():
                for value in sub_values:
                    table.add_row(f"{key}.{name}", Text(value))
            continue
        for value in values:
            table.add_row(key, Text(str(value)))

    return table


@click.group()
@click.option(
    "--config",
    "-c",
    type=click.Path(exists=True, dir_okay=False),
    help="Configuration file path",
)
@click.option(
    "--verbose",
    "-v",
    count=True,
    help="Increase verbosity (-v: info, -vv: debug)",
)
@click.pass_context
def cli(ctx: click.Context, config: str | None, verbose: int) -> None:
    """Inspect magnet links."""
    try:
        config_manager = init_config(config)
    except ConfigurationError as e:
        raise click.ClickException(str(e)) from e

    observability = config_manager.config.observability
    if verbose:
        level = VERBOSITY_LEVELS[min(verbose, max(VERBOSITY_LEVELS))]
        observability = observability.model_copy(update={"log_level": level})
    setup_logging(observability)

    ctx.ensure_object(dict)
    ctx.obj["config"] = config_manager.config


@cli.command()
@click.argument("uri")
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Reject unknown parameters (default from config)",
)
@click.option("--json", "as_json", is_flag=True, help="Print JSON instead of a table")
@click.pass_context
def parse(ctx: click.Context, uri: str, strict: bool | None, as_json: bool) -> None:
    """Parse a magnet URI and show its parameters."""
    options = _parse_options(ctx, strict)
    try:
        link = parse_magnet_link(uri, options)
    except MagnetLinkError as e:
        log_exception(logger, e, "Failed to parse magnet link")
        raise click.ClickException(e.message) from e

    if as_json:
        click.echo(json.dumps(link.to_dict(), indent=2))
        return
    Console().print(_link_table(link, "Magnet link"))


@cli.command()
@click.argument("uri")
@click.option(
    "--strict/--no-strict",
    default=None,
    help="Reject unknown parameters (default from config)",
)
@click.pass_context
def torrent(ctx: click.Context, uri: str, strict: bool | None) -> None:
    """Decode the BitTorrent info-hashes of a magnet URI."""
    options = _parse_options(ctx, strict)
    try:
        torrent_link: TorrentMagnetLink = parse_torrent_magnet_link(uri, options)
    except WrongMagnetLinkTypeError as e:
        raise NotATorrentError(e.message) from e
    except MagnetLinkError as e:
        log_exception(logger, e, "Failed to decode magnet link")
        raise click.ClickException(e.message) from e

    logger.info("Decoded %d info-hash(es)", len(torrent_link.info_hashes))

    table = Table(title=Text(torrent_link.display_name or "Torrent"))
    table.add_column("Algorithm", style="cyan")
    table.add_column("Info-hash", style="green")
    for info_hash in torrent_link.info_hashes:
        table.add_row(info_hash.algorithm.value, info_hash.hex())
    Console().print(table)


def main() -> None:
    """Console script entry point."""
    cli(obj={})


if __name__ == "__main__":
    main()
