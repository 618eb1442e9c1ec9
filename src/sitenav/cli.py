"""CLI interface for sitenav.

Command-line tool for serving and inspecting navigation menus.
"""

import logging
import sys
from pathlib import Path

import click

from sitenav.config import Config
from sitenav.core.context import NavigationContext, URLRequestContext
from sitenav.core.loader import NavigationLoader
from sitenav.core.navigation import NavItemDict, render_navigation


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )


def _load_config(config_path: Path | None) -> Config:
    try:
        return Config.load(config_path)
    except ValueError as e:
        raise click.ClickException(f"Invalid configuration: {e}") from e


@click.group()
def cli() -> None:
    """sitenav - Site navigation with automatic highlighting."""


@cli.command()
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover sitenav.toml)",
)
@click.option(
    "--menu-file",
    "-m",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Navigation menu file (overrides config)",
)
@click.option(
    "--host",
    default=None,
    help="Host to bind to (overrides config)",
)
@click.option(
    "--port",
    "-p",
    type=int,
    default=None,
    help="Port to bind to (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Enable verbose output",
)
@click.option(
    "--live-reload/--no-live-reload",
    default=None,
    help="Enable/disable live reload (overrides config, default: enabled)",
)
def serve(
    config_path: Path | None,
    menu_file: Path | None,
    host: str | None,
    port: int | None,
    verbose: bool,
    live_reload: bool | None,
) -> None:
    """Start the navigation server."""
    from sitenav.server import run_server

    _configure_logging(verbose)
    config = _load_config(config_path).with_overrides(
        host=host,
        port=port,
        menu_file=menu_file,
        live_reload_enabled=live_reload,
    )

    click.echo(f"Starting server on {config.server.host}:{config.server.port}")
    click.echo(f"Menu file: {config.navigation.menu_file}")
    if config.live_reload.enabled:
        click.echo("Live reload: enabled")
    else:
        click.echo("Live reload: disabled")

    run_server(config, verbose=verbose)


@cli.command()
@click.argument("uri")
@click.option(
    "--config",
    "-c",
    "config_path",
    type=click.Path(exists=True, path_type=Path),
    default=None,
    help="Path to configuration file (default: auto-discover sitenav.toml)",
)
@click.option(
    "--menu-file",
    "-m",
    type=click.Path(path_type=Path, dir_okay=False),
    default=None,
    help="Navigation menu file (overrides config)",
)
@click.option(
    "--verbose",
    "-v",
    is_flag=True,
    help="Show selection decisions",
)
def inspect(
    uri: str,
    config_path: Path | None,
    menu_file: Path | None,
    verbose: bool,
) -> None:
    """Show the navigation tree as rendered for URI.

    Selected items are marked with '*'.
    """
    if verbose:
        _configure_logging(verbose)
    config = _load_config(config_path).with_overrides(menu_file=menu_file)

    loader = NavigationLoader(config.navigation.menu_file)
    try:
        tree = loader.load()
    except FileNotFoundError as e:
        raise click.ClickException(str(e)) from e
    except ValueError as e:
        raise click.ClickException(f"Invalid navigation definition: {e}") from e

    context = NavigationContext(
        settings=config.navigation.to_settings(),
        request=URLRequestContext(uri),
    )
    items = render_navigation(tree, context)
    if not items:
        click.echo("Navigation is empty")
        return

    _echo_items(items, depth=0)


def _echo_items(items: list[NavItemDict], depth: int) -> None:
    indent = "  " * depth
    for item in items:
        marker = "*" if item["selected"] else "-"
        line = f"{indent}{marker} {item['name']}"
        if item["url"] is not None:
            line += f" ({item['url']})"
        attributes = " ".join(
            f'{name}="{value}"' for name, value in sorted(item["options"].items())
        )
        if attributes:
            line += f" [{attributes}]"
        click.echo(line)
        if "children" in item:
            _echo_items(item["children"], depth + 1)


if __name__ == "__main__":
    cli()
