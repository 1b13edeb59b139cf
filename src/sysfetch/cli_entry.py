"""Click entry point for the sysfetch command."""

from __future__ import annotations

import logging
import os
import sys
from pathlib import Path
from typing import Any, Dict, cast

import click
from rich import print
from rich.markup import escape

from src.sysfetch.cache import clear_cache
from src.sysfetch.cli_runtime import CLIAppError
from src.sysfetch.facts import LiveSystemFacts
from src.sysfetch.layout import write_lines
from src.sysfetch.layout.terminal import color_disabled
from src.sysfetch.preflight import resolve_paths
from src.sysfetch.runner import RunRequest, RunResult, load_fresh_config, render_config, run

_LOG_FORMAT = "%(levelname)s %(name)s: %(message)s"


def _configure_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format=_LOG_FORMAT,
        handlers=[logging.StreamHandler(sys.stderr)],
        force=True,
    )


def _run_cli_entry(
    *,
    config_path: str | None,
    no_cache: bool,
    refresh_cache: bool,
    no_color: bool,
) -> RunResult:
    environ = dict(os.environ)
    request = RunRequest(
        config_path=config_path,
        use_cache=not no_cache,
        refresh_cache=refresh_cache,
        no_color=color_disabled(environ, no_color=no_color),
        environ=environ,
    )
    try:
        return run(request)
    except CLIAppError as exc:
        print(exc.rich_message)
        raise click.exceptions.Exit(exc.code) from exc


def _invoke_guarded(params: Dict[str, Any]) -> None:
    try:
        _run_cli_entry(
            config_path=params.get("config_path"),
            no_cache=bool(params.get("no_cache", False)),
            refresh_cache=bool(params.get("refresh_cache", False)),
            no_color=bool(params.get("no_color", False)),
        )
    except SystemExit:
        raise
    except click.exceptions.Exit:
        raise
    except Exception:  # noqa: BLE001
        from rich.console import Console

        Console(stderr=True).print_exception()
        sys.exit(1)


@click.group(invoke_without_command=True)
@click.option(
    "--config",
    "config_path",
    default=None,
    help="Path to config.py or config.toml. Defaults to SYSFETCH_CONFIG or the user config directory.",
)
@click.option("--no-cache", is_flag=True, help="Ignore the compiled cache and do not write one.")
@click.option("--refresh-cache", is_flag=True, help="Reload the config and overwrite the compiled cache.")
@click.option("--no-color", is_flag=True, help="Strip ANSI colour sequences from the output.")
@click.option("--verbose", is_flag=True, help="Log diagnostic details to stderr.")
@click.pass_context
def main(
    ctx: click.Context,
    config_path: str | None,
    no_cache: bool,
    refresh_cache: bool,
    no_color: bool,
    verbose: bool,
) -> None:
    """Show system information next to a logo."""

    _configure_logging(verbose)
    params_map = cast(Dict[str, Any], ctx.ensure_object(dict))
    params_map.update(
        {
            "config_path": config_path,
            "no_cache": no_cache,
            "refresh_cache": refresh_cache,
            "no_color": no_color,
            "verbose": verbose,
        }
    )
    ctx.obj = params_map

    if ctx.invoked_subcommand is None:
        _invoke_guarded(params_map)


@main.command("run")
@click.pass_context
def run_command(ctx: click.Context) -> None:
    """Explicit subcommand to display the fetch output."""

    _invoke_guarded(cast(Dict[str, Any], ctx.ensure_object(dict)))


@main.command("preview")
@click.argument("config_file", type=click.Path(dir_okay=False, path_type=Path))
@click.pass_context
def preview_command(ctx: click.Context, config_file: Path) -> None:
    """Render CONFIG_FILE directly without reading or writing the cache."""

    params = cast(Dict[str, Any], ctx.ensure_object(dict))
    environ = dict(os.environ)
    no_color = color_disabled(environ, no_color=bool(params.get("no_color", False)))
    try:
        lines = render_config(load_fresh_config(config_file), LiveSystemFacts(environ))
    except CLIAppError as exc:
        print(exc.rich_message)
        raise click.exceptions.Exit(exc.code) from exc
    write_lines(lines, no_color=no_color)


@main.group()
@click.pass_context
def cache(ctx: click.Context) -> None:
    """Compiled configuration cache helpers."""

    if ctx.parent is not None:
        ctx.obj = ctx.parent.ensure_object(dict)
    else:
        ctx.obj = ctx.ensure_object(dict)


def _cache_path(ctx: click.Context) -> Path:
    params = cast(Dict[str, Any], ctx.ensure_object(dict))
    try:
        return resolve_paths(os.environ, config_override=params.get("config_path")).cache_path
    except CLIAppError as exc:
        print(exc.rich_message)
        raise click.exceptions.Exit(exc.code) from exc


@cache.command("path")
@click.pass_context
def cache_path_command(ctx: click.Context) -> None:
    """Print the location of the compiled cache."""

    click.echo(str(_cache_path(ctx)))


@cache.command("clear")
@click.pass_context
def cache_clear_command(ctx: click.Context) -> None:
    """Delete the compiled cache so the next run reloads the config."""

    path = _cache_path(ctx)
    if clear_cache(path):
        print(f"[green]Removed cache[/green] {escape(str(path))}")
    else:
        print(f"[yellow]No cache at[/yellow] {escape(str(path))}")


cli = main

__all__ = ["cli", "main"]
