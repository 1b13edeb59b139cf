"""Public shim exposing the sysfetch CLI and library surface."""

from __future__ import annotations

import os
from typing import Callable, Mapping, Optional, TextIO, cast

import src.sysfetch.cli_entry as _cli_entry
from src.config_loader import ConfigError, load_config
from src.datatypes import Component, FetchConfig, Logo
from src.sysfetch import runner
from src.sysfetch.cli_runtime import CLIAppError
from src.sysfetch.layout import SystemFacts, display, render

RunResult = runner.RunResult
RunRequest = runner.RunRequest

__all__ = (
    "run_cli",
    "main",
    "cli",
    "render",
    "display",
    "load_config",
    "Component",
    "FetchConfig",
    "Logo",
    "RunRequest",
    "RunResult",
    "CLIAppError",
    "ConfigError",
)


def run_cli(
    config_path: str | None = None,
    *,
    use_cache: bool = True,
    refresh_cache: bool = False,
    no_color: bool = False,
    environ: Optional[Mapping[str, str]] = None,
    facts: SystemFacts | None = None,
    stream: TextIO | None = None,
) -> RunResult:
    """Delegate to the shared runner module."""
    request = RunRequest(
        config_path=config_path,
        use_cache=use_cache,
        refresh_cache=refresh_cache,
        no_color=no_color,
        environ=dict(os.environ) if environ is None else environ,
        facts=facts,
        stream=stream,
    )
    return runner.run(request)


main = _cli_entry.main
cli = getattr(_cli_entry, "cli", main)


if __name__ == "__main__":
    _entry_point = cast(Callable[[], None], main)
    _entry_point()
