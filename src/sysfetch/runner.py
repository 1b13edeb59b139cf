"""Load the configuration (cached or fresh), render it, and keep the cache current."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass, field
from enum import Enum
from pathlib import Path
from typing import List, Mapping, Optional, TextIO, Tuple

from rich.markup import escape

from src.config_loader import ConfigError, load_config
from src.datatypes import FetchConfig
from src.sysfetch.cache import CacheDecodeError, load_cached_config, write_cached_config
from src.sysfetch.cli_runtime import CLIAppError
from src.sysfetch.facts import LiveSystemFacts
from src.sysfetch.layout import SystemFacts, render, write_lines
from src.sysfetch.preflight import FetchPaths, resolve_paths

logger = logging.getLogger(__name__)

__all__ = [
    "ConfigSource",
    "RunRequest",
    "RunResult",
    "load_fresh_config",
    "render_config",
    "run",
]


class ConfigSource(str, Enum):
    """Describe where the rendered configuration came from."""

    CACHE = "cache"
    CONFIG = "config"


@dataclass(slots=True)
class RunRequest:
    config_path: str | None = None
    use_cache: bool = True
    refresh_cache: bool = False
    no_color: bool = False
    environ: Mapping[str, str] = field(default_factory=lambda: dict(os.environ))
    facts: SystemFacts | None = None
    stream: TextIO | None = None


@dataclass(slots=True)
class RunResult:
    """Outcome of a single fetch."""

    config: FetchConfig
    source: ConfigSource
    lines: List[str]
    cache_path: Path
    cache_written: bool = False


def _fail(message: str, *, code: int = 1) -> CLIAppError:
    return CLIAppError(message, code=code, rich_message=f"[red]{escape(message)}[/red]")


def load_fresh_config(config_path: Path) -> FetchConfig:
    """
    Load the user configuration, translating loader failures into CLI errors.

    Raises:
        CLIAppError: If the file is missing (exit code 2) or invalid.
    """
    try:
        return load_config(config_path)
    except FileNotFoundError as exc:
        raise _fail(f"Config file not found: {config_path}", code=2) from exc
    except ConfigError as exc:
        raise _fail(f"Invalid config {config_path}: {exc}") from exc
    except OSError as exc:
        raise _fail(f"Unable to read config {config_path}: {exc}") from exc


def render_config(config: FetchConfig, facts: SystemFacts) -> List[str]:
    """Render ``config``, reporting unsupported logo selections as CLI errors."""

    try:
        return render(config, facts)
    except NotImplementedError as exc:
        raise _fail(str(exc)) from exc


def _read_cache(paths: FetchPaths) -> Tuple[Optional[FetchConfig], bool]:
    """Return the cached config and whether an existing cache file was unreadable."""

    try:
        config = load_cached_config(paths.cache_path)
    except CacheDecodeError as exc:
        logger.warning("Ignoring unreadable cache %s: %s", paths.cache_path, exc)
        return None, True
    if config is None:
        logger.debug("No cache at %s", paths.cache_path)
    return config, False


def run(request: RunRequest) -> RunResult:
    """
    Display the fetch output for ``request``.

    The cached configuration is used when present and readable; otherwise the user
    configuration is loaded and, when caching is enabled, compiled into the cache after it has
    been displayed. ``refresh_cache`` ignores any existing cache and overwrites it; an unreadable
    cache is replaced the same way.

    Raises:
        CLIAppError: If the configuration cannot be loaded or rendered.
    """
    paths = resolve_paths(request.environ, config_override=request.config_path)

    config: Optional[FetchConfig] = None
    stale_cache = False
    if request.use_cache and not request.refresh_cache:
        config, stale_cache = _read_cache(paths)

    if config is not None:
        source = ConfigSource.CACHE
    else:
        source = ConfigSource.CONFIG
        config = load_fresh_config(paths.config_path)

    facts = request.facts if request.facts is not None else LiveSystemFacts(request.environ)
    lines = render_config(config, facts)
    write_lines(lines, request.stream, no_color=request.no_color)

    cache_written = False
    if source is ConfigSource.CONFIG and request.use_cache:
        try:
            cache_written = write_cached_config(
                paths.cache_path,
                config,
                overwrite=request.refresh_cache or stale_cache,
            )
        except OSError as exc:
            logger.warning("Unable to write cache %s: %s", paths.cache_path, exc)

    return RunResult(
        config=config,
        source=source,
        lines=lines,
        cache_path=paths.cache_path,
        cache_written=cache_written,
    )
