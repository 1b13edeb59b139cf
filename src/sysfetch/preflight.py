"""Resolve the configuration directory and the files that live in it."""

from __future__ import annotations

import logging
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Final, Mapping, Optional, Tuple

from rich.markup import escape

from src.sysfetch.cli_runtime import CLIAppError

logger = logging.getLogger(__name__)

CONFIG_ENV_VAR: Final[str] = "SYSFETCH_CONFIG"
CONFIG_DIR_ENV_VAR: Final[str] = "SYSFETCH_CONFIG_DIR"
APP_DIRNAME: Final[str] = "sysfetch"
CONFIG_FILENAMES: Final[Tuple[str, ...]] = ("config.py", "config.toml")
CACHE_FILENAME: Final[str] = "config.msgpack"

__all__ = [
    "APP_DIRNAME",
    "CACHE_FILENAME",
    "CONFIG_DIR_ENV_VAR",
    "CONFIG_ENV_VAR",
    "CONFIG_FILENAMES",
    "FetchPaths",
    "resolve_config_dir",
    "resolve_paths",
]


@dataclass(frozen=True)
class FetchPaths:
    """Locations of the user configuration and its compiled cache."""

    config_dir: Path
    config_path: Path
    cache_path: Path


def _home_dir(environ: Mapping[str, str], platform_name: str) -> Path:
    keys = ("USERPROFILE", "HOME") if platform_name == "nt" else ("HOME",)
    for key in keys:
        value = environ.get(key)
        if value:
            return Path(value)
    message = f"Unable to locate the home directory; set {' or '.join(keys)}"
    raise CLIAppError(message, code=2, rich_message=f"[red]{escape(message)}[/red]")


def resolve_config_dir(
    environ: Mapping[str, str],
    *,
    platform_name: Optional[str] = None,
) -> Path:
    """
    Return the directory holding the user configuration.

    Precedence: ``SYSFETCH_CONFIG_DIR``, then ``$XDG_CONFIG_HOME/sysfetch``, then
    ``~/.config/sysfetch``.

    Raises:
        CLIAppError: If no home directory can be determined.
    """
    override = environ.get(CONFIG_DIR_ENV_VAR)
    if override:
        return Path(override).expanduser()
    xdg = environ.get("XDG_CONFIG_HOME")
    if xdg:
        return Path(xdg) / APP_DIRNAME
    home = _home_dir(environ, platform_name or os.name)
    return home / ".config" / APP_DIRNAME


def resolve_paths(
    environ: Mapping[str, str],
    *,
    config_override: Optional[str | Path] = None,
    platform_name: Optional[str] = None,
) -> FetchPaths:
    """
    Resolve the configuration file and cache locations.

    An explicit ``config_override`` (or ``SYSFETCH_CONFIG``) wins and its cache sits beside it.
    Otherwise the first of ``config.py`` and ``config.toml`` that exists in the configuration
    directory is used; when neither exists the script name is reported.

    Parameters:
        environ (Mapping[str, str]): Environment variables to consult.
        config_override (Optional[str | Path]): Path supplied on the command line.
        platform_name (Optional[str]): ``os.name`` style platform tag; defaults to the running platform.

    Returns:
        FetchPaths: Resolved directory, configuration file, and cache file.
    """
    explicit = config_override or environ.get(CONFIG_ENV_VAR)
    if explicit:
        config_path = Path(explicit).expanduser()
        config_dir = config_path.parent
    else:
        config_dir = resolve_config_dir(environ, platform_name=platform_name)
        candidates = [config_dir / name for name in CONFIG_FILENAMES]
        config_path = next((path for path in candidates if path.is_file()), candidates[0])
    paths = FetchPaths(
        config_dir=config_dir,
        config_path=config_path,
        cache_path=config_dir / CACHE_FILENAME,
    )
    logger.debug("Resolved config=%s cache=%s", paths.config_path, paths.cache_path)
    return paths
