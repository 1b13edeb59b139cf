"""Terminal color directives and ANSI helpers."""
from __future__ import annotations

import re
from typing import Dict, Mapping, Optional

from .engine import DirectiveResolver

ANSI_ESCAPE_RE = re.compile(r"\x1b\[[0-9;]*m")
ANSI_RESET = "\x1b[0m"
RESET_TOKEN = "_"

COLOR_OPENER = "["
COLOR_CLOSER = "]"

_TOKEN_CODES_16: Dict[str, int] = {
    "black": 30,
    "red": 31,
    "green": 32,
    "yellow": 33,
    "blue": 34,
    "magenta": 35,
    "cyan": 36,
    "white": 37,
}


def ansi_sequence(token: str) -> Optional[str]:
    """
    Map a color directive name to its ANSI SGR escape sequence.

    Parameters:
        token (str): Directive name as written between the brackets; matched exactly.

    Returns:
        Optional[str]: The escape sequence, or `None` for names that are not recognized.
    """
    if token == RESET_TOKEN:
        return ANSI_RESET
    code = _TOKEN_CODES_16.get(token)
    if code is None:
        return None
    return f"\x1b[{code}m"


_COLOR_RESOLVER = DirectiveResolver(COLOR_OPENER, COLOR_CLOSER, ansi_sequence)


def colorize(text: str) -> str:
    """
    Replace ``[color]`` directives in ``text`` with ANSI escape sequences.

    The sequence affects the text that follows it; no reset is appended at the end of the
    string, so an unclosed color stays active until a later ``[_]``.
    """
    return _COLOR_RESOLVER.resolve(text)


def strip_ansi(text: str) -> str:
    """Remove SGR escape sequences from ``text``."""

    return ANSI_ESCAPE_RE.sub("", text)


def visible_length(text: str) -> int:
    """
    Compute the visible character length of a string excluding ANSI escape sequences.

    Returns:
        The number of printable characters in `text` after removing ANSI escape sequences.
    """
    return len(strip_ansi(text))


def color_disabled(environ: Mapping[str, str], *, no_color: bool = False) -> bool:
    """Return True when output should be stripped of escape sequences."""

    return no_color or bool(environ.get("NO_COLOR"))
