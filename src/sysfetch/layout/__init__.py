"""Rendering engine: directive resolvers, column merging, and output."""

from .engine import DirectiveResolver
from .placeholders import PLACEHOLDER_NAMES, SystemFacts, resolve_placeholders
from .renderer import display, merge_columns, render, render_component, render_logo, write_lines
from .terminal import ANSI_ESCAPE_RE, ANSI_RESET, ansi_sequence, colorize, strip_ansi, visible_length

__all__ = [
    "ANSI_ESCAPE_RE",
    "ANSI_RESET",
    "DirectiveResolver",
    "PLACEHOLDER_NAMES",
    "SystemFacts",
    "ansi_sequence",
    "colorize",
    "display",
    "merge_columns",
    "render",
    "render_component",
    "render_logo",
    "resolve_placeholders",
    "strip_ansi",
    "visible_length",
    "write_lines",
]
