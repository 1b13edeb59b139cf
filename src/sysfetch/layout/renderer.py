"""Render a fetch configuration into aligned terminal lines."""
from __future__ import annotations

import logging
import sys
from typing import Iterable, List, Optional, Sequence, TextIO

from src.datatypes import Component, FetchConfig, LogoKind

from .placeholders import SystemFacts, resolve_placeholders
from .terminal import colorize, strip_ansi, visible_length

logger = logging.getLogger(__name__)


def render_logo(config: FetchConfig) -> List[str]:
    """
    Colorize the configured logo lines.

    Raises:
        NotImplementedError: If the premade operating-system logo is selected.
    """
    logo = config.logo
    if logo.kind is LogoKind.OS:
        raise NotImplementedError("Premade OS logos are not implemented; use a custom logo")
    if logo.kind is LogoKind.CUSTOM:
        return [colorize(line) for line in logo.lines]
    return []


def render_component(
    component: Component,
    facts: SystemFacts,
    *,
    oneline: bool,
    newline: bool,
) -> List[str]:
    """
    Build the line block for a single component.

    Placeholders in ``content`` are resolved before the result is colorized, so color markup
    inside a fetched value is applied too. The header (icon and name) only takes color markup.
    """
    header = colorize(f"{component.prefix}{component.name}")
    content = colorize(resolve_placeholders(component.content, facts))
    if oneline:
        block = [f"{header}: {content}"]
    else:
        block = [f"{header}:", content]
    if newline:
        block.append("")
    return block


def merge_columns(
    logo_lines: Sequence[str],
    components_text: Sequence[str],
    *,
    spacing: int,
) -> List[str]:
    """
    Merge the logo column and the components column row by row.

    Rows shared by both columns are joined with ``spacing`` spaces. Component rows past the
    end of the logo are indented by the visible width of the logo's last line plus
    ``spacing`` so they stay in the text column. Logo rows without a component row are kept
    as they are, and an empty component row adds nothing to its row. A blank separator row past
    the logo is emitted as ``""`` without the indent (see
    ``tests/layout/test_renderer.py::test_merge_columns_uses_visible_width_for_indent``).

    Parameters:
        logo_lines (Sequence[str]): Colorized logo rows, possibly empty.
        components_text (Sequence[str]): Concatenated component blocks in configuration order.
        spacing (int): Number of spaces between the logo column and the component column.

    Returns:
        List[str]: One string per terminal row.
    """
    output = list(logo_lines)
    gap = " " * spacing
    indent = " " * (visible_length(logo_lines[-1]) + spacing) if logo_lines else ""
    for pos, item in enumerate(components_text):
        if pos >= len(logo_lines):
            output.append(f"{indent}{item}" if item else "")
        elif item:
            output[pos] = f"{output[pos]}{gap}{item}"
    return output


def render(config: FetchConfig, facts: SystemFacts) -> List[str]:
    """
    Render ``config`` into the ordered list of lines shown on the terminal.

    Parameters:
        config (FetchConfig): Configuration produced by the loader or the cache.
        facts (SystemFacts): Source for placeholder values, queried once per placeholder occurrence.

    Returns:
        List[str]: Final output rows, escape sequences embedded.

    Raises:
        NotImplementedError: If the configuration selects the premade operating-system logo.
    """
    logo_lines = render_logo(config)

    components_text: List[str] = []
    for component in config.components:
        components_text.extend(
            render_component(
                component,
                facts,
                oneline=config.oneline,
                newline=config.newline,
            )
        )

    output = merge_columns(logo_lines, components_text, spacing=config.spacing)
    if config.newline and components_text and output[-1] != "":
        output.append("")
    logger.debug(
        "Rendered %d logo rows and %d component rows into %d lines",
        len(logo_lines),
        len(components_text),
        len(output),
    )
    return output


def write_lines(
    lines: Iterable[str],
    stream: Optional[TextIO] = None,
    *,
    no_color: bool = False,
) -> None:
    """Write each line followed by a newline, optionally stripping escape sequences."""

    target = stream if stream is not None else sys.stdout
    for line in lines:
        print(strip_ansi(line) if no_color else line, file=target)


def display(
    config: FetchConfig,
    facts: SystemFacts,
    stream: Optional[TextIO] = None,
    *,
    no_color: bool = False,
) -> None:
    """Render ``config`` and print every line to standard output, in order."""

    write_lines(render(config, facts), stream, no_color=no_color)
