from __future__ import annotations

import io

import pytest

from src.datatypes import Component, FetchConfig, Logo
from src.sysfetch.layout.renderer import display, merge_columns, render, render_component, render_logo
from src.sysfetch.layout.terminal import colorize
from tests.helpers.fake_facts import RecordingFacts

_ICON_COMPONENT = Component(name="Component with an icon", icon="* ", content="Some component text")
_LOGO = Logo.custom(["S O M E    ", "C U S T O M", "L O G O    "])


def test_custom_logo_beside_multiline_component(facts: RecordingFacts) -> None:
    config = FetchConfig(logo=_LOGO, components=(_ICON_COMPONENT,), newline=True, spacing=1, oneline=False)

    assert render(config, facts) == [
        "S O M E     * Component with an icon:",
        "C U S T O M Some component text",
        "L O G O    ",
        "",
    ]


def test_oneline_component_without_logo(facts: RecordingFacts) -> None:
    config = FetchConfig(components=(_ICON_COMPONENT,), newline=True, spacing=1, oneline=True)

    assert render(config, facts) == ["* Component with an icon: Some component text", ""]


def test_empty_config_renders_nothing(facts: RecordingFacts) -> None:
    assert render(FetchConfig(), facts) == []


def test_logo_only_renders_colorized_logo(facts: RecordingFacts) -> None:
    config = FetchConfig(logo=Logo.custom(["[red]##[_]", "##"]))

    assert render(config, facts) == ["\x1b[31m##\x1b[0m", "##"]


def test_os_logo_is_not_implemented(facts: RecordingFacts) -> None:
    with pytest.raises(NotImplementedError):
        render(FetchConfig(logo=Logo.os()), facts)


def test_render_logo_disabled_is_empty() -> None:
    assert render_logo(FetchConfig(logo=Logo.disabled())) == []


def test_component_rows_past_logo_are_indented(facts: RecordingFacts) -> None:
    config = FetchConfig(
        logo=Logo.custom(["[blue]ab[_]"]),
        components=(Component(name="One", content="x"), Component(name="Two", content="y")),
        newline=False,
        spacing=2,
    )

    assert render(config, facts) == [
        "\x1b[34mab\x1b[0m  One:",
        "    x",
        "    Two:",
        "    y",
    ]


def test_newline_separates_components(facts: RecordingFacts) -> None:
    config = FetchConfig(
        components=(Component(name="A", content="1"), Component(name="B", content="2")),
        newline=True,
    )

    assert render(config, facts) == ["A:", "1", "", "B:", "2", ""]


def test_placeholders_resolved_before_colors(facts: RecordingFacts) -> None:
    facts.os_name = "[red]Linux"
    component = Component(name="[green]OS", icon="> ", content="{os} [blue]{hostname}")

    block = render_component(component, facts, oneline=True, newline=False)

    assert block == ["> \x1b[32mOS: \x1b[31mLinux \x1b[34mbox"]
    assert facts.calls == ["os", "host"]


def test_header_does_not_resolve_placeholders(facts: RecordingFacts) -> None:
    block = render_component(Component(name="{os}", content=""), facts, oneline=False, newline=False)

    assert block == ["{os}:", ""]
    assert facts.calls == []


def test_missing_icon_renders_as_empty_prefix(facts: RecordingFacts) -> None:
    block = render_component(Component(name="Host", content="{username}"), facts, oneline=True, newline=True)

    assert block == ["Host: alice", ""]


def test_merge_columns_uses_visible_width_for_indent() -> None:
    logo = ["\x1b[31mXYZ\x1b[0m"]

    assert merge_columns(logo, ["a", "b", "", "c"], spacing=1) == [
        "\x1b[31mXYZ\x1b[0m a",
        "    b",
        "",
        "    c",
    ]


def test_merge_columns_keeps_logo_rows_without_components() -> None:
    assert merge_columns(["1", "2", "3"], ["a"], spacing=0) == ["1a", "2", "3"]


def test_spacing_zero_joins_columns(facts: RecordingFacts) -> None:
    config = FetchConfig(
        logo=Logo.custom(["||"]),
        components=(Component(name="N", content="c"),),
        newline=False,
        spacing=0,
        oneline=True,
    )

    assert render(config, facts) == ["||N: c"]


def test_display_writes_lines_in_order(facts: RecordingFacts) -> None:
    stream = io.StringIO()
    config = FetchConfig(components=(Component(name="[red]A", content="b"),), oneline=True)

    display(config, facts, stream)

    assert stream.getvalue() == "\x1b[31mA: b\n\n"


def test_display_strips_color_when_requested(facts: RecordingFacts) -> None:
    stream = io.StringIO()
    config = FetchConfig(components=(Component(name="[red]A", content="b"),), oneline=True, newline=False)

    display(config, facts, stream, no_color=True)

    assert stream.getvalue() == "A: b\n"


def test_color_pass_leaves_placeholder_braces_alone() -> None:
    assert colorize("{os}") == "{os}"
    assert colorize("\\{os}") == "\\{os}"


def test_escaped_color_bracket_survives_both_passes(facts: RecordingFacts) -> None:
    block = render_component(Component(name="n", content="\\[red]x"), facts, oneline=True, newline=False)

    assert block == ["n: [red]x"]
    assert facts.calls == []


def test_escaped_placeholder_brace_survives_both_passes(facts: RecordingFacts) -> None:
    block = render_component(Component(name="n", content="\\{os}"), facts, oneline=True, newline=False)

    assert block == ["n: {os}"]
    assert facts.calls == []
