from __future__ import annotations

import pytest

from src.sysfetch.layout.placeholders import PLACEHOLDER_NAMES, lookup_placeholder, resolve_placeholders
from tests.helpers.fake_facts import RecordingFacts


@pytest.mark.parametrize(
    ("name", "expected"),
    [
        ("username", "alice"),
        ("hostname", "box"),
        ("os", "Arch Linux"),
        ("uptime", "1d 2h 3m "),
        ("memory", "1.5 GB/8 GB"),
    ],
)
def test_lookup_known_placeholders(facts: RecordingFacts, name: str, expected: str) -> None:
    assert name in PLACEHOLDER_NAMES
    assert lookup_placeholder(facts, name) == expected


def test_unknown_placeholder_is_dropped(facts: RecordingFacts) -> None:
    assert resolve_placeholders("a{cpu}b", facts) == "ab"
    assert facts.calls == []


def test_every_occurrence_queries_again(facts: RecordingFacts) -> None:
    text = resolve_placeholders("{username}@{hostname} ({username})", facts)

    assert text == "alice@box (alice)"
    assert facts.calls == ["host", "host", "host"]


def test_escaped_brace_is_literal(facts: RecordingFacts) -> None:
    assert resolve_placeholders("\\{os}", facts) == "{os}"
    assert facts.calls == []


def test_unterminated_placeholder_kept(facts: RecordingFacts) -> None:
    assert resolve_placeholders("{os", facts) == "{os"


def test_placeholder_values_are_not_rescanned(facts: RecordingFacts) -> None:
    facts.os_name = "{memory}"

    assert resolve_placeholders("{os}", facts) == "{memory}"
    assert facts.calls == ["os"]


@pytest.mark.parametrize(
    "text",
    ["{username}@{hostname}", "up {uptime}| mem {memory}", "{os} [red]{cpu}", "no directives"],
)
def test_resolving_twice_matches_resolving_once(facts: RecordingFacts, text: str) -> None:
    once = resolve_placeholders(text, facts)

    assert resolve_placeholders(once, facts) == once


def test_color_markup_passes_through_placeholder_pass(facts: RecordingFacts) -> None:
    assert resolve_placeholders("[red]x[_]", facts) == "[red]x[_]"
    assert resolve_placeholders("\\[red]x", facts) == "\\[red]x"
