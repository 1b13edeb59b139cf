"""Placeholder directives backed by live system facts."""
from __future__ import annotations

from functools import partial
from typing import Optional, Protocol, Tuple

from .engine import DirectiveResolver

PLACEHOLDER_OPENER = "{"
PLACEHOLDER_CLOSER = "}"
PLACEHOLDER_NAMES: Tuple[str, ...] = ("uptime", "username", "hostname", "os", "memory")


class SystemFacts(Protocol):
    """Source of the values substituted for placeholders."""

    def fetch_host(self) -> Tuple[str, str]: ...

    def fetch_os(self) -> str: ...

    def fetch_uptime(self) -> str: ...

    def fetch_memory(self) -> str: ...


def lookup_placeholder(facts: SystemFacts, name: str) -> Optional[str]:
    """
    Query ``facts`` for the value of a single placeholder.

    Every call issues a fresh query; nothing is cached between occurrences.

    Returns:
        Optional[str]: The fetched value, or `None` when ``name`` is not a known placeholder.
    """
    if name == "uptime":
        return facts.fetch_uptime()
    if name == "username":
        return facts.fetch_host()[0]
    if name == "hostname":
        return facts.fetch_host()[1]
    if name == "os":
        return facts.fetch_os()
    if name == "memory":
        return facts.fetch_memory()
    return None


def resolve_placeholders(text: str, facts: SystemFacts) -> str:
    """Replace ``{name}`` directives in ``text`` with values fetched from ``facts``, left to right."""

    resolver = DirectiveResolver(
        PLACEHOLDER_OPENER,
        PLACEHOLDER_CLOSER,
        partial(lookup_placeholder, facts),
    )
    return resolver.resolve(text)
