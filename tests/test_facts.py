from __future__ import annotations

import types

import pytest
from pytest import MonkeyPatch

import src.sysfetch.facts as facts_module
from src.sysfetch.facts import UNKNOWN_FACT, LiveSystemFacts


def test_username_from_environment(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr(facts_module.socket, "gethostname", lambda: "box")

    assert LiveSystemFacts({"USER": "alice"}, platform_name="posix").fetch_host() == ("alice", "box")
    assert LiveSystemFacts({"USERNAME": "bob"}, platform_name="nt").fetch_host() == ("bob", "box")


def test_username_falls_back_to_getpass(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr(facts_module.socket, "gethostname", lambda: "box")
    monkeypatch.setattr(facts_module.getpass, "getuser", lambda: "carol")

    assert LiveSystemFacts({"USERNAME": "ignored"}, platform_name="posix").fetch_host()[0] == "carol"


def test_username_unknown_when_getpass_fails(monkeypatch: MonkeyPatch) -> None:
    def _fail() -> str:
        raise OSError("no user")

    monkeypatch.setattr(facts_module.getpass, "getuser", _fail)

    assert LiveSystemFacts({}, platform_name="posix").fetch_host()[0] == UNKNOWN_FACT


@pytest.mark.parametrize(
    ("release", "expected"),
    [
        ({"PRETTY_NAME": "Arch Linux", "NAME": "Arch"}, "Arch Linux"),
        ({"NAME": "Debian"}, "Debian"),
    ],
)
def test_os_from_os_release(monkeypatch: MonkeyPatch, release: dict, expected: str) -> None:
    monkeypatch.setattr(facts_module.platform, "freedesktop_os_release", lambda: release)

    assert LiveSystemFacts({}).fetch_os() == expected


def test_os_falls_back_to_kernel(monkeypatch: MonkeyPatch) -> None:
    def _missing() -> dict:
        raise OSError("no os-release")

    monkeypatch.setattr(facts_module.platform, "freedesktop_os_release", _missing)
    monkeypatch.setattr(facts_module.platform, "system", lambda: "Darwin")
    monkeypatch.setattr(facts_module.platform, "release", lambda: "23.1.0")

    assert LiveSystemFacts({}).fetch_os() == "Darwin 23.1.0"


def test_uptime_uses_boot_time(monkeypatch: MonkeyPatch) -> None:
    monkeypatch.setattr(facts_module.psutil, "boot_time", lambda: 1000.0)
    monkeypatch.setattr(facts_module.time, "time", lambda: 1000.0 + 86400 + 3 * 3600 + 120)

    assert LiveSystemFacts({}).fetch_uptime() == "1d 3h 2m "


def test_memory_reports_used_and_total(monkeypatch: MonkeyPatch) -> None:
    stats = types.SimpleNamespace(used=1_500_000_000, total=8_000_000_000)
    monkeypatch.setattr(facts_module.psutil, "virtual_memory", lambda: stats)

    assert LiveSystemFacts({}).fetch_memory() == "1.5 GB/8 GB"


def test_psutil_failures_become_unknown(monkeypatch: MonkeyPatch) -> None:
    def _boom() -> None:
        raise OSError("denied")

    monkeypatch.setattr(facts_module.psutil, "boot_time", _boom)
    monkeypatch.setattr(facts_module.psutil, "virtual_memory", _boom)

    live = LiveSystemFacts({})
    assert live.fetch_uptime() == UNKNOWN_FACT
    assert live.fetch_memory() == UNKNOWN_FACT
