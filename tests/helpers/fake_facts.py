"""System facts double that records every query."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List, Tuple


@dataclass
class RecordingFacts:
    username: str = "alice"
    hostname: str = "box"
    os_name: str = "Arch Linux"
    uptime: str = "1d 2h 3m "
    memory: str = "1.5 GB/8 GB"
    calls: List[str] = field(default_factory=list)

    def fetch_host(self) -> Tuple[str, str]:
        self.calls.append("host")
        return self.username, self.hostname

    def fetch_os(self) -> str:
        self.calls.append("os")
        return self.os_name

    def fetch_uptime(self) -> str:
        self.calls.append("uptime")
        return self.uptime

    def fetch_memory(self) -> str:
        self.calls.append("memory")
        return self.memory
