"""Live system facts used to fill placeholders."""

from __future__ import annotations

import getpass
import logging
import os
import platform
import socket
import time
from typing import Mapping, Optional, Tuple

import psutil

from src.utils import convert_kilobytes, convert_seconds

logger = logging.getLogger(__name__)

UNKNOWN_FACT = "unknown"


class LiveSystemFacts:
    """Query the running machine for host, OS, uptime, and memory details."""

    def __init__(self, environ: Mapping[str, str], *, platform_name: Optional[str] = None) -> None:
        """
        Bind the facts source to an explicit environment.

        Parameters:
            environ (Mapping[str, str]): Environment variables consulted for the username.
            platform_name (Optional[str]): ``os.name`` style platform tag; defaults to the running platform.
        """
        self._environ = environ
        self._platform_name = platform_name or os.name

    def fetch_host(self) -> Tuple[str, str]:
        """Return ``(username, hostname)``."""

        return self._username(), socket.gethostname()

    def _username(self) -> str:
        key = "USERNAME" if self._platform_name == "nt" else "USER"
        username = self._environ.get(key)
        if username:
            return username
        try:
            return getpass.getuser()
        except (OSError, KeyError):
            logger.debug("Unable to determine username", exc_info=True)
            return UNKNOWN_FACT

    def fetch_os(self) -> str:
        """
        Return a human-readable operating system name.

        Prefers the distribution name from ``os-release`` and falls back to the kernel name and
        release when that file is unavailable.
        """
        try:
            release = platform.freedesktop_os_release()
        except OSError:
            release = {}
        name = release.get("PRETTY_NAME") or release.get("NAME")
        if name:
            return name
        system = platform.system()
        if not system:
            return UNKNOWN_FACT
        version = platform.release()
        return f"{system} {version}".strip()

    def fetch_uptime(self) -> str:
        """Return the time since boot, e.g. ``"3d 4h 12m "``."""

        try:
            booted = psutil.boot_time()
        except (OSError, RuntimeError):
            logger.debug("Unable to read boot time", exc_info=True)
            return UNKNOWN_FACT
        return convert_seconds(time.time() - booted)

    def fetch_memory(self) -> str:
        """Return memory usage as ``"used/total"`` with decimal units."""

        try:
            memory = psutil.virtual_memory()
        except (OSError, RuntimeError):
            logger.debug("Unable to read memory statistics", exc_info=True)
            return UNKNOWN_FACT
        used = convert_kilobytes(memory.used / 1000)
        total = convert_kilobytes(memory.total / 1000)
        return f"{used}/{total}"
