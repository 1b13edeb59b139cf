"""Configuration dataclasses for the sysfetch display tool."""
from dataclasses import dataclass, field
from enum import Enum
from typing import Iterable, Optional, Tuple


class LogoKind(str, Enum):
    """Variants a configured logo can take."""

    OS = "os"
    CUSTOM = "custom"
    DISABLED = "disabled"


@dataclass(frozen=True)
class Logo:
    """Logo shown in the left column of the fetch output."""

    kind: LogoKind = LogoKind.DISABLED
    lines: Tuple[str, ...] = ()

    @classmethod
    def os(cls) -> "Logo":
        """Select the premade logo for the running operating system."""

        return cls(kind=LogoKind.OS)

    @classmethod
    def custom(cls, lines: Iterable[str]) -> "Logo":
        """Use the provided lines, in order, as the logo."""

        return cls(kind=LogoKind.CUSTOM, lines=tuple(str(line) for line in lines))

    @classmethod
    def disabled(cls) -> "Logo":
        return cls(kind=LogoKind.DISABLED)


@dataclass(frozen=True)
class Component:
    """A named piece of text rendered next to the logo."""

    name: str
    icon: Optional[str] = None
    content: str = ""

    @property
    def prefix(self) -> str:
        """Return the icon prefix, treating a missing icon as empty."""

        return self.icon or ""


@dataclass(frozen=True)
class FetchConfig:
    """Fully resolved configuration consumed by the renderer."""

    logo: Logo = field(default_factory=Logo.disabled)
    components: Tuple[Component, ...] = ()
    newline: bool = True
    spacing: int = 1
    oneline: bool = False
