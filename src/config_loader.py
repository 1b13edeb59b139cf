"""Configuration loader that parses TOML files or evaluates Python config scripts."""

from __future__ import annotations

import logging
import runpy
import tomllib
from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

from .datatypes import Component, FetchConfig, Logo, LogoKind

logger = logging.getLogger(__name__)

SCRIPT_SUFFIXES = (".py",)
TOML_SUFFIXES = (".toml",)

_TOP_LEVEL_KEYS = frozenset({"logo", "components", "newline", "spacing", "oneline"})
_LOGO_KEYS = frozenset({"kind", "lines"})
_COMPONENT_KEYS = frozenset({"name", "icon", "content"})

# Tags accepted by the list form of ``logo`` (``["Custom", line, ...]``).
_LOGO_TAGS = {
    "os": LogoKind.OS,
    "custom": LogoKind.CUSTOM,
    "disabled": LogoKind.DISABLED,
}


class ConfigError(ValueError):
    """Raised when the configuration file is malformed or fails validation."""


def _coerce_bool(value: Any, dotted_key: str) -> bool:
    """Return a bool, coercing simple 0/1 representations when necessary."""

    if isinstance(value, bool):
        return value
    if isinstance(value, int) and value in (0, 1):
        return bool(value)
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in {"0", "1"}:
            return normalized == "1"
        if normalized in {"true", "false"}:
            return normalized == "true"
    raise ConfigError(f"{dotted_key} must be a boolean (use true/false).")


def _coerce_spacing(value: Any) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        raise ConfigError("spacing must be an integer")
    if value < 0:
        raise ConfigError("spacing must be >= 0")
    return value


def _coerce_str(value: Any, dotted_key: str) -> str:
    if not isinstance(value, str):
        raise ConfigError(f"{dotted_key} must be a string")
    return value


def _reject_unknown_keys(raw: Mapping[str, Any], allowed: frozenset[str], name: str) -> None:
    unknown = sorted(str(key) for key in raw if key not in allowed)
    if unknown:
        raise ConfigError(f"Invalid keys in [{name}]: {', '.join(unknown)}")


def _parse_logo_lines(value: Any, dotted_key: str) -> Tuple[str, ...]:
    if isinstance(value, str) or not isinstance(value, Sequence):
        raise ConfigError(f"{dotted_key} must be a list of strings")
    return tuple(_coerce_str(line, f"{dotted_key}[{index}]") for index, line in enumerate(value))


def _parse_logo(value: Any, *, current: Optional[Logo] = None) -> Logo:
    """
    Coerce a logo description into a ``Logo``.

    Accepts an existing ``Logo``, a table with ``kind`` and ``lines``, or the tagged list form
    ``["Custom", line, ...]`` / ``["Os"]`` / ``["Disabled"]``. In the list form an unrecognised
    tag leaves ``current`` unchanged.

    Raises:
        ConfigError: If the value has none of the accepted shapes.
    """
    if isinstance(value, Logo):
        return value
    if isinstance(value, Mapping):
        _reject_unknown_keys(value, _LOGO_KEYS, "logo")
        kind_raw = value.get("kind", LogoKind.CUSTOM.value if "lines" in value else LogoKind.DISABLED.value)
        kind_text = _coerce_str(kind_raw, "logo.kind").strip().lower()
        kind = _LOGO_TAGS.get(kind_text)
        if kind is None:
            raise ConfigError(
                f"logo.kind must be one of: {', '.join(member.value for member in LogoKind)}"
            )
        if kind is LogoKind.CUSTOM:
            return Logo.custom(_parse_logo_lines(value.get("lines", []), "logo.lines"))
        if "lines" in value:
            raise ConfigError(f"logo.lines is only valid with kind = \"{LogoKind.CUSTOM.value}\"")
        return Logo(kind=kind)
    if isinstance(value, Sequence) and not isinstance(value, str):
        if not value:
            raise ConfigError("logo list must start with a variant tag")
        tag = _coerce_str(value[0], "logo[0]").strip().lower()
        kind = _LOGO_TAGS.get(tag)
        if kind is None:
            logger.debug("Ignoring unknown logo tag %r", value[0])
            return current if current is not None else Logo.disabled()
        if kind is LogoKind.CUSTOM:
            return Logo.custom(_parse_logo_lines(list(value[1:]), "logo"))
        return Logo(kind=kind)
    raise ConfigError("logo must be a table, a tagged list, or a Logo")


def _parse_component(value: Any, index: int) -> Component:
    """Coerce one component entry; an empty icon is stored as no icon."""

    if isinstance(value, Component):
        return value
    context = f"components[{index}]"
    if not isinstance(value, Mapping):
        raise ConfigError(f"{context} must be a table")
    _reject_unknown_keys(value, _COMPONENT_KEYS, context)
    if "name" not in value:
        raise ConfigError(f"Missing keys for {context}: name")
    name = _coerce_str(value["name"], f"{context}.name")
    icon_raw = value.get("icon")
    icon = None if icon_raw is None else _coerce_str(icon_raw, f"{context}.icon")
    content = _coerce_str(value.get("content", ""), f"{context}.content")
    return Component(name=name, icon=icon or None, content=content)


def _parse_components(value: Any) -> Tuple[Component, ...]:
    if isinstance(value, (str, Mapping)) or not isinstance(value, Sequence):
        raise ConfigError("components must be a list")
    return tuple(_parse_component(item, index) for index, item in enumerate(value))


def build_config(raw: Mapping[str, Any]) -> FetchConfig:
    """
    Validate a raw mapping and build a ``FetchConfig`` from it.

    Missing keys fall back to the ``FetchConfig`` defaults; a missing logo means no logo.

    Raises:
        ConfigError: If a key is unknown or a value has the wrong type.
    """
    _reject_unknown_keys(raw, _TOP_LEVEL_KEYS, "root")
    defaults = FetchConfig()
    logo = _parse_logo(raw["logo"]) if "logo" in raw else defaults.logo
    components = _parse_components(raw.get("components", []))
    newline = _coerce_bool(raw["newline"], "newline") if "newline" in raw else defaults.newline
    spacing = _coerce_spacing(raw["spacing"]) if "spacing" in raw else defaults.spacing
    oneline = _coerce_bool(raw["oneline"], "oneline") if "oneline" in raw else defaults.oneline
    return FetchConfig(
        logo=logo,
        components=components,
        newline=newline,
        spacing=spacing,
        oneline=oneline,
    )


class ConfigBuilder:
    """
    Mutable configuration exposed to user scripts as the ``cfg`` global.

    Scripts assign ``cfg.logo``, ``cfg.components``, ``cfg.newline``, ``cfg.spacing`` and
    ``cfg.oneline``; values are validated when assigned, and ``build`` freezes the result.
    """

    def __init__(self) -> None:
        defaults = FetchConfig()
        self._logo = defaults.logo
        self._components: List[Component] = list(defaults.components)
        self.newline = defaults.newline
        self.spacing = defaults.spacing
        self.oneline = defaults.oneline

    @property
    def logo(self) -> List[str]:
        """Return the logo in its tagged list form, e.g. ``["Custom", "line", ...]``."""

        tag = {
            LogoKind.OS: "Os",
            LogoKind.CUSTOM: "Custom",
            LogoKind.DISABLED: "Disabled",
        }[self._logo.kind]
        return [tag, *self._logo.lines]

    @logo.setter
    def logo(self, value: Any) -> None:
        self._logo = _parse_logo(value, current=self._logo)

    @property
    def components(self) -> List[Dict[str, str]]:
        """Return the components as plain mappings; an absent icon reads as ``""``."""

        return [
            {"name": item.name, "icon": item.prefix, "content": item.content}
            for item in self._components
        ]

    @components.setter
    def components(self, value: Any) -> None:
        self._components = list(_parse_components(value))

    def build(self) -> FetchConfig:
        """Validate the remaining scalar options and return an immutable configuration."""

        return FetchConfig(
            logo=self._logo,
            components=tuple(self._components),
            newline=_coerce_bool(self.newline, "newline"),
            spacing=_coerce_spacing(self.spacing),
            oneline=_coerce_bool(self.oneline, "oneline"),
        )


def _read_utf8(path: Path) -> str:
    raw_bytes = path.read_bytes()
    if raw_bytes.startswith(b"\xef\xbb\xbf"):
        raw_bytes = raw_bytes[3:]
    try:
        return raw_bytes.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise ConfigError("Configuration file must be UTF-8 encoded") from exc


def load_toml_config(path: Path) -> FetchConfig:
    """
    Load and validate a configuration from a TOML file.

    Returns:
        FetchConfig: The validated configuration.

    Raises:
        ConfigError: If the file is not UTF-8, TOML parsing fails, or any validation rule is violated.
    """
    try:
        raw = tomllib.loads(_read_utf8(path))
    except tomllib.TOMLDecodeError as exc:
        raise ConfigError(f"Failed to parse TOML: {exc}") from exc
    return build_config(raw)


def evaluate_config_script(path: Path) -> FetchConfig:
    """
    Execute a Python configuration script and collect the ``cfg`` it populates.

    The script runs with a fresh ``ConfigBuilder`` bound to the global name ``cfg``, with
    ``Logo`` and ``Component`` also in scope. Rebinding ``cfg`` to a plain mapping is accepted too.

    Raises:
        ConfigError: If the script raises, or leaves ``cfg`` in an invalid state.
    """
    builder = ConfigBuilder()
    logger.debug("Evaluating config script %s", path)
    try:
        namespace = runpy.run_path(
            str(path),
            init_globals={"cfg": builder, "Logo": Logo, "Component": Component},
            run_name="__sysfetch_config__",
        )
    except ConfigError:
        raise
    except Exception as exc:  # noqa: BLE001
        raise ConfigError(f"Failed to execute {path.name}: {exc}") from exc
    result = namespace.get("cfg", builder)
    if isinstance(result, ConfigBuilder):
        return result.build()
    if isinstance(result, FetchConfig):
        return result
    if isinstance(result, Mapping):
        return build_config(result)
    raise ConfigError(f"{path.name} must leave `cfg` as the provided config object")


def load_config(path: str | Path) -> FetchConfig:
    """
    Load a configuration from ``path``, dispatching on its suffix.

    ``.py`` files are evaluated as scripts; ``.toml`` files are parsed as TOML.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        ConfigError: If the suffix is unsupported or the configuration is invalid.
    """
    config_path = Path(path)
    if not config_path.is_file():
        raise FileNotFoundError(str(config_path))
    suffix = config_path.suffix.lower()
    if suffix in SCRIPT_SUFFIXES:
        return evaluate_config_script(config_path)
    if suffix in TOML_SUFFIXES:
        return load_toml_config(config_path)
    raise ConfigError(
        f"Unsupported config file type '{config_path.suffix}'; use .py or .toml"
    )
