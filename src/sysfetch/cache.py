"""Compiled configuration cache persisted as MessagePack."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional

import msgpack

from src.datatypes import Component, FetchConfig, Logo, LogoKind

logger = logging.getLogger(__name__)

# Variant indices of the logo union inside the cached record.
_LOGO_TAG_OS = 0
_LOGO_TAG_CUSTOM = 1
_LOGO_TAG_DISABLED = 2

_LOGO_KIND_TO_TAG = {
    LogoKind.OS: _LOGO_TAG_OS,
    LogoKind.CUSTOM: _LOGO_TAG_CUSTOM,
    LogoKind.DISABLED: _LOGO_TAG_DISABLED,
}

_RECORD_FIELDS = 5
_COMPONENT_FIELDS = 3


class CacheDecodeError(RuntimeError):
    """Raised when cached configuration data cannot be decoded safely."""


def _logo_to_record(logo: Logo) -> Dict[int, Optional[List[str]]]:
    tag = _LOGO_KIND_TO_TAG[logo.kind]
    return {tag: list(logo.lines) if logo.kind is LogoKind.CUSTOM else None}


def _logo_from_record(raw: Any) -> Logo:
    if not isinstance(raw, dict) or len(raw) != 1:
        raise CacheDecodeError("logo must be a single-entry map")
    ((tag, payload),) = raw.items()
    if tag == _LOGO_TAG_OS:
        return Logo.os()
    if tag == _LOGO_TAG_DISABLED:
        return Logo.disabled()
    if tag == _LOGO_TAG_CUSTOM:
        if not isinstance(payload, list) or not all(isinstance(line, str) for line in payload):
            raise CacheDecodeError("custom logo lines must be a list of strings")
        return Logo.custom(payload)
    raise CacheDecodeError(f"unknown logo tag {tag!r}")


def _component_from_record(raw: Any, index: int) -> Component:
    if not isinstance(raw, list) or len(raw) != _COMPONENT_FIELDS:
        raise CacheDecodeError(f"component {index} must be a {_COMPONENT_FIELDS}-item array")
    name, icon, content = raw
    if not isinstance(name, str) or not isinstance(content, str):
        raise CacheDecodeError(f"component {index} name and content must be strings")
    if icon is not None and not isinstance(icon, str):
        raise CacheDecodeError(f"component {index} icon must be a string or nil")
    return Component(name=name, icon=icon, content=content)


def encode_config(config: FetchConfig) -> bytes:
    """
    Serialize ``config`` as a positional MessagePack record.

    The record is ``[logo, components, newline, spacing, oneline]`` where ``logo`` is a one-entry
    map from the variant index to its payload and each component is ``[name, icon, content]``.
    """
    record = [
        _logo_to_record(config.logo),
        [[item.name, item.icon, item.content] for item in config.components],
        config.newline,
        config.spacing,
        config.oneline,
    ]
    return msgpack.packb(record, use_bin_type=True)


def decode_config(payload: bytes) -> FetchConfig:
    """
    Rebuild a ``FetchConfig`` from bytes produced by :func:`encode_config`.

    Raises:
        CacheDecodeError: If the payload is not valid MessagePack or does not have the record shape.
    """
    try:
        record = msgpack.unpackb(payload, raw=False, strict_map_key=False)
    except (ValueError, TypeError, msgpack.exceptions.UnpackException) as exc:
        raise CacheDecodeError(f"Invalid cache payload: {exc}") from exc
    if not isinstance(record, list) or len(record) != _RECORD_FIELDS:
        raise CacheDecodeError(f"cache record must be a {_RECORD_FIELDS}-item array")
    logo_raw, components_raw, newline, spacing, oneline = record
    if not isinstance(components_raw, list):
        raise CacheDecodeError("components must be an array")
    if not isinstance(newline, bool) or not isinstance(oneline, bool):
        raise CacheDecodeError("newline and oneline must be booleans")
    if isinstance(spacing, bool) or not isinstance(spacing, int) or spacing < 0:
        raise CacheDecodeError("spacing must be a non-negative integer")
    return FetchConfig(
        logo=_logo_from_record(logo_raw),
        components=tuple(
            _component_from_record(item, index) for index, item in enumerate(components_raw)
        ),
        newline=newline,
        spacing=spacing,
        oneline=oneline,
    )


def load_cached_config(path: Path) -> FetchConfig | None:
    """
    Load the cached configuration stored at ``path``.

    Returns:
        FetchConfig | None: The decoded configuration, or ``None`` when no cache file exists.

    Raises:
        CacheDecodeError: If the cache exists but cannot be read or decoded.
    """
    if not path.exists():
        return None
    try:
        payload = path.read_bytes()
    except OSError as exc:
        raise CacheDecodeError(f"Unable to read cache {path}: {exc}") from exc
    config = decode_config(payload)
    logger.debug("Loaded cached configuration from %s", path)
    return config


def write_cached_config(path: Path, config: FetchConfig, *, overwrite: bool = False) -> bool:
    """
    Persist ``config`` to ``path`` atomically.

    An existing cache is left untouched unless ``overwrite`` is set.

    Returns:
        bool: ``True`` when the file was written.
    """
    if path.exists() and not overwrite:
        logger.debug("Cache %s already exists; leaving it in place", path)
        return False
    payload = encode_config(config)
    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(".tmp")
    tmp_path.write_bytes(payload)
    tmp_path.replace(path)
    logger.debug("Wrote %d byte cache to %s", len(payload), path)
    return True


def clear_cache(path: Path) -> bool:
    """Delete the cache file at ``path``; return whether a file was removed."""

    try:
        path.unlink()
    except FileNotFoundError:
        return False
    logger.debug("Removed cache %s", path)
    return True
