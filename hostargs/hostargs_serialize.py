from __future__ import annotations

import json
import tomllib
from pathlib import Path
from typing import Any, Optional

import yaml


# --------------------------
# Helpers
# --------------------------

def _norm_text(data: bytes | bytearray | str) -> str:
    if isinstance(data, (bytes, bytearray)):
        # utf-8-sig drops a leading BOM.
        return bytes(data).decode('utf-8-sig', errors='replace')
    if isinstance(data, str):
        return data
    return str(data)


_SUFFIXES = {
    '.json': 'json',
    '.yaml': 'yaml',
    '.yml': 'yaml',
    '.toml': 'toml',
}


def detect_format(data_hint: Optional[str] = None,
                  path: Optional[str | Path] = None) -> Optional[str]:
    """
    Returns a canonical format name among: 'json', 'yaml', 'toml'.
    Uses the file suffix first, then simple data sniffing.
    """
    if path:
        fmt = _SUFFIXES.get(Path(path).suffix.lower())
        if fmt:
            return fmt

    if data_hint is not None:
        s = data_hint.lstrip()
        if s.startswith('{') or s.startswith('['):
            return 'json'
    return None


def _load_json(text: str) -> Any:
    try:
        return json.loads(text)
    except json.JSONDecodeError as e:
        raise ValueError(f"invalid JSON data: {e}") from e


def _load_yaml(text: str) -> Any:
    try:
        return yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ValueError(f"invalid YAML data: {e}") from e


def _load_toml(text: str) -> Any:
    try:
        return tomllib.loads(text)
    except tomllib.TOMLDecodeError as e:
        raise ValueError(f"invalid TOML data: {e}") from e


_LOADERS = {
    'json': _load_json,
    'yaml': _load_yaml,
    'toml': _load_toml,
}


# --------------------------
# Public API
# --------------------------

def deserialize(data: bytes | bytearray | str,
                *,
                fmt: Optional[str] = None,
                path: Optional[str | Path] = None) -> Any:
    """
    Convert configuration or step-table text to native Python structures.
    Supported fmt: 'json', 'yaml', 'toml'. If fmt is None, the format comes
    from the suffix of `path`, then from sniffing the text, and finally YAML.
    Text that only looks like JSON (a YAML flow mapping such as `{a: 1}`)
    is read as YAML. Raises ValueError when the text does not parse.
    """
    text = _norm_text(data)
    if fmt is not None:
        loader = _LOADERS.get(fmt.lower())
        if loader is None:
            raise ValueError(f"Unsupported serialization format: {fmt!r}")
        return loader(text)

    declared = detect_format(path=path)
    if declared:
        return _LOADERS[declared](text)
    if detect_format(text) == 'json':
        try:
            return json.loads(text)
        except json.JSONDecodeError:
            pass
    return _load_yaml(text)


def serialize(value: Any, *, fmt: str, pretty: bool = True) -> str:
    """
    Convert a native Python value into a textual representation.
    - fmt: 'json' | 'yaml'
    """
    f = (fmt or '').lower()
    if f == 'json':
        return json.dumps(value, ensure_ascii=False, indent=2 if pretty else None)
    if f == 'yaml':
        return yaml.safe_dump(value, sort_keys=False)
    if f == 'toml':
        # tomllib is read-only
        raise ValueError("TOML serialization is not supported")
    raise ValueError(f"Unsupported serialization format: {fmt!r}")


__all__ = [
    "deserialize",
    "serialize",
    "detect_format",
]
