"""
Process-wide settings and declarative step tables.

Settings come from built-in defaults, then an optional YAML/JSON/TOML file
(named by HOSTARGS_CONFIG or passed explicitly), then the environment
(HOSTARGS_DEBUG). Step tables are lists of plain entries, typically loaded
from the same kind of file, that `load_steps` turns into Steps.
"""
from __future__ import annotations

import os
import sys
from collections.abc import Mapping, MutableMapping
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional

from hostargs.hostargs_serialize import deserialize, serialize

CONFIG_ENV = "HOSTARGS_CONFIG"
DEBUG_ENV = "HOSTARGS_DEBUG"

DEFAULT_MESSAGES: Dict[str, str] = {
    "missing": "argument {{position}}: required {{expected}} argument missing",
    "type_mismatch": "argument {{position}}: type mismatch, expected {{expected}} but got {{actual}}",
    "coercion": "argument {{position}}: cannot convert {{actual}} to {{expected}}: {{reason}}",
    "native_type": "argument {{position}}: expected native {{expected}} object but got {{actual}}",
    "capacity": "argument {{position}}: string of {{size}} bytes exceeds capacity of {{capacity}} bytes",
}


@dataclass
class Settings:
    debug: bool = False
    messages: Dict[str, str] = field(default_factory=lambda: dict(DEFAULT_MESSAGES))


def _env_flag(value: Optional[str]) -> bool:
    return (value or "").strip().lower() not in ("", "0", "false", "no", "off")


def settings_from_data(data: Any) -> Settings:
    """Build Settings from a decoded config mapping, rejecting unknown keys."""
    if data is None:
        return Settings()
    if not isinstance(data, Mapping):
        raise ValueError(f"settings must be a mapping, not {type(data).__name__}")
    unknown = set(data) - {"debug", "messages"}
    if unknown:
        raise ValueError(f"unknown settings: {', '.join(sorted(unknown))}")
    settings = Settings(debug=bool(data.get("debug", False)))
    messages = data.get("messages") or {}
    if not isinstance(messages, Mapping):
        raise ValueError("settings 'messages' must be a mapping of error kind to template")
    for kind, template in messages.items():
        if kind not in DEFAULT_MESSAGES:
            raise ValueError(f"unknown message kind: {kind!r}")
        if not isinstance(template, str):
            raise ValueError(f"message template for {kind!r} must be a string")
        settings.messages[kind] = template
    return settings


def load_settings(path: Optional[str | Path] = None) -> Settings:
    path = path or os.environ.get(CONFIG_ENV)
    if path:
        p = Path(path)
        data = deserialize(p.read_bytes(), path=p)
        settings = settings_from_data(data)
    else:
        settings = Settings()
    env_debug = os.environ.get(DEBUG_ENV)
    if env_debug is not None:
        settings.debug = _env_flag(env_debug)
    return settings


def dump_settings(settings: Settings, fmt: str = "yaml") -> str:
    return serialize({"debug": settings.debug, "messages": dict(settings.messages)}, fmt=fmt)


_settings: Optional[Settings] = None


def get_settings() -> Settings:
    global _settings
    if _settings is None:
        _settings = load_settings()
    return _settings


def configure(settings: Optional[Settings] = None, **overrides: Any) -> Settings:
    """Install settings for the process. Keyword overrides apply on top."""
    global _settings
    base = settings or get_settings()
    messages = dict(base.messages)
    messages.update(overrides.pop("messages", None) or {})
    _settings = settings_from_data({"debug": overrides.pop("debug", base.debug), "messages": messages, **overrides})
    return _settings


def reset_settings():
    global _settings
    _settings = None


def _dbg(*parts):
    if get_settings().debug:
        print("[DBG]", *parts, file=sys.stderr)


# ===================================================================
# Step tables
# ===================================================================

_STEP_OPTIONS = {
    "number": {"coerce", "optional"},
    "boolean": {"coerce", "optional"},
    "string": {"capacity", "coerce", "optional", "truncate"},
    "function": {"optional"},
    "native": {"descriptor", "optional"},
    "ignore": set(),
    "custom": {"transform", "data"},
}


def normalize_entry(entry: Any, position: int) -> Dict[str, Any]:
    """Expand a bare kind name and check an entry's keys."""
    if isinstance(entry, str):
        entry = {"kind": entry}
    if not isinstance(entry, Mapping):
        raise ValueError(f"step {position}: entry must be a kind name or a mapping")
    entry = dict(entry)
    kind = entry.get("kind")
    if kind not in _STEP_OPTIONS:
        raise ValueError(f"step {position}: unknown kind {kind!r}")
    options = set(entry) - {"kind", "dest", "default"}
    unknown = options - _STEP_OPTIONS[kind]
    if unknown:
        raise ValueError(f"step {position}: unknown options for {kind}: {', '.join(sorted(unknown))}")
    if kind not in ("ignore", "custom") and not entry.get("dest"):
        raise ValueError(f"step {position}: {kind} needs a 'dest'")
    if kind == "ignore" and "dest" in entry:
        raise ValueError(f"step {position}: ignore takes no 'dest'")
    return entry


def load_steps(table: List[Any],
               namespace: MutableMapping,
               descriptors: Optional[Mapping[str, Any]] = None) -> list:
    """Build Steps from a table, binding each 'dest' to a key of namespace."""
    # NOTE: imported lazily to avoid a cycle (transforms -> errors -> config).
    from hostargs import hostargs_transforms as t
    from hostargs.hostargs_steps import BoundSlot

    if isinstance(table, (str, bytes)) or not isinstance(table, (list, tuple)):
        raise ValueError("a step table must be a list of entries")
    steps = []
    for position, raw in enumerate(table):
        entry = normalize_entry(raw, position)
        kind = entry.pop("kind")
        entry.pop("default", None)
        dest_name = entry.pop("dest", None)
        dest = BoundSlot(namespace, dest_name) if dest_name else None
        match kind:
            case "ignore":
                steps.append(t.ignore())
            case "native":
                name = entry.pop("descriptor", None)
                if descriptors is None or name not in descriptors:
                    raise ValueError(f"step {position}: unknown native descriptor {name!r}")
                steps.append(t.native(dest, descriptors[name], **entry))
            case "string":
                if "capacity" not in entry:
                    raise ValueError(f"step {position}: string needs a 'capacity'")
                steps.append(t.string(dest, entry.pop("capacity"), **entry))
            case "custom":
                if "transform" not in entry:
                    raise ValueError(f"step {position}: custom needs a 'transform'")
                steps.append(t.custom(entry["transform"], dest, entry.get("data")))
            case _:
                factory = getattr(t, kind)
                steps.append(factory(dest, **entry))
        _dbg("load_steps", position, kind, "dest", dest_name)
    return steps


__all__ = [
    "CONFIG_ENV",
    "DEBUG_ENV",
    "DEFAULT_MESSAGES",
    "Settings",
    "settings_from_data",
    "load_settings",
    "dump_settings",
    "get_settings",
    "configure",
    "reset_settings",
    "normalize_entry",
    "load_steps",
]
