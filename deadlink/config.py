"""Configuration loading for deadlink (.deadlink.yml)."""

from __future__ import annotations

from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

import yaml

CONFIG_FILENAME = ".deadlink.yml"
DEFAULT_TIMEOUT = 30.0

# Option names accepted in config files and service payloads, with their aliases.
_OPTION_KEYS: Dict[str, Tuple[str, ...]] = {
    "check_relative": ("checkRelative", "check_relative"),
    "base_uri": ("baseURI", "base_uri"),
    "ignore": ("ignore",),
    "prefer_get": ("preferGET", "prefer_get"),
    "timeout": ("timeout",),
}


class ConfigError(RuntimeError):
    """Raised when the configuration cannot be parsed or has invalid values."""


@dataclass(frozen=True)
class LinkCheckConfig:
    """Effective options for one lint run."""

    check_relative: bool = True
    base_uri: Optional[str] = None
    ignore: Tuple[str, ...] = ()
    prefer_get: Tuple[str, ...] = ()
    timeout: Optional[float] = DEFAULT_TIMEOUT


def config_from_options(options: Mapping[str, Any] | None) -> LinkCheckConfig:
    """Merge user ``options`` over the defaults."""
    if options is None:
        return LinkCheckConfig()
    if not isinstance(options, Mapping):
        raise ConfigError("deadlink options must be a mapping")

    known = {alias for aliases in _OPTION_KEYS.values() for alias in aliases}
    unknown = sorted(str(key) for key in options if key not in known)
    if unknown:
        raise ConfigError(f"Unknown deadlink option(s): {', '.join(unknown)}")

    values: Dict[str, Any] = {}
    for field_name, aliases in _OPTION_KEYS.items():
        for alias in aliases:
            if alias in options:
                values[field_name] = options[alias]
                break

    config = LinkCheckConfig()
    if "check_relative" in values:
        check_relative = _as_bool(values["check_relative"])
        if check_relative is None:
            raise ConfigError("checkRelative must be a boolean")
        config = replace(config, check_relative=check_relative)
    if "base_uri" in values:
        raw_base = values["base_uri"]
        base_uri = _as_str(raw_base) if raw_base is not None else None
        if raw_base is not None and base_uri is None:
            raise ConfigError("baseURI must be a string")
        config = replace(config, base_uri=base_uri or None)
    if "ignore" in values:
        config = replace(config, ignore=_as_pattern_tuple(values["ignore"], "ignore"))
    if "prefer_get" in values:
        config = replace(config, prefer_get=_as_pattern_tuple(values["prefer_get"], "preferGET"))
    if "timeout" in values:
        config = replace(config, timeout=_as_timeout(values["timeout"]))
    return config


def merge_overrides(config: LinkCheckConfig, **overrides: Any) -> LinkCheckConfig:
    """Return ``config`` with every non-``None`` override applied."""
    changes = {key: value for key, value in overrides.items() if value is not None}
    for key in ("ignore", "prefer_get"):
        if key in changes:
            changes[key] = tuple(changes[key])
    return replace(config, **changes)


def find_config(path: Path) -> Optional[Path]:
    """Return the nearest .deadlink.yml for ``path``, searching parent directories."""
    path = path.expanduser().resolve()
    start = path if path.is_dir() else path.parent
    for directory in (start, *start.parents):
        candidate = directory / CONFIG_FILENAME
        if candidate.is_file():
            return candidate
    return None


def load_config(config_path: Path) -> LinkCheckConfig:
    """Load configuration from disk, returning defaults when the file is missing."""
    config_file = config_path.expanduser()
    if config_file.is_dir():
        config_file = config_file / CONFIG_FILENAME
    if not config_file.exists():
        return LinkCheckConfig()

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{config_file.name} must contain a mapping at the root")
    return config_from_options(data)


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None


def _as_timeout(value: Any) -> Optional[float]:
    if value is None:
        return None
    if isinstance(value, (int, float)) and not isinstance(value, bool):
        timeout = float(value)
    elif isinstance(value, str):
        try:
            timeout = float(value)
        except ValueError as exc:
            raise ConfigError(f"timeout must be a number, got {value!r}") from exc
    else:
        raise ConfigError("timeout must be a number")
    if timeout <= 0:
        raise ConfigError("timeout must be greater than zero")
    return timeout


def _as_pattern_tuple(value: Any, name: str) -> Tuple[str, ...]:
    if value is None:
        return ()
    if isinstance(value, str):
        return (value,)
    if isinstance(value, Sequence):
        items = []
        for item in value:
            text = _as_str(item)
            if text is None:
                raise ConfigError(f"{name} entries must be strings")
            items.append(text)
        return tuple(items)
    raise ConfigError(f"{name} must be a list of strings")


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_TIMEOUT",
    "LinkCheckConfig",
    "config_from_options",
    "find_config",
    "load_config",
    "merge_overrides",
]
