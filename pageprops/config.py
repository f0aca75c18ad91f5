"""Configuration loading for pageprops (.pageprops.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .links import DEFAULT_EXTENSION

CONFIG_FILENAME = ".pageprops.yml"
DEFAULT_ID_LENGTH = 10


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class LinkConfig:
    """Link formatting settings."""

    extension: str = DEFAULT_EXTENSION
    externalize: bool = False
    publish_origin: Optional[str] = None


@dataclass
class LoggingConfig:
    """Logging verbosity and optional file sink."""

    verbose: bool = False
    log_file: Optional[Path] = None


@dataclass
class PagePropsConfig:
    """Represents the settings defined in .pageprops.yml."""

    root: Path
    links: LinkConfig = field(default_factory=LinkConfig)
    random_id_length: int = DEFAULT_ID_LENGTH
    logging: LoggingConfig = field(default_factory=LoggingConfig)


def default_config() -> PagePropsConfig:
    return PagePropsConfig(root=Path.cwd())


def load_config(config_path: Path) -> PagePropsConfig:
    """Load configuration from disk; a missing file yields the defaults."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    if not config_file.exists():
        return PagePropsConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")

    links_data = _as_dict(data.get("links"))
    links = LinkConfig()
    if links_data:
        links.extension = _as_str(links_data.get("extension")) or DEFAULT_EXTENSION
        links.externalize = _as_bool(links_data.get("externalize")) or False
        links.publish_origin = _as_str(links_data.get("publish_origin"))

    random_id_length = DEFAULT_ID_LENGTH
    random_id_data = _as_dict(data.get("random_id"))
    if random_id_data:
        length = _as_int(random_id_data.get("length"))
        if length is not None:
            if length <= 0:
                raise ConfigError("random_id.length must be a positive integer")
            random_id_length = length

    logging_data = _as_dict(data.get("logging"))
    logging_config = LoggingConfig()
    if logging_data:
        logging_config.verbose = _as_bool(logging_data.get("verbose")) or False
        log_file = _as_str(logging_data.get("log_file"))
        logging_config.log_file = root / log_file if log_file else None

    return PagePropsConfig(
        root=root,
        links=links,
        random_id_length=random_id_length,
        logging=logging_config,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


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


__all__ = [
    "CONFIG_FILENAME",
    "ConfigError",
    "DEFAULT_ID_LENGTH",
    "LinkConfig",
    "LoggingConfig",
    "PagePropsConfig",
    "default_config",
    "load_config",
]
