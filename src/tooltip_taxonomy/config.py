"""Configuration loading for tooltip-taxonomy.

Settings come from three layers, later ones winning:

1. the dataclass defaults below,
2. a TOML file (explicit path, ``TOOLTIP_TAXONOMY_CONFIG`` or
   ``./tooltip_taxonomy.toml``),
3. ``TOOLTIP_TAXONOMY_<SECTION>__<KEY>`` environment variables.
"""

import os
import tomllib
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Any, Mapping, Optional

from tooltip_taxonomy.exceptions import ConfigurationError

ENV_PREFIX = "TOOLTIP_TAXONOMY_"
CONFIG_ENV_VAR = "TOOLTIP_TAXONOMY_CONFIG"
DEFAULT_CONFIG_FILE = "tooltip_taxonomy.toml"

DEFAULT_ALLOWED_TAGS = ("b", "i", "strong", "span", "br", "a", "em")


@dataclass
class LoggingConfig:
    """Logging settings."""

    level: str = "INFO"
    json_logging: bool = False
    log_file: Optional[str] = None


@dataclass
class DatabaseConfig:
    """SQLite storage settings."""

    path: str = "tooltip_taxonomy.db"


@dataclass
class TooltipConfig:
    """Settings for tooltip generation."""

    base_url: str = "http://localhost"
    front_page: str = "/node"
    allowed_tags: list[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_TAGS))
    truncate_length: int = 100
    read_more_label: str = "Read More &#9032;"
    css_class: str = "tooltip-taxonomy"
    cache_tag_prefix: str = "tooltip_taxonomy"


@dataclass
class Config:
    """Top-level application configuration."""

    logging: LoggingConfig = field(default_factory=LoggingConfig)
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    tooltip: TooltipConfig = field(default_factory=TooltipConfig)

    @classmethod
    def load(
        cls,
        path: Optional[Path] = None,
        environ: Optional[Mapping[str, str]] = None,
    ) -> "Config":
        """Load configuration from defaults, an optional TOML file and the environment."""
        environ = os.environ if environ is None else environ
        config = cls()

        config_path = _resolve_config_path(path, environ)
        if config_path is not None:
            config._apply_mapping(_read_toml(config_path), source=str(config_path))

        config._apply_environment(environ)
        return config

    def _apply_mapping(self, data: Mapping[str, Any], source: str) -> None:
        for section_name, values in data.items():
            section = self._section(section_name, source)
            if not isinstance(values, Mapping):
                raise ConfigurationError(
                    f"Section '{section_name}' must be a table", details=source
                )
            for key, value in values.items():
                _set_option(section, section_name, key, value, source)

    def _apply_environment(self, environ: Mapping[str, str]) -> None:
        for name, raw in environ.items():
            if not name.startswith(ENV_PREFIX) or name == CONFIG_ENV_VAR:
                continue
            section_name, sep, key = name[len(ENV_PREFIX) :].lower().partition("__")
            if not sep:
                continue
            section = self._section(section_name, name)
            _set_option(section, section_name, key, raw, name)

    def _section(self, name: str, source: str) -> Any:
        if name not in {f.name for f in fields(self)}:
            raise ConfigurationError(f"Unknown config section '{name}'", details=source)
        return getattr(self, name)


def _resolve_config_path(
    path: Optional[Path], environ: Mapping[str, str]
) -> Optional[Path]:
    if path is not None:
        if not path.is_file():
            raise ConfigurationError(f"Config file does not exist: {path}")
        return path

    env_path = environ.get(CONFIG_ENV_VAR)
    if env_path:
        candidate = Path(env_path)
        if not candidate.is_file():
            raise ConfigurationError(
                f"Config file does not exist: {candidate}",
                details=f"Set via {CONFIG_ENV_VAR}",
            )
        return candidate

    default = Path.cwd() / DEFAULT_CONFIG_FILE
    return default if default.is_file() else None


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        raise ConfigurationError(f"Invalid TOML in {path}: {e}") from e


def _set_option(section: Any, section_name: str, key: str, value: Any, source: str) -> None:
    known = {f.name: f for f in fields(section)}
    if key not in known:
        raise ConfigurationError(
            f"Unknown option '{section_name}.{key}'", details=source
        )
    current = getattr(section, key)
    setattr(section, key, _coerce(value, current, f"{section_name}.{key}", source))


def _coerce(value: Any, current: Any, option: str, source: str) -> Any:
    """Coerce a raw value to the type of the option's current value."""
    if isinstance(current, bool):
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.lower() in ("1", "true", "yes", "on"):
            return True
        if isinstance(value, str) and value.lower() in ("0", "false", "no", "off"):
            return False
    elif isinstance(current, int):
        try:
            return int(value)
        except (TypeError, ValueError):
            pass
    elif isinstance(current, list):
        if isinstance(value, str):
            return [item.strip() for item in value.split(",") if item.strip()]
        if isinstance(value, list):
            return [str(item) for item in value]
    elif current is None or isinstance(current, str):
        if value is None or isinstance(value, str):
            return value

    raise ConfigurationError(
        f"Invalid value for '{option}': {value!r}", details=source
    )
