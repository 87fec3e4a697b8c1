"""Configuration for documentation generation.

Settings come from three layers, later ones overriding earlier ones:

1. Environment variables (all optional):
    SOURCE_DATE_EPOCH: Unix timestamp used as the generation date
    CMDDOCS_SECTION: Man page section (default: 1)
    CMDDOCS_MANUAL: Manual name shown in the man page footer
    CMDDOCS_SOURCE: Source string shown in the man page footer
2. A TOML file, either with top-level keys or under ``[tool.cmddocs]``
3. Explicit values (CLI options)
"""

import logging
import os
import tomllib
from dataclasses import dataclass, fields
from datetime import UTC, date, datetime
from pathlib import Path
from typing import Any

logger = logging.getLogger(__name__)

__all__ = ["ConfigError", "DocsConfig", "generation_date", "load_config", "source_date"]

_PYPROJECT_TABLES = {"build-system", "project", "tool"}


class ConfigError(Exception):
    """Raised when configuration cannot be read or is invalid."""

    pass


def source_date(environ: dict[str, str] | None = None) -> datetime | None:
    """Generation date from SOURCE_DATE_EPOCH, or None when unset.

    Raises:
        ConfigError: If SOURCE_DATE_EPOCH is not an integer
    """
    env = os.environ if environ is None else environ
    epoch = env.get("SOURCE_DATE_EPOCH", "")
    if not epoch:
        return None
    try:
        return datetime.fromtimestamp(int(epoch), UTC)
    except (ValueError, OverflowError) as e:
        raise ConfigError(f"Invalid SOURCE_DATE_EPOCH: {epoch!r}") from e


def generation_date(explicit: datetime | None = None) -> datetime:
    """Date stamped on generated docs: explicit, then SOURCE_DATE_EPOCH, then now."""
    if explicit is not None:
        return explicit
    return source_date() or datetime.now(UTC)


@dataclass
class DocsConfig:
    """Header defaults and output settings."""

    title: str = ""
    section: str = ""
    manual: str = ""
    source: str = ""
    date: datetime | None = None

    @classmethod
    def from_environment(cls) -> "DocsConfig":
        """Load settings from environment variables.

        Returns:
            DocsConfig with values from environment or defaults
        """
        return cls(
            section=os.getenv("CMDDOCS_SECTION", ""),
            manual=os.getenv("CMDDOCS_MANUAL", ""),
            source=os.getenv("CMDDOCS_SOURCE", ""),
            date=source_date(),
        )

    def merged(self, **overrides: Any) -> "DocsConfig":
        """Return a copy where every non-empty override replaces the field."""
        values = {f.name: getattr(self, f.name) for f in fields(self)}
        for key, value in overrides.items():
            if key not in values:
                raise ConfigError(f"Unknown configuration key: {key}")
            if value not in (None, ""):
                values[key] = value
        return DocsConfig(**values)


def load_config(path: str | Path, base: DocsConfig | None = None) -> DocsConfig:
    """Load settings from a TOML file on top of ``base``.

    Args:
        path: TOML file to read
        base: Settings to override (defaults to the environment)

    Returns:
        Merged DocsConfig

    Raises:
        ConfigError: If the file cannot be read or contains unknown keys
    """
    config_path = Path(path)
    if base is None:
        base = DocsConfig.from_environment()

    try:
        with open(config_path, "rb") as f:
            data = tomllib.load(f)
    except FileNotFoundError as e:
        raise ConfigError(f"Config file not found: {config_path}") from e
    except (OSError, tomllib.TOMLDecodeError) as e:
        raise ConfigError(f"Failed to load config file {config_path}: {e}") from e

    # pyproject.toml style files keep their settings under [tool.cmddocs]
    if _PYPROJECT_TABLES & data.keys():
        table = data.get("tool", {}).get("cmddocs", {})
    else:
        table = data

    values: dict[str, Any] = {}
    for key, value in table.items():
        if key != "date":
            values[key] = str(value)
        elif isinstance(value, datetime):
            values[key] = value if value.tzinfo else value.replace(tzinfo=UTC)
        elif isinstance(value, date):
            values[key] = datetime(value.year, value.month, value.day, tzinfo=UTC)
        else:
            raise ConfigError(f"'date' must be a TOML date or datetime, got {value!r}")

    logger.debug(f"Loaded config from {config_path}: {sorted(values)}")
    return base.merged(**values)
