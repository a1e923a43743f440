"""Read defaults from .javadecl.toml or [tool.javadecl] in pyproject.toml."""

from __future__ import annotations

import logging
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from javadecl.errors import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILE = ".javadecl.toml"


@dataclass
class Config:
    classpath: list[str] = field(default_factory=list)
    sourcepath: list[str] = field(default_factory=list)
    javap: str | None = None


def _string_list(table: dict, key: str, origin: Path) -> list[str]:
    value = table.get(key, [])
    if isinstance(value, str):
        return [value]
    if not isinstance(value, list) or not all(isinstance(v, str) for v in value):
        raise ConfigError(f"{origin}: '{key}' must be a string or a list of strings")
    return value


def _from_table(table: dict, origin: Path) -> Config:
    javap = table.get("javap")
    if javap is not None and not isinstance(javap, str):
        raise ConfigError(f"{origin}: 'javap' must be a string")
    return Config(
        classpath=_string_list(table, "classpath", origin),
        sourcepath=_string_list(table, "sourcepath", origin),
        javap=javap,
    )


def _read_toml(path: Path) -> dict | None:
    try:
        with open(path, "rb") as f:
            return tomllib.load(f)
    except (OSError, tomllib.TOMLDecodeError) as e:
        logger.debug("Could not read %s: %s", path, e)
        return None


def load_config(directory: Path) -> Config:
    """Return the configuration found in *directory*, or the defaults."""
    # Try .javadecl.toml first
    config_file = directory / CONFIG_FILE
    if config_file.exists():
        data = _read_toml(config_file)
        if data is not None:
            logger.debug("Using %s", config_file)
            return _from_table(data.get("javadecl", {}), config_file)

    # Fall back to [tool.javadecl] in pyproject.toml
    pyproject = directory / "pyproject.toml"
    if pyproject.exists():
        data = _read_toml(pyproject)
        if data is not None:
            table = data.get("tool", {}).get("javadecl")
            if table is not None:
                logger.debug("Using [tool.javadecl] from %s", pyproject)
                return _from_table(table, pyproject)

    return Config()
