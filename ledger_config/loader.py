"""
Configuration Loader (``ledger_config.loader``).

Responsibility
--------------
Loads a YAML configuration file and parses it into the frozen
``ledger_config.schema`` dataclasses.  Runtime callers go through
``ledger_config.get_active_config()`` rather than calling this directly.

Invariants enforced
-------------------
* Every parsed object is a frozen dataclass from ``schema.py``.
* All validation problems of one file are collected and raised together
  as a single ``ConfigurationError``.
* ``compute_checksum`` produces a deterministic SHA-256 hash of the
  parsed content.

Failure modes
-------------
* Missing YAML file  -> ``FileNotFoundError`` propagates.
* Malformed YAML  -> ``yaml.YAMLError`` propagates.
* Wrong types, unknown log level, or out-of-range sizes  ->
  ``ConfigurationError``.
"""

from __future__ import annotations

import hashlib
import json
import logging
from pathlib import Path
from typing import Any

import yaml

from ledger_config.schema import DatabaseConfig, LedgerConfig, LoggingConfig, PagingConfig
from ledger_kernel.exceptions import ConfigurationError

_SECTIONS = ("database", "paging", "logging")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
    """
    with open(path) as f:
        return yaml.safe_load(f) or {}


def _section(data: dict[str, Any], name: str, errors: list[str]) -> dict[str, Any]:
    value = data.get(name) or {}
    if not isinstance(value, dict):
        errors.append(f"'{name}' must be a mapping")
        return {}
    return value


def _int(section: dict[str, Any], key: str, default: int, path: str, errors: list[str]) -> int:
    value = section.get(key, default)
    # bool is an int subclass; reject it explicitly
    if isinstance(value, bool) or not isinstance(value, int):
        errors.append(f"{path}.{key} must be an integer, got {value!r}")
        return default
    return value


def parse_database(data: dict[str, Any], errors: list[str]) -> DatabaseConfig:
    defaults = DatabaseConfig()
    url = data.get("url", defaults.url)
    if not isinstance(url, str) or not url.strip():
        errors.append("database.url must be a non-empty string")
        url = defaults.url
    echo = data.get("echo", defaults.echo)
    if not isinstance(echo, bool):
        errors.append(f"database.echo must be a boolean, got {echo!r}")
        echo = defaults.echo
    pool_size = _int(data, "pool_size", defaults.pool_size, "database", errors)
    max_overflow = _int(data, "max_overflow", defaults.max_overflow, "database", errors)
    if pool_size < 1:
        errors.append(f"database.pool_size must be >= 1, got {pool_size}")
    if max_overflow < 0:
        errors.append(f"database.max_overflow must be >= 0, got {max_overflow}")
    return DatabaseConfig(
        url=url.strip(),
        echo=echo,
        pool_size=pool_size,
        max_overflow=max_overflow,
    )


def parse_paging(data: dict[str, Any], errors: list[str]) -> PagingConfig:
    defaults = PagingConfig()
    default_size = _int(data, "default_size", defaults.default_size, "paging", errors)
    max_size = _int(data, "max_size", defaults.max_size, "paging", errors)
    if default_size < 1:
        errors.append(f"paging.default_size must be >= 1, got {default_size}")
    if max_size < default_size:
        errors.append(
            f"paging.max_size ({max_size}) must be >= paging.default_size ({default_size})"
        )
    return PagingConfig(default_size=default_size, max_size=max_size)


def parse_logging(data: dict[str, Any], errors: list[str]) -> LoggingConfig:
    level = str(data.get("level", LoggingConfig().level)).upper()
    if not isinstance(logging.getLevelName(level), int):
        errors.append(f"logging.level {level!r} is not a logging level")
        level = LoggingConfig().level
    return LoggingConfig(level=level)


def parse_config(data: dict[str, Any], source: str) -> LedgerConfig:
    """
    Parse a loaded YAML mapping into a LedgerConfig.

    Raises:
        ConfigurationError: listing every problem found.
    """
    errors: list[str] = []
    if not isinstance(data, dict):
        raise ConfigurationError(source, ["top level must be a mapping"])

    unknown = sorted(set(data) - set(_SECTIONS))
    if unknown:
        errors.append(f"unknown sections: {', '.join(map(str, unknown))}")

    database = parse_database(_section(data, "database", errors), errors)
    paging = parse_paging(_section(data, "paging", errors), errors)
    logging_config = parse_logging(_section(data, "logging", errors), errors)

    if errors:
        raise ConfigurationError(source, errors)

    return LedgerConfig(
        source=source,
        checksum=compute_checksum(data),
        database=database,
        paging=paging,
        logging=logging_config,
    )


def load_config(path: Path) -> LedgerConfig:
    return parse_config(load_yaml_file(path), str(path))


def compute_checksum(data: dict[str, Any]) -> str:
    """
    Compute SHA-256 checksum of canonical JSON serialization.

    Identical ``data`` always produces identical checksums.
    """
    canonical = json.dumps(data, sort_keys=True, default=str)
    return hashlib.sha256(canonical.encode()).hexdigest()
