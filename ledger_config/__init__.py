"""
ledger_config -- single public entrypoint for runtime configuration.

Responsibility:
    Provides the ONLY way to obtain configuration at runtime through
    ``get_active_config()``.  No other component reads configuration
    files directly.

Architecture position:
    Configuration.  This package sits above ``ledger_kernel``.  The kernel
    MUST NEVER import from ``ledger_config``; ``ledger_config.bridges``
    translates a LedgerConfig into kernel inputs (PageLimits, engine,
    logging).

Invariants enforced:
    - Single entrypoint: all runtime config flows through ``get_active_config()``.
    - Deterministic checksum: the same parsed content always yields the
      same ``LedgerConfig.checksum``.

Failure modes:
    - ``FileNotFoundError`` -- the requested file does not exist.
    - ``yaml.YAMLError`` -- the file is not valid YAML.
    - ``ConfigurationError`` -- values are missing, mistyped or out of range.

Every successful ``get_active_config()`` call emits a
``LEDGER_CONFIG_TRACE`` log entry carrying the source, checksum and
paging limits.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ledger_config.loader import load_config
from ledger_config.schema import LedgerConfig

_logger = logging.getLogger("ledger_kernel.config")

DEFAULT_CONFIG_PATH = Path(__file__).parent / "defaults.yaml"


def get_active_config(config_path: Path | str | None = None) -> LedgerConfig:
    """The ONLY public configuration entrypoint.

    Args:
        config_path: YAML file to load.  Defaults to the bundled
            ``defaults.yaml``.

    Returns:
        A frozen, validated LedgerConfig.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigurationError: If validation fails.
    """
    path = Path(config_path) if config_path is not None else DEFAULT_CONFIG_PATH
    config = load_config(path)

    _logger.info(
        "LEDGER_CONFIG_TRACE",
        extra={
            "trace_type": "LEDGER_CONFIG_TRACE",
            "config_source": config.source,
            "checksum": config.checksum,
            "default_page_size": config.paging.default_size,
            "max_page_size": config.paging.max_size,
        },
    )
    return config


__all__ = ["DEFAULT_CONFIG_PATH", "LedgerConfig", "get_active_config"]
