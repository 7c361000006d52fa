"""
LedgerConfig schema.

Frozen dataclasses for the runtime configuration of the ledger read side.
YAML files are parsed into these types by the loader; the bridges turn them
into kernel inputs.
"""

from __future__ import annotations

from dataclasses import dataclass, field

# ---------------------------------------------------------------------------
# Sections
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DatabaseConfig:
    """Connection settings passed to init_engine_from_url."""

    url: str = "sqlite+pysqlite:///:memory:"
    echo: bool = False
    pool_size: int = 20
    max_overflow: int = 10


@dataclass(frozen=True)
class PagingConfig:
    """Page size used when a request omits size, and the largest allowed."""

    default_size: int = 20
    max_size: int = 100


@dataclass(frozen=True)
class LoggingConfig:
    level: str = "INFO"


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LedgerConfig:
    """
    The complete runtime configuration.

    checksum identifies the parsed content (not the file bytes), so two
    files that differ only in comments or key order share a checksum.
    """

    source: str
    checksum: str
    database: DatabaseConfig = field(default_factory=DatabaseConfig)
    paging: PagingConfig = field(default_factory=PagingConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
