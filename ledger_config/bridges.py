"""
Config -> Kernel Bridges.

Functions that convert a LedgerConfig into kernel-compatible inputs. These
live in ledger_config (the producer) because the kernel must NEVER import
ledger_config.

Usage:
    from ledger_config import get_active_config
    from ledger_config.bridges import build_page_limits, init_engine_from_config

    config = get_active_config()
    init_engine_from_config(config)
    selector = JournalSelector(session, page_limits=build_page_limits(config))
"""

from __future__ import annotations

import logging

from sqlalchemy.engine import Engine

from ledger_config.schema import LedgerConfig
from ledger_kernel.db.engine import init_engine_from_url
from ledger_kernel.logging_config import configure_logging
from ledger_kernel.paging.types import PageLimits


def build_page_limits(config: LedgerConfig) -> PageLimits:
    return PageLimits(
        default_size=config.paging.default_size,
        max_size=config.paging.max_size,
    )


def configure_logging_from_config(config: LedgerConfig, **kwargs) -> None:
    """configure_logging at the configured level.  Extra kwargs pass through."""
    configure_logging(level=logging.getLevelName(config.logging.level), **kwargs)


def init_engine_from_config(config: LedgerConfig) -> Engine:
    """
    Initialize the kernel engine from the database section.

    Logging is configured first so that the engine_initialized event is
    emitted at the configured level.
    """
    configure_logging_from_config(config)
    db = config.database
    return init_engine_from_url(
        db.url,
        echo=db.echo,
        pool_size=db.pool_size,
        max_overflow=db.max_overflow,
    )
