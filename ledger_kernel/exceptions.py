"""
Typed exception hierarchy for the ledger kernel.

Every error a caller can act on has its own class with a ``code`` class
attribute (machine-readable, stable across message rewording) and carries
its context as attributes rather than inside the message string.

    LedgerKernelError (base)
    |
    +-- PagingError
    |   +-- InvalidCursorError
    |   +-- InvalidPageSizeError
    |
    +-- ConfigurationError

Category        | Code                | When Raised
----------------|---------------------|------------------------------------------
Paging          | INVALID_CURSOR      | Cursor is not base64, not UTF-8, or not a
                |                     | primary key (user input error)
                | INVALID_PAGE_SIZE   | Requested size < 1 or above the limit
----------------|---------------------|------------------------------------------
Configuration   | CONFIGURATION_ERROR | Config file missing keys or out of range

A well-formed cursor whose row no longer exists (or is no longer visible)
is NOT an error: the selector treats that side's anchor as absent.

Database errors (``sqlalchemy.exc.*``) are not wrapped. They propagate to
the caller unchanged, as do failures raised by visibility and
external-filter hooks.

Handling pattern::

    try:
        page = selector.find_page(operator, FindPageInput(...))
    except InvalidCursorError as e:
        return {"error": e.code, "cursor": e.cursor, "reason": e.reason}
"""


class LedgerKernelError(Exception):
    """
    Base exception for all ledger kernel errors.

    All subclasses must have a `code` class attribute for
    machine-readable error identification.
    """

    code: str = "LEDGER_KERNEL_ERROR"


# Paging-related exceptions


class PagingError(LedgerKernelError):
    """Base exception for list/page read errors."""

    code: str = "PAGING_ERROR"


class InvalidCursorError(PagingError):
    """Cursor string does not decode to a primary key."""

    code: str = "INVALID_CURSOR"

    def __init__(self, cursor: str, reason: str):
        self.cursor = cursor
        self.reason = reason
        super().__init__(f"Invalid cursor {cursor!r}: {reason}")


class InvalidPageSizeError(PagingError):
    """Requested page size is outside the allowed range."""

    code: str = "INVALID_PAGE_SIZE"

    def __init__(self, size: int, max_size: int):
        self.size = size
        self.max_size = max_size
        super().__init__(
            f"Page size {size} is out of range: expected 1..{max_size}"
        )


# Configuration exceptions


class ConfigurationError(LedgerKernelError):
    """Configuration values are missing or invalid."""

    code: str = "CONFIGURATION_ERROR"

    def __init__(self, source: str, errors: list[str]):
        self.source = source
        self.errors = errors
        super().__init__(
            f"Invalid configuration in {source}: " + "; ".join(errors)
        )
