"""
Module: ledger_kernel.paging.cursor
Responsibility: Opaque cursor codec.  A cursor is the standard base64 encoding
    of the canonical text form of a primary key.
Architecture position: Kernel > Paging.  Pure.

Invariants enforced:
    - decode_cursor(encode_cursor(pk)) == pk for every UUID.
    - A cursor that is not valid base64, not UTF-8, or not a UUID raises
      InvalidCursorError.  It is never mapped to "no cursor".

Non-goals:
    - Cursors are not signed or versioned.  A forged cursor can only move the
      seek anchor to another existing row; visibility and filters are
      re-applied to every returned row.
"""

import base64
import binascii
from uuid import UUID

from ledger_kernel.exceptions import InvalidCursorError


def encode_cursor(pk: UUID) -> str:
    return base64.b64encode(str(pk).encode("utf-8")).decode("ascii")


def decode_cursor(cursor: str) -> UUID:
    """
    Decode a cursor into the primary key it names.

    Raises:
        InvalidCursorError: cursor is not base64 of a UUID's text form.
    """
    try:
        raw = base64.b64decode(cursor, validate=True)
    except (binascii.Error, ValueError) as exc:
        raise InvalidCursorError(cursor, "not valid base64") from exc

    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as exc:
        raise InvalidCursorError(cursor, "payload is not UTF-8") from exc

    try:
        return UUID(text)
    except ValueError as exc:
        raise InvalidCursorError(cursor, "payload is not a UUID") from exc
