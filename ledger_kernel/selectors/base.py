"""
Module: ledger_kernel.selectors.base
Responsibility: Abstract base class for all read-only selectors.
Architecture position: Kernel > Selectors.  May import from db/, models/,
    domain/ and paging/.  MUST NOT import from ledger_config or outer layers.

Invariants enforced:
    - Read-only access: selectors accept a Session from the caller but MUST
      NOT call session.add(), session.delete(), session.commit() or
      session.flush().
    - Session ownership: selectors never create or close sessions.  Every
      batch of one list/page request runs in the caller's transaction, so
      the batches see one snapshot.
    - Store calls are sequential; nothing is fetched in parallel.
"""

from abc import ABC
from typing import Generic, TypeVar

from sqlalchemy.orm import Session

from ledger_kernel.db.base import Base

ModelType = TypeVar("ModelType", bound=Base)


class BaseSelector(ABC, Generic[ModelType]):
    """
    Abstract base class for all selectors.

    Guarantees:
        - session is stored as a public attribute for subclass query use.
        - No commit, flush, add, or delete operations are performed.
    """

    def __init__(self, session: Session):
        self.session = session
