"""ORM models read by the ledger paging engine."""

from ledger_kernel.models.account import (
    Account,
    AccountStrategy,
    AccountTag,
    AccountType,
)
from ledger_kernel.models.group import Group, GroupUser
from ledger_kernel.models.journal import (
    Journal,
    JournalGroup,
    JournalTag,
    JournalUser,
)
from ledger_kernel.models.record import (
    Record,
    RecordItem,
    RecordTag,
    RecordType,
)
from ledger_kernel.models.user import AuthId, User, UserRole

__all__ = [
    "User",
    "UserRole",
    "AuthId",
    "Group",
    "GroupUser",
    "Journal",
    "JournalTag",
    "JournalUser",
    "JournalGroup",
    "Account",
    "AccountType",
    "AccountStrategy",
    "AccountTag",
    "Record",
    "RecordType",
    "RecordTag",
    "RecordItem",
]
