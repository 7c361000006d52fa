"""Read-only selectors: the filtered cursor-pagination engine and one reader per entity."""

from ledger_kernel.selectors.account_selector import AccountQuery, AccountSelector
from ledger_kernel.selectors.base import BaseSelector
from ledger_kernel.selectors.group_selector import GroupQuery, GroupSelector
from ledger_kernel.selectors.journal_selector import JournalQuery, JournalSelector
from ledger_kernel.selectors.read_selector import Operator, ReadSelector
from ledger_kernel.selectors.record_selector import RecordQuery, RecordSelector
from ledger_kernel.selectors.user_selector import UserQuery, UserSelector

__all__ = [
    "BaseSelector",
    "ReadSelector",
    "Operator",
    "UserSelector",
    "UserQuery",
    "GroupSelector",
    "GroupQuery",
    "JournalSelector",
    "JournalQuery",
    "AccountSelector",
    "AccountQuery",
    "RecordSelector",
    "RecordQuery",
]
