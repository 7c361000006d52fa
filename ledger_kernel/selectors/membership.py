"""
Module: ledger_kernel.selectors.membership
Responsibility: Store lookups answering "which access lists of this group or
    journal contain this user".  Shared by visibility checks and by the
    ContainingUserQuery external filter.
Architecture position: Kernel > Selectors.  Read-only.

Invariants enforced:
    - Every call issues fresh SELECTs; results are never cached, so a
      permission change earlier in the same transaction is always seen.
    - A journal contains a user directly (journal_users) or through any
      group on its access list that the user belongs to (journal_groups ->
      group_users).  The journal-side is_admin flag decides which list the
      user is on; the user's role inside the group does not.
"""

from uuid import UUID

from sqlalchemy import select
from sqlalchemy.orm import Session

from ledger_kernel.domain.queries import FIELD_ADMINS, FIELD_MEMBERS, ContainingUserQuery
from ledger_kernel.models.group import GroupUser
from ledger_kernel.models.journal import JournalGroup, JournalUser


def _lists_for(flags) -> set[str]:
    return {FIELD_ADMINS if is_admin else FIELD_MEMBERS for is_admin in flags}


def group_access_lists(session: Session, group_id: UUID, user_id: UUID) -> set[str]:
    """Subset of {admins, members} of the group that hold the user."""
    flags = session.execute(
        select(GroupUser.is_admin).where(
            GroupUser.group_id == group_id,
            GroupUser.user_id == user_id,
        )
    ).scalars()
    return _lists_for(flags)


def journal_access_lists(session: Session, journal_id: UUID, user_id: UUID) -> set[str]:
    """Subset of {admins, members} of the journal that hold the user."""
    direct = session.execute(
        select(JournalUser.is_admin).where(
            JournalUser.journal_id == journal_id,
            JournalUser.user_id == user_id,
        )
    ).scalars()
    lists = _lists_for(direct)
    if lists >= {FIELD_ADMINS, FIELD_MEMBERS}:
        return lists

    via_groups = session.execute(
        select(JournalGroup.is_admin)
        .join(GroupUser, GroupUser.group_id == JournalGroup.group_id)
        .where(
            JournalGroup.journal_id == journal_id,
            GroupUser.user_id == user_id,
        )
    ).scalars()
    return lists | _lists_for(via_groups)


def group_contains_user(session: Session, group_id: UUID, user_id: UUID) -> bool:
    return bool(group_access_lists(session, group_id, user_id))


def journal_contains_user(session: Session, journal_id: UUID, user_id: UUID) -> bool:
    return bool(journal_access_lists(session, journal_id, user_id))


def holds_user(lists: set[str], query: ContainingUserQuery) -> bool:
    """True when one of the access lists holding the user is wanted by the query."""
    return any(query.wants(field) for field in lists)
