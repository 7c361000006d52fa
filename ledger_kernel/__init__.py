"""
Ledger Kernel - read side

Journals, accounts, double-entry records, users and groups, read through
selectors that share one filtered cursor-pagination engine:
- Store-native predicates plus post-fetch external filters
- Row-level visibility checked per fetched row
- Keyset (seek) pagination with a primary-key tie-break
- Opaque base64 cursors
"""

__version__ = "0.1.0"
