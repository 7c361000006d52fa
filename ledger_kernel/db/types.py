"""
Module: ledger_kernel.db.types
Responsibility: Annotated type aliases shared by the ORM models, so that every
    name, tag and amount column is declared with identical length/precision.
Architecture position: Kernel > DB.  May be imported by models/.  MUST NOT
    import from models/, selectors/ or paging/.
"""

from decimal import Decimal
from typing import Annotated

from sqlalchemy import Numeric, String

# Quantity or unit price on a record item: 38 digits, 9 decimal places
Amount = Annotated[Decimal, Numeric(38, 9)]

# Display names (users, groups, journals, accounts, records)
Name = Annotated[str, String(255)]

# Free-text descriptions
LongText = Annotated[str, String(4000)]

# Unit of measure / commodity code (e.g. "CNY", "AAPL")
UnitCode = Annotated[str, String(50)]

# Single tag value
TagText = Annotated[str, String(100)]
