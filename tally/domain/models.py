"""Domain type definitions for tally.

These NewTypes provide semantic clarity and help with type checking:
- Money: Signed decimal amount (positive = income, negative = expense)
- CategoryName: Name of a transaction category
- IsoDate: Calendar date in YYYY-MM-DD format
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Final, Literal, NewType

# Money amounts are Decimals so sums never pick up binary floating point error
Money = NewType("Money", Decimal)

# Category name as configured (e.g., "food")
CategoryName = NewType("CategoryName", str)

# ISO-8601 calendar date (e.g., "2024-01-10")
IsoDate = NewType("IsoDate", str)

# Filter sentinel matching every category / every type
ALL: Final = "all"

TypeFilter = Literal["all", "income", "expense"]
NotifyKind = Literal["success", "info"]


@dataclass(frozen=True)
class Transaction:
    """Immutable ledger entry."""

    id: int
    text: str
    amount: Money
    category: CategoryName
    date: IsoDate

    @property
    def is_income(self) -> bool:
        return self.amount > 0

    @property
    def is_expense(self) -> bool:
        return self.amount < 0
