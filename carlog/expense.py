"""Expense class for non-fuel spending."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .exceptions import RecordValidationError
from .expense_category import ExpenseCategory
from .fields import as_number, parse_date, require_non_negative


@dataclass(frozen=True)
class Expense:
    """A miscellaneous expense such as insurance or a repair."""

    id: str
    date: date
    category: ExpenseCategory
    description: str
    cost: float
    location: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "date", parse_date(self.date))
        object.__setattr__(self, "cost", as_number(self.cost, "cost"))
        require_non_negative(self.cost, "cost")
        try:
            object.__setattr__(self, "category", ExpenseCategory.parse(self.category))
        except ValueError as e:
            raise RecordValidationError(str(e), "category", self.category)
