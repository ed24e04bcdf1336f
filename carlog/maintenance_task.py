"""MaintenanceTask class for planned or completed maintenance."""

from dataclasses import dataclass, replace
from datetime import date
from typing import Optional

from .fields import as_number, parse_date, require_non_negative


@dataclass(frozen=True)
class MaintenanceTask:
    """A maintenance task. Completion is the only field the user toggles."""

    id: str
    date: date
    description: str
    cost: float
    odometer: float
    is_completed: bool = False
    location: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "date", parse_date(self.date))
        object.__setattr__(self, "cost", as_number(self.cost, "cost"))
        object.__setattr__(self, "odometer", as_number(self.odometer, "odometer"))
        object.__setattr__(self, "is_completed", bool(self.is_completed))
        require_non_negative(self.cost, "cost")

    def toggled(self) -> "MaintenanceTask":
        return replace(self, is_completed=not self.is_completed)
