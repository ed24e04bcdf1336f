"""Vehicle profile: identification, odometer and tank capacity."""

from dataclasses import dataclass, replace
from typing import Optional

from .exceptions import RecordValidationError
from .fields import as_number, optional_number, require_non_negative


@dataclass(frozen=True)
class Vehicle:
    """The single vehicle the logbook belongs to."""

    make: str
    model: str
    year: int
    mileage: float = 0
    vin: Optional[str] = None
    tank_capacity: Optional[float] = None

    def __post_init__(self):
        if isinstance(self.year, bool) or not isinstance(self.year, int):
            raise RecordValidationError("year must be an integer", "year", self.year)
        object.__setattr__(self, "mileage", as_number(self.mileage, "mileage"))
        require_non_negative(self.mileage, "mileage")
        capacity = optional_number(self.tank_capacity, "tank_capacity")
        if capacity is not None:
            require_non_negative(capacity, "tank_capacity")
        object.__setattr__(self, "tank_capacity", capacity)

    @property
    def name(self) -> str:
        """Human-readable vehicle name."""
        return f"{self.year} {self.make} {self.model}"

    @property
    def has_tank_capacity(self) -> bool:
        """True when a usable manual tank capacity was entered."""
        return self.tank_capacity is not None and self.tank_capacity > 0

    def with_mileage(self, mileage: float) -> "Vehicle":
        return replace(self, mileage=mileage)
