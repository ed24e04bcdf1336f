"""FuelEntry class for fill-up records."""

from dataclasses import dataclass
from datetime import date
from typing import Optional

from .exceptions import RecordValidationError
from .fields import (
    as_number,
    optional_number,
    parse_date,
    require_non_negative,
    require_percentage,
)


@dataclass(frozen=True)
class FuelEntry:
    """A fuel fill-up. Liters are derived from total cost and unit price."""

    id: str
    date: date
    odometer: float
    liters: float
    price_per_liter: float
    total_cost: float
    gas_station: str
    start_tank_percentage: Optional[float] = None
    end_tank_percentage: Optional[float] = None
    remaining_km: Optional[float] = None
    range_after_fill: Optional[float] = None
    notes: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "date", parse_date(self.date))
        for name in ("odometer", "liters", "price_per_liter", "total_cost"):
            object.__setattr__(self, name, as_number(getattr(self, name), name))
        for name in (
            "start_tank_percentage",
            "end_tank_percentage",
            "remaining_km",
            "range_after_fill",
        ):
            object.__setattr__(self, name, optional_number(getattr(self, name), name))

        if self.price_per_liter <= 0:
            raise RecordValidationError(
                "price_per_liter must be positive", "price_per_liter", self.price_per_liter
            )
        require_non_negative(self.total_cost, "total_cost")
        require_non_negative(self.liters, "liters")
        require_percentage(self.start_tank_percentage, "start_tank_percentage")
        require_percentage(self.end_tank_percentage, "end_tank_percentage")

    @classmethod
    def create(
        cls,
        id: str,
        date,
        odometer: float,
        price_per_liter: float,
        total_cost: float,
        gas_station: str,
        **optional,
    ) -> "FuelEntry":
        """Build an entry from what the user types; liters = cost / price."""
        price = as_number(price_per_liter, "price_per_liter")
        cost = as_number(total_cost, "total_cost")
        liters = cost / price if cost > 0 and price > 0 else 0.0
        return cls(
            id=id,
            date=date,
            odometer=odometer,
            liters=liters,
            price_per_liter=price,
            total_cost=cost,
            gas_station=gas_station,
            **optional,
        )

    @property
    def has_tank_readings(self) -> bool:
        return (
            self.start_tank_percentage is not None
            and self.end_tank_percentage is not None
        )
