"""TripReport class for odometer and fuel-gauge status readings."""

from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .constants import MAX_GAUGE_LEVEL, MIN_GAUGE_LEVEL
from .exceptions import RecordValidationError
from .fields import as_number, parse_datetime
from .trip_type import TripType


@dataclass(frozen=True)
class TripReport:
    """A status report taken while driving."""

    id: str
    date: datetime
    odometer: float
    remaining_km: float
    fuel_gauge_level: int
    trip_type: TripType
    notes: Optional[str] = None

    def __post_init__(self):
        object.__setattr__(self, "date", parse_datetime(self.date))
        object.__setattr__(self, "odometer", as_number(self.odometer, "odometer"))
        object.__setattr__(
            self, "remaining_km", as_number(self.remaining_km, "remaining_km")
        )

        level = self.fuel_gauge_level
        if isinstance(level, float) and level.is_integer():
            level = int(level)
            object.__setattr__(self, "fuel_gauge_level", level)
        if isinstance(level, bool) or not isinstance(level, int):
            raise RecordValidationError(
                "fuel_gauge_level must be an integer", "fuel_gauge_level", level
            )
        if not MIN_GAUGE_LEVEL <= level <= MAX_GAUGE_LEVEL:
            raise RecordValidationError(
                f"fuel_gauge_level must be between {MIN_GAUGE_LEVEL} and {MAX_GAUGE_LEVEL}",
                "fuel_gauge_level",
                level,
            )

        try:
            object.__setattr__(self, "trip_type", TripType.parse(self.trip_type))
        except ValueError as e:
            raise RecordValidationError(str(e), "trip_type", self.trip_type)
