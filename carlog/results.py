"""Dataclasses returned by the analyzers, ready for tables and charts."""

from dataclasses import dataclass, field
from datetime import date
from enum import Enum
from typing import Dict, List, Optional

from .constants import GAUGE_SEGMENTS
from .expense_category import ExpenseCategory
from .trip_type import TripType


class CapacitySource(Enum):
    """Where the effective tank capacity came from."""

    MANUAL = "manual"
    ESTIMATED = "estimated"


@dataclass(frozen=True)
class TankAnalysis:
    """Refill habits and the tank capacity used by the other analyzers."""

    average_start_percentage: float
    effective_capacity: Optional[float]
    capacity_source: CapacitySource
    sample_size: int

    @property
    def liters_per_segment(self) -> Optional[float]:
        if self.effective_capacity is None:
            return None
        return self.effective_capacity / GAUGE_SEGMENTS


@dataclass(frozen=True)
class SegmentAverage:
    """Average distance driven while the gauge dropped one segment."""

    label: str
    average_km: float


@dataclass(frozen=True)
class TripTypeEfficiency:
    trip_type: TripType
    km_per_liter: float


@dataclass(frozen=True)
class StationStats:
    """Aggregated price and efficiency for one gas station."""

    station: str
    visits: int
    avg_price_per_liter: float
    avg_kmpl: float
    avg_cost_per_km: float


@dataclass(frozen=True)
class RangeEstimate:
    """
    Remaining range in kilometers.

    When has_data is False the numbers are zero and message says what is
    missing.
    """

    has_data: bool
    avg: float = 0.0
    pessimistic: float = 0.0
    optimistic: float = 0.0
    message: str = ""


@dataclass(frozen=True)
class EconomyPoint:
    date: date
    km_per_liter: float


@dataclass(frozen=True)
class DashboardSummary:
    """Headline numbers for the dashboard."""

    total_spending: float
    average_km_per_liter: float
    pending_tasks: int
    estimated_range: RangeEstimate
    economy_series: List[EconomyPoint] = field(default_factory=list)
    spending_by_category: Dict[ExpenseCategory, float] = field(default_factory=dict)


@dataclass(frozen=True)
class Analysis:
    """Everything shown on the analysis view."""

    tank: Optional[TankAnalysis]
    trip_types: List[TripTypeEfficiency]
    segments: List[SegmentAverage]
    stations: List[StationStats]

    @property
    def has_efficiency_data(self) -> bool:
        return any(t.km_per_liter > 0 for t in self.trip_types)
