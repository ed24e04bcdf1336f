"""
Vehicle fuel and cost logbook.

This package provides the records and the analytics over them:
- Vehicle, FuelEntry, TripReport, MaintenanceTask, Expense: logged records
- TripType, ExpenseCategory: closed enumerations
- RecordStore, Snapshot: the single writer and its read-only views
- Analyzers: tank capacity, km per gauge segment, km/l by trip type,
  station ranking and range estimation
- Loader: export documents in JSON or YAML
"""

from .trip_type import TripType
from .expense_category import ExpenseCategory
from .vehicle import Vehicle
from .fuel_entry import FuelEntry
from .trip_report import TripReport
from .maintenance_task import MaintenanceTask
from .expense import Expense
from .exceptions import (
    CarlogError,
    ImportFormatError,
    RecordNotFoundError,
    RecordValidationError,
)
from .results import (
    Analysis,
    CapacitySource,
    DashboardSummary,
    EconomyPoint,
    RangeEstimate,
    SegmentAverage,
    StationStats,
    TankAnalysis,
    TripTypeEfficiency,
)
from .store import RecordStore, Snapshot, new_id
from .ordering import latest, sort_by_date_desc, sort_by_odometer
from .tank import analyze_tank, effective_tank_capacity, estimate_tank_capacity
from .segments import km_per_segment
from .trip_efficiency import efficiency_by_trip_type
from .stations import rank_stations, station_stats
from .range_estimate import (
    average_economy,
    current_fuel_percentage,
    estimate_range,
    per_fill_economies,
)
from .dashboard import analyze, summarize
from .loader import (
    import_document,
    load_store,
    save_store,
    snapshot_to_document,
    validate_document,
)

__all__ = [
    "TripType",
    "ExpenseCategory",
    "Vehicle",
    "FuelEntry",
    "TripReport",
    "MaintenanceTask",
    "Expense",
    "CarlogError",
    "ImportFormatError",
    "RecordNotFoundError",
    "RecordValidationError",
    "Analysis",
    "CapacitySource",
    "DashboardSummary",
    "EconomyPoint",
    "RangeEstimate",
    "SegmentAverage",
    "StationStats",
    "TankAnalysis",
    "TripTypeEfficiency",
    "RecordStore",
    "Snapshot",
    "new_id",
    "latest",
    "sort_by_date_desc",
    "sort_by_odometer",
    "analyze_tank",
    "effective_tank_capacity",
    "estimate_tank_capacity",
    "km_per_segment",
    "efficiency_by_trip_type",
    "rank_stations",
    "station_stats",
    "average_economy",
    "current_fuel_percentage",
    "estimate_range",
    "per_fill_economies",
    "analyze",
    "summarize",
    "import_document",
    "load_store",
    "save_store",
    "snapshot_to_document",
    "validate_document",
]
