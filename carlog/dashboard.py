"""Dashboard totals and the bundled analysis view."""

from typing import Dict, Iterable, List

from .calculations import calc_economy, consecutive_pairs
from .expense import Expense
from .expense_category import ExpenseCategory
from .fuel_entry import FuelEntry
from .maintenance_task import MaintenanceTask
from .ordering import sort_by_odometer
from .range_estimate import average_economy, estimate_range
from .results import Analysis, DashboardSummary, EconomyPoint
from .segments import km_per_segment
from .stations import rank_stations, station_stats
from .store import Snapshot
from .tank import analyze_tank, effective_tank_capacity
from .trip_efficiency import efficiency_by_trip_type


def total_spending(
    fuel_entries: Iterable[FuelEntry], expenses: Iterable[Expense]
) -> float:
    """Fuel plus every other expense. Maintenance task costs are not included."""
    return sum(e.total_cost for e in fuel_entries) + sum(e.cost for e in expenses)


def pending_task_count(tasks: Iterable[MaintenanceTask]) -> int:
    return sum(1 for t in tasks if not t.is_completed)


def fuel_economy_series(fuel_entries: Iterable[FuelEntry]) -> List[EconomyPoint]:
    """km/l of each fill in odometer order, for the economy line chart."""
    points = []
    for prev, curr in consecutive_pairs(sort_by_odometer(fuel_entries)):
        economy = calc_economy(curr.odometer - prev.odometer, curr.liters)
        if economy is not None and round(economy, 2) > 0:
            points.append(EconomyPoint(date=curr.date, km_per_liter=round(economy, 2)))
    return points


def spending_by_category(expenses: Iterable[Expense]) -> Dict[ExpenseCategory, float]:
    totals: Dict[ExpenseCategory, float] = {}
    for expense in expenses:
        totals[expense.category] = totals.get(expense.category, 0.0) + expense.cost
    return totals


def summarize(snapshot: Snapshot) -> DashboardSummary:
    """Compute the dashboard from a snapshot."""
    return DashboardSummary(
        total_spending=total_spending(snapshot.fuel_entries, snapshot.expenses),
        average_km_per_liter=average_economy(snapshot.fuel_entries),
        pending_tasks=pending_task_count(snapshot.maintenance_tasks),
        estimated_range=estimate_range(
            snapshot.fuel_entries, snapshot.trip_reports, snapshot.vehicle
        ),
        economy_series=fuel_economy_series(snapshot.fuel_entries),
        spending_by_category=spending_by_category(snapshot.expenses),
    )


def analyze(snapshot: Snapshot) -> Analysis:
    """Compute the analysis view from a snapshot."""
    capacity, _ = effective_tank_capacity(snapshot.vehicle, snapshot.fuel_entries)
    return Analysis(
        tank=analyze_tank(snapshot.vehicle, snapshot.fuel_entries),
        trip_types=efficiency_by_trip_type(snapshot.trip_reports, capacity),
        segments=km_per_segment(snapshot.trip_reports),
        stations=rank_stations(station_stats(snapshot.fuel_entries)),
    )
