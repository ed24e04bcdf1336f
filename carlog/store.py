"""
In-memory record store and the immutable snapshots handed to analyzers.

The store is the only writer. Analyzers receive a Snapshot (tuples of frozen
records) and recompute everything from it; nothing is updated
incrementally.
"""

import logging
import uuid
from dataclasses import dataclass, field
from typing import Dict, Optional, Tuple

from .exceptions import RecordNotFoundError
from .expense import Expense
from .fuel_entry import FuelEntry
from .maintenance_task import MaintenanceTask
from .trip_report import TripReport
from .vehicle import Vehicle

logger = logging.getLogger(__name__)


def new_id() -> str:
    """Generate a record identifier."""
    return uuid.uuid4().hex


@dataclass(frozen=True)
class Snapshot:
    """Read-only view of the whole logbook at one point in time."""

    vehicle: Optional[Vehicle] = None
    fuel_entries: Tuple[FuelEntry, ...] = field(default_factory=tuple)
    trip_reports: Tuple[TripReport, ...] = field(default_factory=tuple)
    maintenance_tasks: Tuple[MaintenanceTask, ...] = field(default_factory=tuple)
    expenses: Tuple[Expense, ...] = field(default_factory=tuple)


class RecordStore:
    """Vehicle profile plus four id-keyed record collections."""

    def __init__(self, snapshot: Optional[Snapshot] = None):
        self.vehicle: Optional[Vehicle] = None
        self._fuel_entries: Dict[str, FuelEntry] = {}
        self._trip_reports: Dict[str, TripReport] = {}
        self._maintenance_tasks: Dict[str, MaintenanceTask] = {}
        self._expenses: Dict[str, Expense] = {}
        if snapshot is not None:
            self.replace_all(snapshot)

    # -------------------------------------------------------------------------
    # Snapshots
    # -------------------------------------------------------------------------

    def snapshot(self) -> Snapshot:
        return Snapshot(
            vehicle=self.vehicle,
            fuel_entries=tuple(self._fuel_entries.values()),
            trip_reports=tuple(self._trip_reports.values()),
            maintenance_tasks=tuple(self._maintenance_tasks.values()),
            expenses=tuple(self._expenses.values()),
        )

    def replace_all(self, snapshot: Snapshot) -> None:
        """Replace every collection and the vehicle wholesale."""
        self.vehicle = snapshot.vehicle
        self._fuel_entries = {e.id: e for e in snapshot.fuel_entries}
        self._trip_reports = {r.id: r for r in snapshot.trip_reports}
        self._maintenance_tasks = {t.id: t for t in snapshot.maintenance_tasks}
        self._expenses = {e.id: e for e in snapshot.expenses}
        logger.debug(
            "Replaced logbook: %d fuel entries, %d trip reports, %d tasks, %d expenses",
            len(self._fuel_entries),
            len(self._trip_reports),
            len(self._maintenance_tasks),
            len(self._expenses),
        )

    # -------------------------------------------------------------------------
    # Vehicle
    # -------------------------------------------------------------------------

    def set_vehicle(self, vehicle: Vehicle) -> None:
        self.vehicle = vehicle

    def clear_vehicle(self) -> None:
        self.vehicle = None

    # -------------------------------------------------------------------------
    # Additions
    # -------------------------------------------------------------------------

    def add_fuel_entry(self, entry: FuelEntry) -> FuelEntry:
        """Add a fill; the vehicle mileage follows the odometer forward."""
        self._fuel_entries[entry.id] = entry
        if self.vehicle is not None and entry.odometer > self.vehicle.mileage:
            logger.debug(
                "Advancing mileage %s -> %s", self.vehicle.mileage, entry.odometer
            )
            self.vehicle = self.vehicle.with_mileage(entry.odometer)
        return entry

    def add_trip_report(self, report: TripReport) -> TripReport:
        self._trip_reports[report.id] = report
        return report

    def add_maintenance_task(self, task: MaintenanceTask) -> MaintenanceTask:
        self._maintenance_tasks[task.id] = task
        return task

    def add_expense(self, expense: Expense) -> Expense:
        self._expenses[expense.id] = expense
        return expense

    # -------------------------------------------------------------------------
    # Deletions and updates
    # -------------------------------------------------------------------------

    @staticmethod
    def _pop(collection: dict, kind: str, record_id: str):
        if record_id not in collection:
            raise RecordNotFoundError(kind, record_id)
        logger.debug("Deleting %s %s", kind, record_id)
        return collection.pop(record_id)

    def delete_fuel_entry(self, record_id: str) -> FuelEntry:
        return self._pop(self._fuel_entries, "fuel entry", record_id)

    def delete_trip_report(self, record_id: str) -> TripReport:
        return self._pop(self._trip_reports, "trip report", record_id)

    def delete_maintenance_task(self, record_id: str) -> MaintenanceTask:
        return self._pop(self._maintenance_tasks, "maintenance task", record_id)

    def delete_expense(self, record_id: str) -> Expense:
        return self._pop(self._expenses, "expense", record_id)

    def toggle_maintenance_task(self, record_id: str) -> MaintenanceTask:
        """Flip a task's completion flag and return the updated task."""
        if record_id not in self._maintenance_tasks:
            raise RecordNotFoundError("maintenance task", record_id)
        task = self._maintenance_tasks[record_id].toggled()
        self._maintenance_tasks[record_id] = task
        return task
