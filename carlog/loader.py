"""Loading, saving and importing logbook documents."""

import json
import logging
from pathlib import Path
from typing import Any, Dict, Optional, Union

import yaml
from jsonschema import ValidationError, validate

from .exceptions import ImportFormatError, RecordValidationError
from .expense import Expense
from .fuel_entry import FuelEntry
from .maintenance_task import MaintenanceTask
from .store import RecordStore, Snapshot
from .trip_report import TripReport
from .vehicle import Vehicle

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent / "schema.yaml"
ARRAY_KEYS = ("fuelEntries", "expenses", "maintenanceTasks", "tripReports")
YAML_SUFFIXES = (".yaml", ".yml")


def load_schema() -> dict:
    """Load the JSON schema for export documents."""
    with open(SCHEMA_PATH, encoding="utf-8") as f:
        return yaml.safe_load(f)


# =============================================================================
# Document -> records
# =============================================================================


def _parse_vehicle(dct: Optional[Dict[str, Any]]) -> Optional[Vehicle]:
    if dct is None:
        return None
    return Vehicle(
        make=dct["make"],
        model=dct["model"],
        year=dct["year"],
        mileage=dct.get("mileage", 0),
        vin=dct.get("vin"),
        tank_capacity=dct.get("tankCapacity"),
    )


def _parse_fuel_entry(dct: Dict[str, Any]) -> FuelEntry:
    return FuelEntry(
        id=dct["id"],
        date=dct["date"],
        odometer=dct["odometer"],
        liters=dct["liters"],
        price_per_liter=dct["pricePerLiter"],
        total_cost=dct["totalCost"],
        gas_station=dct["gasStation"],
        start_tank_percentage=dct.get("startTankPercentage"),
        end_tank_percentage=dct.get("endTankPercentage"),
        remaining_km=dct.get("remainingKm"),
        range_after_fill=dct.get("rangeAfterFill"),
        notes=dct.get("notes"),
    )


def _parse_trip_report(dct: Dict[str, Any]) -> TripReport:
    return TripReport(
        id=dct["id"],
        date=dct["date"],
        odometer=dct["odometer"],
        remaining_km=dct["remainingKm"],
        fuel_gauge_level=dct["fuelGaugeLevel"],
        trip_type=dct["tripType"],
        notes=dct.get("notes"),
    )


def _parse_maintenance_task(dct: Dict[str, Any]) -> MaintenanceTask:
    return MaintenanceTask(
        id=dct["id"],
        date=dct["date"],
        description=dct["description"],
        cost=dct["cost"],
        odometer=dct["odometer"],
        is_completed=dct["isCompleted"],
        location=dct.get("location"),
    )


def _parse_expense(dct: Dict[str, Any]) -> Expense:
    return Expense(
        id=dct["id"],
        date=dct["date"],
        category=dct["category"],
        description=dct["description"],
        cost=dct["cost"],
        location=dct.get("location"),
    )


def validate_document(data: Any, schema: Optional[dict] = None) -> None:
    """
    Check the shape of an export document.

    Raises ImportFormatError when the document is not an object, lacks the
    vehicle key, has a collection that is not an array, fails the schema or
    repeats a record id within one collection.
    """
    if not isinstance(data, dict):
        raise ImportFormatError("Document must be an object")
    if "vehicle" not in data:
        raise ImportFormatError("Document is missing the 'vehicle' key", "vehicle")
    for key in ARRAY_KEYS:
        if not isinstance(data.get(key), list):
            raise ImportFormatError(f"'{key}' must be an array", key)

    try:
        validate(instance=data, schema=schema or load_schema())
    except ValidationError as e:
        path = ".".join(str(p) for p in e.path) or None
        raise ImportFormatError(f"Schema validation error: {e.message}", path)

    for key in ARRAY_KEYS:
        seen = set()
        for index, record in enumerate(data[key]):
            if record["id"] in seen:
                raise ImportFormatError(
                    f"Duplicate id '{record['id']}' in '{key}'", f"{key}.{index}.id"
                )
            seen.add(record["id"])


def document_to_snapshot(data: Dict[str, Any]) -> Snapshot:
    """Validate a document and build every record from it."""
    validate_document(data)
    try:
        return Snapshot(
            vehicle=_parse_vehicle(data["vehicle"]),
            fuel_entries=tuple(_parse_fuel_entry(d) for d in data["fuelEntries"]),
            trip_reports=tuple(_parse_trip_report(d) for d in data["tripReports"]),
            maintenance_tasks=tuple(
                _parse_maintenance_task(d) for d in data["maintenanceTasks"]
            ),
            expenses=tuple(_parse_expense(d) for d in data["expenses"]),
        )
    except RecordValidationError as e:
        raise ImportFormatError(f"Invalid record: {e}", e.field)


def import_document(store: RecordStore, data: Any) -> Snapshot:
    """
    Replace the whole store with the contents of a document.

    Every record is built before the store is touched, so a rejected
    document leaves the existing state as it was.
    """
    try:
        snapshot = document_to_snapshot(data)
    except ImportFormatError as e:
        logger.warning("Rejected import document: %s", e)
        raise
    store.replace_all(snapshot)
    logger.info(
        "Imported %d fuel entries, %d trip reports, %d tasks, %d expenses",
        len(snapshot.fuel_entries),
        len(snapshot.trip_reports),
        len(snapshot.maintenance_tasks),
        len(snapshot.expenses),
    )
    return snapshot


# =============================================================================
# Records -> document
# =============================================================================


def _drop_none(d: Dict[str, Any]) -> Dict[str, Any]:
    """Omit unset optional fields for a cleaner document."""
    return {k: v for k, v in d.items() if v is not None}


def _vehicle_to_dict(vehicle: Vehicle) -> Dict[str, Any]:
    return _drop_none(
        {
            "make": vehicle.make,
            "model": vehicle.model,
            "year": vehicle.year,
            "mileage": vehicle.mileage,
            "vin": vehicle.vin,
            "tankCapacity": vehicle.tank_capacity,
        }
    )


def _fuel_entry_to_dict(entry: FuelEntry) -> Dict[str, Any]:
    return _drop_none(
        {
            "id": entry.id,
            "date": entry.date.isoformat(),
            "odometer": entry.odometer,
            "liters": entry.liters,
            "pricePerLiter": entry.price_per_liter,
            "totalCost": entry.total_cost,
            "gasStation": entry.gas_station,
            "startTankPercentage": entry.start_tank_percentage,
            "endTankPercentage": entry.end_tank_percentage,
            "remainingKm": entry.remaining_km,
            "rangeAfterFill": entry.range_after_fill,
            "notes": entry.notes,
        }
    )


def _trip_report_to_dict(report: TripReport) -> Dict[str, Any]:
    return _drop_none(
        {
            "id": report.id,
            "date": report.date.isoformat(),
            "odometer": report.odometer,
            "remainingKm": report.remaining_km,
            "fuelGaugeLevel": report.fuel_gauge_level,
            "tripType": report.trip_type.value,
            "notes": report.notes,
        }
    )


def _maintenance_task_to_dict(task: MaintenanceTask) -> Dict[str, Any]:
    return _drop_none(
        {
            "id": task.id,
            "date": task.date.isoformat(),
            "description": task.description,
            "cost": task.cost,
            "odometer": task.odometer,
            "isCompleted": task.is_completed,
            "location": task.location,
        }
    )


def _expense_to_dict(expense: Expense) -> Dict[str, Any]:
    return _drop_none(
        {
            "id": expense.id,
            "date": expense.date.isoformat(),
            "category": expense.category.value,
            "description": expense.description,
            "cost": expense.cost,
            "location": expense.location,
        }
    )


def snapshot_to_document(snapshot: Snapshot) -> Dict[str, Any]:
    """Export document for a snapshot."""
    return {
        "vehicle": _vehicle_to_dict(snapshot.vehicle) if snapshot.vehicle else None,
        "fuelEntries": [_fuel_entry_to_dict(e) for e in snapshot.fuel_entries],
        "expenses": [_expense_to_dict(e) for e in snapshot.expenses],
        "maintenanceTasks": [
            _maintenance_task_to_dict(t) for t in snapshot.maintenance_tasks
        ],
        "tripReports": [_trip_report_to_dict(r) for r in snapshot.trip_reports],
    }


# =============================================================================
# Files
# =============================================================================


def read_document(filename: Union[str, Path]) -> Any:
    """
    Read a document from a JSON or YAML file.

    YAML dates are turned back into ISO strings so both formats produce the
    same document. Unparseable files raise ImportFormatError.
    """
    path = Path(filename)
    try:
        if path.suffix.lower() in YAML_SUFFIXES:
            with open(path, "rb") as fp:
                json_data = json.dumps(
                    yaml.load(fp, Loader=yaml.SafeLoader), default=str
                )
            return json.loads(json_data)
        with open(path, encoding="utf-8") as fp:
            return json.load(fp)
    except (yaml.YAMLError, json.JSONDecodeError) as e:
        raise ImportFormatError(f"Could not parse {path.name}: {e}")


def write_document(filename: Union[str, Path], data: Dict[str, Any]) -> None:
    """Write a document as YAML (.yaml/.yml) or JSON (anything else)."""
    path = Path(filename)
    with open(path, "w", encoding="utf-8") as fp:
        if path.suffix.lower() in YAML_SUFFIXES:
            yaml.dump(
                data,
                fp,
                default_flow_style=False,
                allow_unicode=True,
                sort_keys=False,
                width=120,
            )
        else:
            json.dump(data, fp, indent=2, ensure_ascii=False)


def load_store(filename: Union[str, Path]) -> RecordStore:
    """Load a logbook file into a store; a missing file gives an empty store."""
    path = Path(filename)
    store = RecordStore()
    if not path.exists():
        logger.debug("No logbook at %s, starting empty", path)
        return store
    import_document(store, read_document(path))
    return store


def save_store(filename: Union[str, Path], store: RecordStore) -> None:
    """Write the store to a logbook file."""
    write_document(filename, snapshot_to_document(store.snapshot()))
    logger.info("Saved logbook to %s", filename)
