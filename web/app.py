"""Flask JSON API over the vehicle logbook."""

import logging
from dataclasses import asdict, is_dataclass
from datetime import date
from enum import Enum
from pathlib import Path
from typing import Optional, Union

from flask import Flask, current_app, jsonify, request

from carlog import (
    CarlogError,
    Expense,
    FuelEntry,
    ImportFormatError,
    MaintenanceTask,
    RecordNotFoundError,
    RecordStore,
    RecordValidationError,
    TripReport,
    Vehicle,
    analyze,
    estimate_range,
    import_document,
    load_store,
    new_id,
    rank_stations,
    save_store,
    snapshot_to_document,
    station_stats,
    summarize,
)
from carlog.config import Config

logger = logging.getLogger(__name__)


def to_json(value):
    """Turn result dataclasses, enums and dates into JSON-friendly values."""
    if is_dataclass(value):
        return to_json(asdict(value))
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, date):
        return value.isoformat()
    if isinstance(value, dict):
        return {to_json(k): to_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [to_json(v) for v in value]
    return value


def _error(message: str, status: int):
    return jsonify({"error": message}), status


def _data_file() -> Path:
    return Path(current_app.config["DATA_FILE"])


def _load() -> RecordStore:
    return load_store(_data_file())


def _save(store: RecordStore) -> None:
    save_store(_data_file(), store)


def _json_body(*required: str) -> dict:
    """The request's JSON object, checked for the required fields."""
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ImportFormatError("Request body must be a JSON object")
    for name in required:
        if name not in data:
            raise RecordValidationError(f"Missing field: {name}", name)
    return data


DELETERS = {
    "fuel": RecordStore.delete_fuel_entry,
    "reports": RecordStore.delete_trip_report,
    "expenses": RecordStore.delete_expense,
    "tasks": RecordStore.delete_maintenance_task,
}


def create_app(data_file: Optional[Union[str, Path]] = None) -> Flask:
    """Build the app; the logbook file defaults to Config.DATA_FILE."""
    app = Flask(__name__)
    app.secret_key = Config.SECRET_KEY
    app.config["DATA_FILE"] = str(data_file or Config.DATA_FILE)

    @app.errorhandler(RecordNotFoundError)
    def handle_not_found(e):
        return _error(str(e), 404)

    @app.errorhandler(CarlogError)
    def handle_carlog_error(e):
        logger.info("Rejected request to %s: %s", request.path, e)
        return _error(str(e), 400)

    # -------------------------------------------------------------------------
    # Derived statistics
    # -------------------------------------------------------------------------

    @app.route("/api/summary")
    def summary():
        return jsonify(to_json(summarize(_load().snapshot())))

    @app.route("/api/analysis")
    def analysis():
        result = analyze(_load().snapshot())
        payload = to_json(result)
        payload["has_efficiency_data"] = result.has_efficiency_data
        if result.tank is not None:
            payload["tank"]["liters_per_segment"] = result.tank.liters_per_segment
        return jsonify(payload)

    @app.route("/api/stations")
    def stations():
        stats = rank_stations(station_stats(_load().snapshot().fuel_entries))
        return jsonify(to_json(stats))

    @app.route("/api/range")
    def range_estimate():
        snapshot = _load().snapshot()
        estimate = estimate_range(
            snapshot.fuel_entries, snapshot.trip_reports, snapshot.vehicle
        )
        return jsonify(to_json(estimate))

    # -------------------------------------------------------------------------
    # Export / import
    # -------------------------------------------------------------------------

    @app.route("/api/export")
    def export():
        return jsonify(snapshot_to_document(_load().snapshot()))

    @app.route("/api/import", methods=["POST"])
    def import_logbook():
        store = _load()
        snapshot = import_document(store, request.get_json(silent=True))
        _save(store)
        return jsonify(
            {
                "fuelEntries": len(snapshot.fuel_entries),
                "tripReports": len(snapshot.trip_reports),
                "maintenanceTasks": len(snapshot.maintenance_tasks),
                "expenses": len(snapshot.expenses),
            }
        )

    # -------------------------------------------------------------------------
    # Vehicle profile
    # -------------------------------------------------------------------------

    @app.route("/api/vehicle")
    def get_vehicle():
        vehicle = _load().vehicle
        return jsonify(to_json(vehicle) if vehicle is not None else None)

    @app.route("/api/vehicle", methods=["PUT"])
    def set_vehicle():
        data = _json_body("make", "model", "year")
        vehicle = Vehicle(
            make=data["make"],
            model=data["model"],
            year=data["year"],
            mileage=data.get("mileage", 0),
            vin=data.get("vin"),
            tank_capacity=data.get("tankCapacity"),
        )
        store = _load()
        store.set_vehicle(vehicle)
        _save(store)
        return jsonify(to_json(vehicle))

    @app.route("/api/vehicle", methods=["DELETE"])
    def clear_vehicle():
        store = _load()
        store.clear_vehicle()
        _save(store)
        return "", 204

    # -------------------------------------------------------------------------
    # Records
    # -------------------------------------------------------------------------

    @app.route("/api/fuel", methods=["POST"])
    def add_fuel():
        data = _json_body("odometer", "pricePerLiter", "totalCost", "gasStation")
        entry = FuelEntry.create(
            id=new_id(),
            date=data.get("date") or date.today().isoformat(),
            odometer=data["odometer"],
            price_per_liter=data["pricePerLiter"],
            total_cost=data["totalCost"],
            gas_station=data["gasStation"],
            start_tank_percentage=data.get("startTankPercentage"),
            end_tank_percentage=data.get("endTankPercentage"),
            remaining_km=data.get("remainingKm"),
            range_after_fill=data.get("rangeAfterFill"),
            notes=data.get("notes"),
        )
        store = _load()
        store.add_fuel_entry(entry)
        _save(store)
        return jsonify(to_json(entry)), 201

    @app.route("/api/reports", methods=["POST"])
    def add_report():
        data = _json_body("date", "odometer", "remainingKm", "fuelGaugeLevel")
        report = TripReport(
            id=new_id(),
            date=data["date"],
            odometer=data["odometer"],
            remaining_km=data["remainingKm"],
            fuel_gauge_level=data["fuelGaugeLevel"],
            trip_type=data.get("tripType", "Trabajo"),
            notes=data.get("notes"),
        )
        store = _load()
        store.add_trip_report(report)
        _save(store)
        return jsonify(to_json(report)), 201

    @app.route("/api/expenses", methods=["POST"])
    def add_expense():
        data = _json_body("category", "description", "cost")
        expense = Expense(
            id=new_id(),
            date=data.get("date") or date.today().isoformat(),
            category=data["category"],
            description=data["description"],
            cost=data["cost"],
            location=data.get("location"),
        )
        store = _load()
        store.add_expense(expense)
        _save(store)
        return jsonify(to_json(expense)), 201

    @app.route("/api/tasks", methods=["POST"])
    def add_task():
        data = _json_body("description", "cost", "odometer")
        task = MaintenanceTask(
            id=new_id(),
            date=data.get("date") or date.today().isoformat(),
            description=data["description"],
            cost=data["cost"],
            odometer=data["odometer"],
            is_completed=data.get("isCompleted", False),
            location=data.get("location"),
        )
        store = _load()
        store.add_maintenance_task(task)
        _save(store)
        return jsonify(to_json(task)), 201

    @app.route("/api/tasks/<task_id>/toggle", methods=["POST"])
    def toggle_task(task_id: str):
        store = _load()
        task = store.toggle_maintenance_task(task_id)
        _save(store)
        return jsonify(to_json(task))

    @app.route("/api/<kind>/<record_id>", methods=["DELETE"])
    def delete_record(kind: str, record_id: str):
        if kind not in DELETERS:
            return _error(f"Unknown record kind '{kind}'", 404)
        store = _load()
        DELETERS[kind](store, record_id)
        _save(store)
        return "", 204

    return app


if __name__ == "__main__":
    logging.basicConfig(level=Config.LOG_LEVEL)
    create_app().run(debug=True, host=Config.FLASK_HOST, port=Config.FLASK_PORT)
