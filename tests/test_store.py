#!/usr/bin/env python3
"""Tests for the record store."""

import pytest

from carlog import RecordNotFoundError, RecordStore, Snapshot, new_id
from factories import (
    ExpenseFactory,
    FuelEntryFactory,
    MaintenanceTaskFactory,
    TripReportFactory,
    VehicleFactory,
)


@pytest.fixture
def store():
    return RecordStore(Snapshot(vehicle=VehicleFactory.create(mileage=40000)))


class TestNewId:
    def test_unique(self):
        assert len({new_id() for _ in range(100)}) == 100


class TestSnapshot:
    """Tests for snapshots handed to analyzers."""

    def test_empty_store(self):
        snapshot = RecordStore().snapshot()
        assert snapshot == Snapshot()

    def test_snapshot_does_not_follow_later_changes(self, store):
        before = store.snapshot()
        store.add_expense(ExpenseFactory.create())
        assert before.expenses == ()
        assert len(store.snapshot().expenses) == 1

    def test_insertion_order_is_kept(self, store):
        a = store.add_trip_report(TripReportFactory.create())
        b = store.add_trip_report(TripReportFactory.create())
        assert store.snapshot().trip_reports == (a, b)

    def test_replace_all(self, store):
        store.add_expense(ExpenseFactory.create())
        replacement = Snapshot(fuel_entries=(FuelEntryFactory.create(),))
        store.replace_all(replacement)
        assert store.snapshot() == replacement
        assert store.vehicle is None


class TestVehicle:
    """Tests for the vehicle profile."""

    def test_set_and_clear(self, store):
        vehicle = VehicleFactory.create(make="Honda", model="Fit")
        store.set_vehicle(vehicle)
        assert store.snapshot().vehicle == vehicle
        store.clear_vehicle()
        assert store.vehicle is None

    def test_fuel_entry_advances_mileage(self, store):
        store.add_fuel_entry(FuelEntryFactory.create(odometer=40500))
        assert store.vehicle.mileage == 40500

    def test_older_fuel_entry_keeps_mileage(self, store):
        store.add_fuel_entry(FuelEntryFactory.create(odometer=39000))
        assert store.vehicle.mileage == 40000

    def test_fuel_entry_without_vehicle(self):
        store = RecordStore()
        store.add_fuel_entry(FuelEntryFactory.create(odometer=100))
        assert store.vehicle is None

    def test_trip_report_does_not_touch_mileage(self, store):
        store.add_trip_report(TripReportFactory.create(odometer=50000))
        assert store.vehicle.mileage == 40000


class TestDelete:
    """Tests for record deletion."""

    @pytest.mark.parametrize(
        "add, delete, factory",
        [
            ("add_fuel_entry", "delete_fuel_entry", FuelEntryFactory),
            ("add_trip_report", "delete_trip_report", TripReportFactory),
            ("add_maintenance_task", "delete_maintenance_task", MaintenanceTaskFactory),
            ("add_expense", "delete_expense", ExpenseFactory),
        ],
    )
    def test_delete_returns_record(self, store, add, delete, factory):
        record = getattr(store, add)(factory.create())
        assert getattr(store, delete)(record.id) == record
        with pytest.raises(RecordNotFoundError):
            getattr(store, delete)(record.id)

    def test_unknown_id(self, store):
        with pytest.raises(RecordNotFoundError) as exc_info:
            store.delete_expense("missing")
        assert str(exc_info.value) == "No expense with id 'missing'"
        assert exc_info.value.record_id == "missing"

    def test_not_found_is_a_key_error(self, store):
        with pytest.raises(KeyError):
            store.delete_fuel_entry("missing")

    def test_delete_then_add_changes_only_the_id(self, store):
        original = store.add_fuel_entry(FuelEntryFactory.create(odometer=40100))
        store.delete_fuel_entry(original.id)
        fields = {
            name: getattr(original, name)
            for name in original.__dataclass_fields__
            if name != "id"
        }
        readded = store.add_fuel_entry(FuelEntryFactory.create(**fields))
        assert readded.id != original.id
        assert store.snapshot().fuel_entries == (readded,)
        for name, value in fields.items():
            assert getattr(readded, name) == value


class TestToggle:
    """Tests for toggle_maintenance_task."""

    def test_toggle_twice(self, store):
        task = store.add_maintenance_task(MaintenanceTaskFactory.create())
        assert store.toggle_maintenance_task(task.id).is_completed
        assert not store.toggle_maintenance_task(task.id).is_completed

    def test_toggle_replaces_record(self, store):
        task = store.add_maintenance_task(MaintenanceTaskFactory.create())
        store.toggle_maintenance_task(task.id)
        stored = store.snapshot().maintenance_tasks[0]
        assert stored.id == task.id
        assert stored.is_completed
        assert not task.is_completed

    def test_toggle_unknown(self, store):
        with pytest.raises(RecordNotFoundError):
            store.toggle_maintenance_task("missing")
