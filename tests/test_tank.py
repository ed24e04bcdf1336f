#!/usr/bin/env python3
"""Tests for tank capacity estimation and the effective capacity policy."""

import pytest

from carlog import (
    CapacitySource,
    analyze_tank,
    effective_tank_capacity,
    estimate_tank_capacity,
)
from factories import FuelEntryFactory, VehicleFactory


def fill(liters, start, end, **kwargs):
    """A fill with gauge readings before and after."""
    return FuelEntryFactory.create(
        liters=liters, start_tank_percentage=start, end_tank_percentage=end, **kwargs
    )


class TestEstimateTankCapacity:
    """Tests for estimate_tank_capacity."""

    def test_fewer_than_three_qualifying_entries(self):
        entries = [fill(50, 0, 50), fill(55, 0, 50)]
        assert estimate_tank_capacity(entries) is None

    def test_non_qualifying_entries_do_not_count(self):
        entries = [
            fill(50, 0, 50),
            fill(55, 0, 50),
            fill(30, 50, 50),  # gauge did not rise
            fill(0, 10, 60),  # no liters
            FuelEntryFactory.create(liters=40, start_tank_percentage=10),
        ]
        assert estimate_tank_capacity(entries) is None

    def test_mean_of_estimates(self):
        entries = [fill(50, 0, 50), fill(55, 0, 50), fill(60, 50, 100)]
        # 100, 110, 120
        assert estimate_tank_capacity(entries) == pytest.approx(110.0)

    def test_outliers_excluded(self):
        entries = [
            fill(50, 0, 50),  # 100
            fill(80, 50, 100),  # 160, above the plausible range
            fill(55, 0, 50),  # 110
        ]
        assert estimate_tank_capacity(entries) == pytest.approx(105.0)

    def test_bounds_are_exclusive(self):
        entries = [
            fill(10, 50, 100),  # exactly 20
            fill(75, 50, 100),  # exactly 150
            fill(50, 0, 50),  # 100
        ]
        assert estimate_tank_capacity(entries) == pytest.approx(100.0)

    def test_all_outliers(self):
        entries = [fill(5, 50, 100), fill(6, 50, 100), fill(90, 50, 100)]
        assert estimate_tank_capacity(entries) is None


class TestEffectiveTankCapacity:
    """Tests for effective_tank_capacity."""

    @pytest.fixture
    def entries(self):
        return [fill(50, 0, 50), fill(55, 0, 50), fill(60, 50, 100)]

    def test_manual_wins(self, entries):
        vehicle = VehicleFactory.create(tank_capacity=48)
        assert effective_tank_capacity(vehicle, entries) == (48.0, CapacitySource.MANUAL)

    def test_falls_back_to_estimate(self, entries):
        vehicle = VehicleFactory.create(tank_capacity=0)
        capacity, source = effective_tank_capacity(vehicle, entries)
        assert capacity == pytest.approx(110.0)
        assert source is CapacitySource.ESTIMATED

    def test_no_vehicle_uses_estimate(self, entries):
        capacity, source = effective_tank_capacity(None, entries)
        assert capacity == pytest.approx(110.0)
        assert source is CapacitySource.ESTIMATED

    def test_neither_available(self):
        assert effective_tank_capacity(None, []) == (None, None)


class TestAnalyzeTank:
    """Tests for analyze_tank."""

    def test_none_without_start_readings(self):
        assert analyze_tank(None, [FuelEntryFactory.create()]) is None

    def test_manual_capacity(self):
        vehicle = VehicleFactory.create(tank_capacity=48)
        entries = [
            FuelEntryFactory.create(start_tank_percentage=20),
            FuelEntryFactory.create(start_tank_percentage=30),
            FuelEntryFactory.create(),
        ]
        analysis = analyze_tank(vehicle, entries)
        assert analysis.average_start_percentage == pytest.approx(25.0)
        assert analysis.effective_capacity == 48.0
        assert analysis.capacity_source is CapacitySource.MANUAL
        assert analysis.sample_size == 2
        assert analysis.liters_per_segment == pytest.approx(4.0)

    def test_estimated_without_enough_data(self):
        entries = [fill(50, 0, 50)]
        analysis = analyze_tank(None, entries)
        assert analysis.effective_capacity is None
        assert analysis.capacity_source is CapacitySource.ESTIMATED
        assert analysis.liters_per_segment is None
