#!/usr/bin/env python3
"""Tests for km/l by trip type."""

from carlog import TripType, TripTypeEfficiency, efficiency_by_trip_type
from factories import TripReportFactory


def report(odometer, gauge, trip_type="Trabajo"):
    return TripReportFactory.create(
        odometer=odometer, fuel_gauge_level=gauge, trip_type=trip_type
    )


def as_dict(results):
    return {r.trip_type: r.km_per_liter for r in results}


class TestEfficiencyByTripType:
    """Tests for efficiency_by_trip_type."""

    def test_credits_later_report_type(self):
        reports = [report(0, 10, "Trabajo"), report(60, 9, "Carretera")]
        # 48 L tank -> 4 L per segment -> 60 km / 4 L
        results = efficiency_by_trip_type(reports, 48)
        assert as_dict(results) == {
            TripType.WORK: 0.0,
            TripType.HIGHWAY: 15.0,
            TripType.OTHER: 0.0,
        }

    def test_always_three_entries_in_order(self):
        results = efficiency_by_trip_type([report(0, 10), report(60, 9)], 48)
        assert [r.trip_type for r in results] == [
            TripType.WORK,
            TripType.HIGHWAY,
            TripType.OTHER,
        ]

    def test_placeholder_with_one_report(self):
        results = efficiency_by_trip_type([report(0, 10)], 48)
        assert results == [TripTypeEfficiency(t, 0.0) for t in TripType]

    def test_placeholder_without_capacity(self):
        reports = [report(0, 10), report(60, 9)]
        assert all(r.km_per_liter == 0 for r in efficiency_by_trip_type(reports, None))
        assert all(r.km_per_liter == 0 for r in efficiency_by_trip_type(reports, 0))

    def test_multi_segment_drops_count(self):
        reports = [report(0, 12, "Otro"), report(120, 9, "Otro")]
        # 3 segments * 4 L = 12 L
        assert as_dict(efficiency_by_trip_type(reports, 48))[TripType.OTHER] == 10.0

    def test_refills_and_standstills_skipped(self):
        reports = [
            report(0, 6, "Trabajo"),
            report(0, 5, "Trabajo"),
            report(50, 12, "Trabajo"),
            report(110, 11, "Trabajo"),
        ]
        assert as_dict(efficiency_by_trip_type(reports, 48))[TripType.WORK] == 15.0

    def test_accumulates_and_rounds(self):
        reports = [
            report(0, 12, "Carretera"),
            report(70, 11, "Carretera"),
            report(120, 10, "Carretera"),
        ]
        # 120 km / 7 L (3.5 L per segment) = 17.142857...
        assert as_dict(efficiency_by_trip_type(reports, 42))[TripType.HIGHWAY] == 17.14
