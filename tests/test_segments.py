#!/usr/bin/env python3
"""Tests for the gauge-segment consumption analyzer."""

from carlog import SegmentAverage, km_per_segment
from carlog.segments import segment_label
from factories import TripReportFactory


def report(odometer, gauge, **kwargs):
    return TripReportFactory.create(odometer=odometer, fuel_gauge_level=gauge, **kwargs)


class TestKmPerSegment:
    """Tests for km_per_segment."""

    def test_single_drop(self):
        reports = [report(100, 8), report(140, 7)]
        assert km_per_segment(reports) == [SegmentAverage(label="8 → 7", average_km=40.0)]

    def test_fewer_than_two_reports(self):
        assert km_per_segment([]) == []
        assert km_per_segment([report(100, 8)]) == []

    def test_multi_segment_drop_excluded(self):
        reports = [report(100, 8), report(200, 6)]
        assert km_per_segment(reports) == []

    def test_sorted_by_odometer_before_pairing(self):
        reports = [report(140, 7), report(100, 8)]
        assert km_per_segment(reports)[0].average_km == 40.0

    def test_zero_distance_and_refills_excluded(self):
        reports = [report(100, 8), report(100, 7), report(150, 12)]
        assert km_per_segment(reports) == []

    def test_average_per_label(self):
        reports = [
            report(0, 8),
            report(40, 7),
            report(500, 8),  # refilled
            report(560, 7),
        ]
        assert km_per_segment(reports) == [SegmentAverage(label="8 → 7", average_km=50.0)]

    def test_fullest_segment_first(self):
        reports = [
            report(0, 12),
            report(50, 11),
            report(95, 10),
            report(130, 8),  # two segments, skipped
            report(170, 7),
        ]
        labels = [s.label for s in km_per_segment(reports)]
        assert labels == ["12 → 11", "11 → 10", "8 → 7"]

    def test_average_rounded_to_one_decimal(self):
        reports = [report(0, 8), report(40, 7), report(500, 8), report(541, 7), report(900, 8), report(941, 7)]
        # (40 + 41 + 41) / 3 = 40.666...
        assert km_per_segment(reports)[0].average_km == 40.7

    def test_idempotent(self):
        reports = [report(100, 8), report(140, 7), report(170, 6)]
        assert km_per_segment(reports) == km_per_segment(reports)


class TestSegmentLabel:
    def test_label(self):
        assert segment_label(12, 11) == "12 → 11"
