"""Average distance driven per single fuel-gauge segment."""

from typing import Dict, Iterable, List

from .calculations import consecutive_pairs
from .ordering import sort_by_odometer
from .results import SegmentAverage
from .trip_report import TripReport


def segment_label(start_level: int, end_level: int) -> str:
    """Chart label for a gauge transition, e.g. "8 → 7"."""
    return f"{start_level} → {end_level}"


def km_per_segment(trip_reports: Iterable[TripReport]) -> List[SegmentAverage]:
    """
    Average km driven for each one-segment gauge drop.

    Only consecutive reports (by odometer) where the gauge fell by exactly
    one segment over a positive distance are counted; larger drops mix two
    partial segments. Results are ordered fullest segment first.
    """
    reports = sort_by_odometer(trip_reports)
    if len(reports) < 2:
        return []

    totals: Dict[int, List[float]] = {}
    for prev, curr in consecutive_pairs(reports):
        km_driven = curr.odometer - prev.odometer
        segments_used = prev.fuel_gauge_level - curr.fuel_gauge_level
        if km_driven > 0 and segments_used == 1:
            totals.setdefault(prev.fuel_gauge_level, []).append(km_driven)

    return [
        SegmentAverage(
            label=segment_label(start, start - 1),
            average_km=round(sum(kms) / len(kms), 1),
        )
        for start, kms in sorted(totals.items(), reverse=True)
    ]
