"""Fuel economy broken down by declared trip type."""

from typing import Dict, Iterable, List, Optional

from .calculations import consecutive_pairs, liters_per_segment
from .ordering import sort_by_odometer
from .results import TripTypeEfficiency
from .trip_report import TripReport
from .trip_type import TripType


def _placeholder() -> List[TripTypeEfficiency]:
    return [TripTypeEfficiency(trip_type=t, km_per_liter=0.0) for t in TripType]


def efficiency_by_trip_type(
    trip_reports: Iterable[TripReport], capacity: Optional[float]
) -> List[TripTypeEfficiency]:
    """
    km/l per trip type from gauge drops between consecutive reports.

    Each segment dropped counts as capacity / 12 liters. Distance and fuel of
    a pair are credited to the trip type of the later report, the one that
    describes how the stretch was driven. Every trip type is always present,
    in enum order; without two reports or a capacity all read 0.
    """
    reports = sort_by_odometer(trip_reports)
    if len(reports) < 2 or not capacity or capacity <= 0:
        return _placeholder()

    per_segment = liters_per_segment(capacity)
    totals: Dict[TripType, Dict[str, float]] = {
        t: {"km": 0.0, "liters": 0.0} for t in TripType
    }

    for prev, curr in consecutive_pairs(reports):
        km_driven = curr.odometer - prev.odometer
        segments_used = prev.fuel_gauge_level - curr.fuel_gauge_level
        if km_driven > 0 and segments_used > 0:
            totals[curr.trip_type]["km"] += km_driven
            totals[curr.trip_type]["liters"] += segments_used * per_segment

    results = []
    for trip_type, data in totals.items():
        kmpl = data["km"] / data["liters"] if data["liters"] > 0 else 0.0
        results.append(TripTypeEfficiency(trip_type=trip_type, km_per_liter=round(kmpl, 2)))
    return results
