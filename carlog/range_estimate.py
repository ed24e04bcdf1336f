"""Remaining range estimate from fuel history and the latest tank level."""

from typing import Iterable, List, Optional

from .calculations import calc_economy, consecutive_pairs, gauge_to_percentage
from .fuel_entry import FuelEntry
from .ordering import latest, record_timestamp, sort_by_odometer
from .results import RangeEstimate
from .trip_report import TripReport
from .vehicle import Vehicle

MSG_DEFINE_TANK_CAPACITY = "Define the tank capacity in the vehicle profile."
MSG_NEED_MORE_FUEL_ENTRIES = "More fuel entries are needed."
MSG_CANNOT_COMPUTE_ECONOMY = "Fuel economy cannot be computed."
MSG_RECORD_TANK_LEVEL = "Record the current tank level to estimate range."


def per_fill_economies(fuel_entries: Iterable[FuelEntry]) -> List[float]:
    """km/l of every fill that has a previous fill behind it (odometer order)."""
    entries = sort_by_odometer(fuel_entries)
    economies = []
    for prev, curr in consecutive_pairs(entries):
        economy = calc_economy(curr.odometer - prev.odometer, curr.liters)
        if economy is not None:
            economies.append(economy)
    return economies


def average_economy(fuel_entries: Iterable[FuelEntry]) -> float:
    """
    Overall km/l: odometer span over the liters of every fill but the first.

    The first fill only marks the starting point; the fuel it bought is
    burnt before the second fill. Returns 0 when it cannot be computed.
    """
    entries = sort_by_odometer(fuel_entries)
    if len(entries) < 2:
        return 0.0
    total_distance = entries[-1].odometer - entries[0].odometer
    total_liters = sum(e.liters for e in entries[1:])
    if total_distance <= 0 or total_liters <= 0:
        return 0.0
    return total_distance / total_liters


def current_fuel_percentage(
    fuel_entries: Iterable[FuelEntry], trip_reports: Iterable[TripReport]
) -> Optional[float]:
    """
    Latest known tank level in percent.

    The newest fill wins when it is at least as recent as the newest report
    and has an end reading; otherwise the newest report's gauge is used.
    """
    last_fill = latest(fuel_entries)
    last_report = latest(trip_reports)

    if last_fill is not None and last_fill.end_tank_percentage is not None:
        if last_report is None or record_timestamp(last_fill) >= record_timestamp(
            last_report
        ):
            return last_fill.end_tank_percentage
    if last_report is not None:
        return gauge_to_percentage(last_report.fuel_gauge_level)
    return None


def estimate_range(
    fuel_entries: Iterable[FuelEntry],
    trip_reports: Iterable[TripReport],
    vehicle: Optional[Vehicle],
) -> RangeEstimate:
    """
    Average, pessimistic and optimistic range for the fuel left in the tank.

    Liters in the tank are multiplied by the overall km/l and by the worst
    and best single-fill km/l. Missing inputs are reported through
    RangeEstimate.message, checked in order: manual tank capacity, at least
    two fills, a computable economy, a known tank level.
    """
    fuel_entries = list(fuel_entries)
    if vehicle is None or not vehicle.has_tank_capacity:
        return RangeEstimate(has_data=False, message=MSG_DEFINE_TANK_CAPACITY)
    if len(fuel_entries) < 2:
        return RangeEstimate(has_data=False, message=MSG_NEED_MORE_FUEL_ENTRIES)

    economies = per_fill_economies(fuel_entries)
    avg_kml = average_economy(fuel_entries)
    if not economies or avg_kml <= 0:
        return RangeEstimate(has_data=False, message=MSG_CANNOT_COMPUTE_ECONOMY)

    percentage = current_fuel_percentage(fuel_entries, trip_reports)
    if percentage is None:
        return RangeEstimate(has_data=False, message=MSG_RECORD_TANK_LEVEL)

    liters_in_tank = percentage / 100 * vehicle.tank_capacity
    return RangeEstimate(
        has_data=True,
        avg=liters_in_tank * avg_kml,
        pessimistic=liters_in_tank * min(economies),
        optimistic=liters_in_tank * max(economies),
    )
