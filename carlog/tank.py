"""Tank capacity estimation and the effective capacity policy."""

from typing import Iterable, List, Optional, Tuple

from .calculations import mean
from .constants import (
    MAX_PLAUSIBLE_CAPACITY_L,
    MIN_CAPACITY_SAMPLES,
    MIN_PLAUSIBLE_CAPACITY_L,
)
from .fuel_entry import FuelEntry
from .results import CapacitySource, TankAnalysis
from .vehicle import Vehicle


def _qualifying_entries(fuel_entries: Iterable[FuelEntry]) -> List[FuelEntry]:
    """Fills with both gauge readings, some liters and a rising gauge."""
    return [
        e
        for e in fuel_entries
        if e.has_tank_readings
        and e.liters > 0
        and e.end_tank_percentage - e.start_tank_percentage > 0
    ]


def estimate_tank_capacity(fuel_entries: Iterable[FuelEntry]) -> Optional[float]:
    """
    Estimate the tank capacity in liters from fills with gauge readings.

    Each qualifying fill gives liters / (percentage gained / 100). Estimates
    outside (20, 150) liters are dropped as outliers and the rest averaged.
    Returns None with fewer than three qualifying fills or no survivors.
    """
    entries = _qualifying_entries(fuel_entries)
    if len(entries) < MIN_CAPACITY_SAMPLES:
        return None

    estimates = []
    for entry in entries:
        delta = entry.end_tank_percentage - entry.start_tank_percentage
        capacity = entry.liters / (delta / 100)
        if MIN_PLAUSIBLE_CAPACITY_L < capacity < MAX_PLAUSIBLE_CAPACITY_L:
            estimates.append(capacity)
    return mean(estimates)


def effective_tank_capacity(
    vehicle: Optional[Vehicle], fuel_entries: Iterable[FuelEntry]
) -> Tuple[Optional[float], Optional[CapacitySource]]:
    """
    Capacity used for calculations and where it came from.

    A manual capacity on the vehicle profile always wins; otherwise the
    estimate is used. (None, None) when neither is available.
    """
    if vehicle is not None and vehicle.has_tank_capacity:
        return vehicle.tank_capacity, CapacitySource.MANUAL
    estimate = estimate_tank_capacity(fuel_entries)
    if estimate is None:
        return None, None
    return estimate, CapacitySource.ESTIMATED


def analyze_tank(
    vehicle: Optional[Vehicle], fuel_entries: Iterable[FuelEntry]
) -> Optional[TankAnalysis]:
    """Refill habits plus effective capacity; None without any start reading."""
    fuel_entries = list(fuel_entries)
    with_start = [e for e in fuel_entries if e.start_tank_percentage is not None]
    if not with_start:
        return None

    capacity, _ = effective_tank_capacity(vehicle, fuel_entries)
    source = (
        CapacitySource.MANUAL
        if vehicle is not None and vehicle.has_tank_capacity
        else CapacitySource.ESTIMATED
    )
    return TankAnalysis(
        average_start_percentage=mean(e.start_tank_percentage for e in with_start),
        effective_capacity=capacity,
        capacity_source=source,
        sample_size=len(with_start),
    )
