"""Per gas station price, efficiency and cost-per-km."""

from typing import Dict, Iterable, List

from .calculations import calc_economy, consecutive_pairs
from .fuel_entry import FuelEntry
from .ordering import sort_by_odometer
from .results import StationStats


def station_stats(fuel_entries: Iterable[FuelEntry]) -> List[StationStats]:
    """
    Aggregate consecutive fills per station.

    A fill is credited to the station where it was bought: km/l uses the
    distance since the previous fill and the liters of this fill. Station
    names are compared exactly, so "Shell" and "shell " are separate
    stations. Stations appear in the order they were first credited.
    """
    entries = sort_by_odometer(fuel_entries)
    totals: Dict[str, Dict[str, float]] = {}

    for prev, curr in consecutive_pairs(entries):
        kmpl = calc_economy(curr.odometer - prev.odometer, curr.liters)
        if kmpl is None:
            continue
        cost_per_km = curr.price_per_liter / kmpl

        data = totals.setdefault(
            curr.gas_station,
            {"visits": 0, "liters": 0.0, "cost": 0.0, "kmpl": 0.0, "cost_per_km": 0.0},
        )
        data["visits"] += 1
        data["liters"] += curr.liters
        data["cost"] += curr.total_cost
        data["kmpl"] += kmpl
        data["cost_per_km"] += cost_per_km

    return [
        StationStats(
            station=station,
            visits=int(data["visits"]),
            avg_price_per_liter=data["cost"] / data["liters"],
            avg_kmpl=data["kmpl"] / data["visits"],
            avg_cost_per_km=data["cost_per_km"] / data["visits"],
        )
        for station, data in totals.items()
    ]


def rank_stations(stats: Iterable[StationStats]) -> List[StationStats]:
    """Cheapest cost per km first."""
    return sorted(stats, key=lambda s: s.avg_cost_per_km)
