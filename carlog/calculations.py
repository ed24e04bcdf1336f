"""Helper functions shared by the analyzers."""

from typing import Iterable, List, Optional, Sequence, Tuple, TypeVar

from .constants import GAUGE_SEGMENTS

T = TypeVar("T")


def consecutive_pairs(records: Sequence[T]) -> List[Tuple[T, T]]:
    """(previous, current) pairs of an already ordered sequence."""
    return list(zip(records[:-1], records[1:]))


def calc_economy(distance: float, liters: float) -> Optional[float]:
    """
    Kilometers per liter for one fill.

    None when the distance or the liters are not positive, since such a pair
    cannot say anything about consumption.
    """
    if distance <= 0 or liters <= 0:
        return None
    return distance / liters


def gauge_to_percentage(level: int) -> float:
    """Convert a gauge reading in twelfths to a tank percentage."""
    return level / GAUGE_SEGMENTS * 100


def liters_per_segment(capacity: float) -> float:
    """Liters represented by one twelfth of the tank."""
    return capacity / GAUGE_SEGMENTS


def mean(values: Iterable[float]) -> Optional[float]:
    """Arithmetic mean, or None for no values."""
    values = list(values)
    if not values:
        return None
    return sum(values) / len(values)
