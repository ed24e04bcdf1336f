"""TripType enum for the driving context declared on a trip report."""

from enum import Enum


class TripType(Enum):
    """Declared driving context. Member order is the display order."""

    WORK = "Trabajo"
    HIGHWAY = "Carretera"
    OTHER = "Otro"

    @classmethod
    def parse(cls, value) -> "TripType":
        """Accept a member, its stored value ("Carretera") or its name ("highway")."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if value == member.value:
                return member
        if isinstance(value, str) and value.upper() in cls.__members__:
            return cls[value.upper()]
        raise ValueError(f"Unknown trip type: {value!r}")
