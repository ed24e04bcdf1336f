"""ExpenseCategory enum for miscellaneous vehicle expenses."""

from enum import Enum


class ExpenseCategory(Enum):
    """Fixed expense categories."""

    REPAIR = "Reparación"
    INSURANCE = "Seguro"
    TIRES = "Llantas"
    CLEANING = "Limpieza"
    ACCESSORIES = "Accesorios"
    OTHER = "Otro"

    @classmethod
    def parse(cls, value) -> "ExpenseCategory":
        """Accept a member, its stored value ("Seguro") or its name ("insurance")."""
        if isinstance(value, cls):
            return value
        for member in cls:
            if value == member.value:
                return member
        if isinstance(value, str) and value.upper() in cls.__members__:
            return cls[value.upper()]
        raise ValueError(f"Unknown expense category: {value!r}")
