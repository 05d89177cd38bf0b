"""Units functions."""

from . import const, dim, system
from ._manager import manage_units
from .const import C
from .dim import D, Dimension, DimensionData
from .system import (
    UNITS,
    Units,
    UnitsData,
)

__all__ = [
    # Functions:
    "manage_units",
    # Modules:
    "const",
    "dim",
    "system",
    # Classes:
    "C",
    "D",
    "Dimension",
    "DimensionData",
    "UNITS",
    "Units",
    "UnitsData",
]
