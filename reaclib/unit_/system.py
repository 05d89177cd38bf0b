"""Unit system."""

import functools
from collections.abc import Mapping
from typing import TypeAlias

import pint

from ..util.type_ import Frozen, Unit_


# Model for specifying units
class Units(Frozen):
    """Unit system.

    The defaults are the natural units of the REACLIB parametrization: temperatures
    in T9 (GK), energies in MeV, cross sections in barn, and rates in cm^3/mol/s.
    """

    # Core units
    time: Unit_ = pint.Unit("s")
    temperature: Unit_ = pint.Unit("GK")
    length: Unit_ = pint.Unit("cm")
    substance: Unit_ = pint.Unit("mol")
    energy: Unit_ = pint.Unit("MeV")
    area: Unit_ = pint.Unit("barn")

    # Derived units
    @functools.cached_property
    def volume(self) -> pint.Unit:
        """Volume unit."""
        return pint.Unit(self.length**3)

    @functools.cached_property
    def concentration(self) -> pint.Unit:
        """Concentration unit."""
        return pint.Unit(self.substance / self.volume)

    @functools.cached_property
    def s_factor(self) -> pint.Unit:
        """Astrophysical S-factor unit."""
        return pint.Unit(self.energy * self.area)

    def rate_constant(self, order: int) -> pint.Unit:
        """Rate constant unit.

        :param order: Reaction order
        """
        if order == 1:
            return pint.Unit(self.time**-1)

        return pint.Unit(self.concentration ** (1 - order) * self.time**-1)


# Alias for unit-convertible data
UnitData: TypeAlias = str | pint.Unit
UnitsData: TypeAlias = Mapping[str, UnitData] | Units


# Internal unit system (defaults of above Units class)
UNITS = Units()
