"""Physical constants of the REACLIB parametrization."""

import pint

from . import dim
from .dim import D, Dimension
from .system import Units


class C:
    """Constant names."""

    non_resonant = "non_resonant_prefactor"
    resonant = "resonant_prefactor"


# Literature values, with the units they are quoted in
_QUANTITY_DCT = {
    C.non_resonant: (7.8318e9, "cm**3 / s / mol / MeV / barn"),
    C.resonant: (1.5394e11, "cm**3 / s / mol / MeV"),
}


def quantity(const: str) -> pint.Quantity:
    """Get physical constant pint Quantity.

    :param const: Physical constant name
    :return: Pint quantity
    """
    const = const.strip().lower()
    if const not in _QUANTITY_DCT:
        msg = f"Unknown constant: {const}"
        raise ValueError(msg)
    return pint.Quantity(*_QUANTITY_DCT[const])


def dimension(const: str) -> Dimension:
    """Get physical constant dimensions.

    :param const: Physical constant name
    :return: Dimension
    """
    # Define dimension for each constant
    dim_dct = {
        C.non_resonant: D.rate_constant / D.energy / D.area,
        C.resonant: D.rate_constant / D.energy,
    }

    # Look up dimension
    const = const.strip().lower()
    if const not in dim_dct:
        msg = f"Unknown constant: {const}"
        raise ValueError(msg)
    return dim_dct[const]


def value(const: str, units: Units, order: int = 2) -> float:
    """Determine physical constant value in unit system.

    :param const: Physical constant name
    :param units: Unit system
    :param order: Reaction order of the rate constant the prefactor belongs to
    :return: Value
    """
    unit = dim.unit(units, dimension(const), order=order)
    return quantity(const).m_as(unit)
