"""Test reaclib.unit_."""

import pint
import pytest

from reaclib import unit_
from reaclib.unit_ import UNITS, C, D, Dimension, Units


def test__units():
    units = Units()
    assert units.temperature == pint.Unit("GK")
    assert units.rate_constant(2) == pint.Unit("cm**3 / mol / s")
    assert units.s_factor == pint.Unit("MeV * barn")

    units_ = Units.model_validate({"energy": "keV", "temperature": "K"})
    assert Units.model_validate(units_.model_dump()) == units_
    assert units_.length == units.length


@pytest.mark.parametrize(
    "units, dim, val, val_",
    [
        ({"temperature": "K"}, D.temperature, 1.0, 1e9),
        ({"energy": "keV"}, D.energy, 0.5, 500.0),
        ({"energy": "keV"}, D.s_factor, 1.45e-3, 1.45),
        ({"length": "m"}, D.rate_constant, 1.0, 1e-6),
    ],
)
def test__convert(units: dict, dim: Dimension, val: float, val_: float):
    units = Units.model_validate(units)
    res = unit_.dim.convert(UNITS, units, dim, val, order=2)
    assert res == pytest.approx(val_), f"{res} != {val_}"


def test__dimension():
    dim = D.rate_constant / D.energy / D.area
    assert dim == Dimension({"rate_constant": 1, "energy": -1, "area": -1})
    assert D.energy * D.area / D.energy == D.area
    assert repr(D.volume) == "Dimension(volume=1)"

    with pytest.raises(AssertionError):
        Dimension("mass")


@pytest.mark.parametrize(
    "const, val",
    [
        (C.non_resonant, 7.8318e9),
        (C.resonant, 1.5394e11),
    ],
)
def test__const(const: str, val: float):
    assert unit_.const.value(const, UNITS) == pytest.approx(val, rel=1e-12)
    assert unit_.const.quantity(const).m == val

    # In keV, the prefactors shrink by the inverse energy unit
    units = Units.model_validate({"energy": "keV"})
    assert unit_.const.value(const, units) == pytest.approx(val * 1e-3, rel=1e-12)

    with pytest.raises(ValueError, match="Unknown constant"):
        unit_.const.quantity("speed_of_light")
