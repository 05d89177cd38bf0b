"""Test reaclib.rate.fit."""

import numpy
import pytest

from reaclib import rate

# 12C(p,g)13N
C12_PG = {"name": "12C(p,g)13N", "z1": 6, "z2": 1, "mu": 0.9290}
S0 = 1.45e-3


def test__fit__s_factor():
    rate0 = rate.ReaclibRate(**C12_PG)
    rate0.set_s_factor(S0)
    t9 = numpy.geomspace(0.02, 5.0, 40)
    k = rate0.evaluate(t9)

    # Points outside of the domain or with missing rates are ignored
    t9 = numpy.append(t9, [20.0, 1.0])
    k = numpy.append(k, [1.0, numpy.nan])

    # Start from the default guess, S(0) = 1 MeV b, with a0 free
    rate_guess = rate.ReaclibRate(**C12_PG)
    rate_fit = rate.fit(rate_guess, t9, k)
    assert rate_fit.s_factor() == pytest.approx(S0, rel=1e-4)
    assert rate_fit.evaluate(t9[:-2]) == pytest.approx(k[:-2], rel=1e-4)

    # The guess is untouched
    assert rate_guess.s_factor() == pytest.approx(1.0, rel=1e-5)
    assert numpy.array_equal(rate_fit.fixed, rate_guess.fixed)


def test__fit__sigma():
    rate0 = rate.ReaclibRate(**C12_PG)
    rate0.set_s_factor(S0)
    t9 = numpy.geomspace(0.05, 5.0, 30)
    k = rate0.evaluate(t9)

    rate_fit = rate.fit(rate.ReaclibRate(**C12_PG), t9, k, sigma=0.05 * k)
    assert rate_fit.s_factor() == pytest.approx(S0, rel=1e-4)


def test__fit__resonance_strength():
    energy, strength = 0.4573, 1.0e-6
    rate0 = rate.ReaclibRate(**C12_PG, num_resonances=1)
    rate0.set_s_factor(S0)
    rate0.set_resonance(0, energy, strength)
    t9 = numpy.geomspace(0.1, 3.0, 30)
    k = rate0.evaluate(t9)

    # Guess a strength ten times too large and let only the strength float
    rate_guess = rate.ReaclibRate(**C12_PG, num_resonances=1)
    rate_guess.set_s_factor(S0)
    rate_guess.set_resonance(0, energy, 10 * strength)
    for index in (3, 4, 5):
        rate_guess.fix_parameter(index)
    rate_guess.release_parameter(rate.parameter_index(1, 0))
    assert numpy.count_nonzero(~rate_guess.fixed) == 1

    rate_fit = rate.fit(rate_guess, t9, k)
    assert rate_fit.resonance_strength(0) == pytest.approx(strength, rel=1e-4)
    assert rate_fit.resonance_energy(0) == pytest.approx(energy, rel=1e-5)
    assert rate_fit.s_factor() == pytest.approx(S0, rel=1e-5)


@pytest.mark.parametrize(
    "t9, k",
    [
        ([20.0, 30.0, 50.0, 80.0, 100.0], [1.0, 2.0, 3.0, 4.0, 5.0]),
        ([0.1, 0.2, 0.5, 1.0, 2.0], [numpy.nan, -1.0, 0.0, numpy.inf, numpy.nan]),
        ([0.1, 0.2], [1.0, 2.0]),
    ],
)
def test__fit__too_few_points(t9: list[float], k: list[float]):
    rate_ = rate.ReaclibRate(**C12_PG)
    with pytest.raises(AssertionError, match="usable data points"):
        rate.fit(rate_, t9, k)


def test__fit__no_free_parameters():
    rate_ = rate.ReaclibRate(**C12_PG)
    for index in range(rate_.nparams):
        rate_.fix_parameter(index)
    t9 = numpy.geomspace(0.05, 5.0, 10)

    with pytest.warns(UserWarning, match="no free parameters"):
        rate_fit = rate.fit(rate_, t9, rate_.evaluate(t9))
    assert rate_fit == rate_
    assert rate_fit is not rate_
