"""JINA REACLIB rate model."""

import warnings
from typing import Self

import numpy as np
import pydantic
from numpy.typing import ArrayLike, NDArray

from .. import unit_
from ..unit_ import UNITS, C, D, Dimension, Units, UnitsData, const
from . import _00param as param
from ._00param import Parameter

NON_RESONANT_PREFACTOR = const.value(C.non_resonant, UNITS)
RESONANT_PREFACTOR = const.value(C.resonant, UNITS)
# Inverse Boltzmann constant, GK / MeV
ENERGY_FACTOR = 11.6045
# Coefficient of the Coulomb barrier term
BARRIER_FACTOR = 4.2486
NON_RESONANT_EXPONENT = -2.0 / 3.0
RESONANT_EXPONENT = -3.0 / 2.0
# T9 exponents of a1 through a5, (2j - 5) / 3
POWER_EXPONENTS = (2.0 * np.arange(1, 6) - 5.0) / 3.0

# Returned by resonance getters for an unknown resonance
INVALID = -1.0


# Evaluation
def components(t9: ArrayLike, params: ArrayLike) -> NDArray[np.float64]:
    """Evaluate the contribution of each parameter block.

    Each block contributes

        exp[a0 + a1 T9^-1 + a2 T9^-1/3 + a3 T9^1/3 + a4 T9 + a5 T9^5/3 + a6 ln T9]

    Non-positive temperatures are not special-cased and give NaN.

    :param t9: Temperature(s), in GK
    :param params: Flat parameter values, seven per block
    :return: Contributions, with blocks along the first axis
    """
    assert np.size(params) % param.BLOCK_SIZE == 0, f"Incomplete block: {params}"
    blocks = np.reshape(np.array(params, dtype=np.float64), (-1, param.BLOCK_SIZE))
    t9_ = np.array(t9, dtype=np.float64)[..., np.newaxis]
    exponent = (
        blocks[:, 0]
        + blocks[:, 6] * np.log(t9_)
        + np.power(t9_, POWER_EXPONENTS) @ blocks[:, 1:6].T
    )
    return np.moveaxis(np.exp(exponent), -1, 0)


def evaluate(t9: ArrayLike, params: ArrayLike) -> NDArray[np.float64]:
    """Evaluate the total rate, summed over the non-resonant and resonant blocks.

    This is the model function handed to the fitting engine. It is pure, so it can be
    called repeatedly with trial parameters.

    :param t9: Temperature(s), in GK
    :param params: Flat parameter values, seven per block
    :return: Rate(s), in cm^3/mol/s, with the shape of `t9`
    """
    return np.sum(components(t9, params), axis=0)


# Parameter guesses
def non_resonant_a0(z1: int, z2: int, mu: float, s0: float = 1.0) -> float:
    """Non-resonant a0 term, ln[B (Z1 Z2 mu)^1/3 S(0)]."""
    zzmu = np.float64(z1 * z2 * mu)
    return np.log(NON_RESONANT_PREFACTOR * np.power(zzmu, 1 / 3) * s0)


def non_resonant_a2(z1: int, z2: int, mu: float) -> float:
    """Non-resonant a2 term, -4.2486 (Z1^2 Z2^2 mu)^1/3."""
    return -BARRIER_FACTOR * np.power(np.float64((z1 * z2) ** 2 * mu), 1 / 3)


def resonant_a0(mu: float, strength: float = 1.0) -> float:
    """Resonant a0 term, ln[D mu^-3/2 wg]."""
    return np.log(RESONANT_PREFACTOR * np.power(np.float64(mu), -3 / 2) * strength)


def resonant_a1(energy: float = 1.0) -> float:
    """Resonant a1 term, -11.6045 E_r."""
    return -ENERGY_FACTOR * energy


def initial_parameters(
    num_resonances: int, z1: int, z2: int, mu: float
) -> list[Parameter]:
    """Determine initial parameters for a charged-particle rate.

    The non-resonant a0 guess assumes S(0) = 1 MeV b and each resonance guess assumes
    unit strength at 1 MeV.

    :param num_resonances: Number of narrow resonances
    :param z1: Atomic number of the target
    :param z2: Atomic number of the reactant
    :param mu: Reduced mass, in amu
    :return: Parameters
    """
    params = [
        param.free(non_resonant_a0(z1, z2, mu)),
        param.fixed(0.0),
        param.fixed(non_resonant_a2(z1, z2, mu)),
        param.free(0.0),
        param.free(0.0),
        param.free(0.0),
        param.fixed(NON_RESONANT_EXPONENT),
    ]
    for _ in range(num_resonances):
        params.append(param.free(resonant_a0(mu)))
        params.append(param.free(resonant_a1()))
        params.extend(param.fixed(0.0) for _ in range(4))
        params.append(param.fixed(RESONANT_EXPONENT))
    return params


class ReaclibRate(pydantic.BaseModel):
    """Charged-particle reaction rate in the JINA REACLIB form.

    The rate is a sum of parameter blocks: block 0 is the non-resonant set and block
    `i + 1` is narrow resonance `i`. Physical guesses (S(0), resonance energies and
    strengths) are translated into parameters, the fitting engine varies the free
    parameters, and physical quantities are then recovered from the result.

    Neutron-induced non-resonant rates are not supported.

    Parameters are mutated in place during a fit, so an instance must not be shared
    between concurrent fit sessions.

    :param name: Rate name
    :param num_resonances: Number of narrow resonances
    :param z1: Atomic number of the target
    :param z2: Atomic number of the reactant
    :param mu: Reduced mass of the reactants, in amu
    :param t9_range: Temperature domain of the fit, in GK
    :param parameters: Fit parameters
    """

    name: str
    num_resonances: pydantic.NonNegativeInt = 0
    z1: pydantic.NonNegativeInt
    z2: pydantic.NonNegativeInt
    mu: float
    t9_range: tuple[float, float] = (0.01, 10.0)
    parameters: list[Parameter] = pydantic.Field(
        default_factory=lambda data: initial_parameters(
            data["num_resonances"], data["z1"], data["z2"], data["mu"]
        )
    )

    @pydantic.model_validator(mode="after")
    def _check_parameter_count(self) -> Self:
        count = param.parameter_count(self.num_resonances)
        assert len(self.parameters) == count, f"{len(self.parameters)} != {count}"
        return self

    @pydantic.computed_field
    def order(self) -> int:
        """Reaction order; charged-particle captures are two-body."""
        return 2

    # Fitting engine interface
    @property
    def nparams(self) -> int:
        """Number of parameters."""
        return len(self.parameters)

    @property
    def parameter_names(self) -> list[str]:
        """Parameter names."""
        return param.parameter_names(self.num_resonances)

    @property
    def values(self) -> NDArray[np.float64]:
        """Parameter values."""
        return np.array([p.value for p in self.parameters], dtype=np.float64)

    @property
    def fixed(self) -> NDArray[np.bool_]:
        """Mask of parameters held fixed during a fit."""
        return np.array([p.fixed for p in self.parameters], dtype=bool)

    @property
    def blocks(self) -> NDArray[np.float64]:
        """Parameter values by block, one row of a0-a6 per block."""
        return np.array([[p.value for p in b] for b in param.chunk(self.parameters)])

    def set_values(self, values: ArrayLike) -> None:
        """Update parameter values, keeping fixed flags.

        :param values: New values for every parameter
        """
        values = np.ravel(values)
        assert len(values) == self.nparams, f"{values} !~ {self.parameter_names}"
        self.parameters = [
            p.model_copy(update={"value": float(v)})
            for p, v in zip(self.parameters, values, strict=True)
        ]

    def fix_parameter(self, index: int, value: float | None = None) -> None:
        """Hold a parameter fixed, optionally at a new value.

        :param index: Parameter index
        :param value: Value, defaults to the current one
        """
        value = self.parameters[index].value if value is None else value
        self.parameters[index] = param.fixed(value)

    def release_parameter(self, index: int) -> None:
        """Allow a parameter to float.

        :param index: Parameter index
        """
        self.parameters[index] = param.free(self.parameters[index].value)

    # Evaluation
    def evaluate(
        self, t9: ArrayLike, params: ArrayLike | None = None
    ) -> NDArray[np.float64]:
        """Evaluate the rate.

        :param t9: Temperature(s), in GK
        :param params: Parameter values, defaults to the current ones
        :return: Rate(s)
        """
        return evaluate(t9, self.values if params is None else params)

    def components(self, t9: ArrayLike) -> NDArray[np.float64]:
        """Evaluate the contribution of each block at the current parameters."""
        return components(t9, self.values)

    @unit_.manage_units([D.temperature], D.rate_constant)
    def __call__(
        self,
        t9: ArrayLike,
        units: UnitsData | None = None,  # noqa: ARG002
    ) -> NDArray[np.float64]:
        """Evaluate the rate at the current parameters.

        :param t9: Temperature(s)
        :param units: Input units and desired output units
        :return: Rate(s)
        """
        return self.evaluate(t9)

    # Physical guesses
    @unit_.manage_units([D.s_factor])
    def set_s_factor(
        self,
        s0: float,
        units: UnitsData | None = None,  # noqa: ARG002
    ) -> None:
        """Set and fix the non-resonant a0 term from the S-factor at zero energy.

        The term is ln[B (Z1 Z2 mu)^1/3 S(0)], with B = 7.8318e9 cm^3/s/mol/MeV/b. Use
        `release_parameter(0)` to let it float.

        :param s0: S(0), in MeV b
        :param units: Input units
        """
        a0 = non_resonant_a0(self.z1, self.z2, self.mu, s0=s0)
        self.fix_parameter(param.parameter_index(0, 0), a0)

    @unit_.manage_units([None, D.energy, D.energy])
    def set_resonance(
        self,
        resonance_id: int,
        energy: float,
        strength: float,
        units: UnitsData | None = None,  # noqa: ARG002
    ) -> None:
        """Set and fix the a0 and a1 terms of a narrow resonance.

        The terms are a0 = ln[D mu^-3/2 wg], with D = 1.5394e11 cm^3/s/mol/MeV, and
        a1 = -11.6045 E_r. An unknown resonance ID is ignored with a warning.

        :param resonance_id: Resonance ID, starting at 0
        :param energy: Resonance energy, in MeV
        :param strength: Resonance strength, in MeV
        :param units: Input units
        """
        if not self.has_resonance(resonance_id):
            msg = (
                f"Ignoring resonance {resonance_id} of rate {self.name!r}, which has "
                f"{self.num_resonances} resonance(s)"
            )
            warnings.warn(msg, stacklevel=2)
            return

        block = param.resonance_block(resonance_id)
        a0 = resonant_a0(self.mu, strength=strength)
        a1 = resonant_a1(energy=energy)
        self.fix_parameter(param.parameter_index(block, 0), a0)
        self.fix_parameter(param.parameter_index(block, 1), a1)

    # Physical quantities
    def has_resonance(self, resonance_id: int) -> bool:
        """Determine whether a resonance ID is valid for this rate."""
        return 0 <= resonance_id < self.num_resonances

    def reduced_mass(self) -> float:
        """Extract the reduced mass, in amu, from the non-resonant a2 term."""
        a2 = self._value(0, 2)
        zz = np.float64(self.z1 * self.z2)
        return float(np.power(a2 / -BARRIER_FACTOR, 3) / np.power(zz, 2))

    def s_factor(self, units: UnitsData | None = None) -> float:
        """Extract S(0) from the non-resonant a0 term.

        Uses the reduced mass determined from a2, rather than the one given on
        construction.

        :param units: Desired output units
        :return: S(0), in MeV b
        """
        zzmu = np.float64(self.z1 * self.z2 * self.reduced_mass())
        s0 = np.exp(self._value(0, 0)) / NON_RESONANT_PREFACTOR / np.power(zzmu, 1 / 3)
        return _output(s0, D.s_factor, units)

    def resonance_energy(
        self, resonance_id: int, units: UnitsData | None = None
    ) -> float:
        """Extract a resonance energy from the resonant a1 term.

        :param resonance_id: Resonance ID, starting at 0
        :param units: Desired output units
        :return: Resonance energy, in MeV, or -1 if the ID is invalid
        """
        if not self.has_resonance(resonance_id):
            return INVALID

        a1 = self._value(param.resonance_block(resonance_id), 1)
        return _output(a1 / -ENERGY_FACTOR, D.energy, units)

    def resonance_strength(
        self, resonance_id: int, units: UnitsData | None = None
    ) -> float:
        """Extract a resonance strength from the resonant a0 term.

        Uses the reduced mass determined from the non-resonant a2 term.

        :param resonance_id: Resonance ID, starting at 0
        :param units: Desired output units
        :return: Resonance strength, in MeV, or -1 if the ID is invalid
        """
        if not self.has_resonance(resonance_id):
            return INVALID

        a0 = self._value(param.resonance_block(resonance_id), 0)
        mu = np.float64(self.reduced_mass())
        strength = np.exp(a0) / RESONANT_PREFACTOR / np.power(mu, -3 / 2)
        return _output(strength, D.energy, units)

    def _value(self, block: int, slot: int) -> float:
        return self.parameters[param.parameter_index(block, slot)].value


def _output(val: float, dim: Dimension, units: UnitsData | None) -> float:
    """Convert an internal value to the desired output units."""
    if units is not None:
        val = unit_.dim.convert(UNITS, Units.model_validate(units), dim, val)
    return float(val)
