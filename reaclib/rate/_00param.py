"""Fit parameters and their block layout."""

import more_itertools as mit

from ..util.type_ import Frozen

BLOCK_SIZE = 7


class Parameter(Frozen):
    """Fit parameter, as exchanged with the fitting engine.

    :param value: Current value
    :param fixed: Whether the fitting engine must hold the value constant
    """

    value: float
    fixed: bool = False


def free(value: float) -> Parameter:
    """Create a parameter that is allowed to float."""
    return Parameter(value=float(value), fixed=False)


def fixed(value: float) -> Parameter:
    """Create a parameter held at its value."""
    return Parameter(value=float(value), fixed=True)


def block_count(num_resonances: int) -> int:
    """Number of parameter blocks, one non-resonant plus one per resonance."""
    return num_resonances + 1


def parameter_count(num_resonances: int) -> int:
    """Total number of fit parameters.

    :param num_resonances: Number of narrow resonances
    :return: Parameter count
    """
    return BLOCK_SIZE * block_count(num_resonances)


def parameter_index(block: int, slot: int) -> int:
    """Determine the flat index of slot `a<slot>` in a block.

    Block 0 is the non-resonant set, block `i + 1` belongs to resonance `i`.

    :param block: Block index
    :param slot: Slot index, 0-6
    :return: Flat parameter index
    """
    assert 0 <= slot < BLOCK_SIZE, f"Invalid slot: {slot}"
    return BLOCK_SIZE * block + slot


def resonance_block(resonance_id: int) -> int:
    """Determine the block holding a resonance."""
    return resonance_id + 1


def parameter_names(num_resonances: int) -> list[str]:
    """Name each fit parameter.

    :param num_resonances: Number of narrow resonances
    :return: Names, `nr_a<j>` for the non-resonant set and `r<i>_a<j>` for resonance i
    """
    prefixes = ["nr"] + [f"r{i}" for i in range(num_resonances)]
    return [f"{p}_a{j}" for p in prefixes for j in range(BLOCK_SIZE)]


def chunk(params: list[Parameter]) -> list[list[Parameter]]:
    """Split a flat parameter list into blocks."""
    assert len(params) % BLOCK_SIZE == 0, f"Incomplete block: {len(params)}"
    return list(mit.chunked(params, BLOCK_SIZE))
