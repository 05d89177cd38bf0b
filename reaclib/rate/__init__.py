"""JINA REACLIB reaction rates."""

from ._00param import (
    BLOCK_SIZE,
    Parameter,
    parameter_count,
    parameter_index,
    parameter_names,
)
from ._01reaclib import (
    INVALID,
    ReaclibRate,
    components,
    evaluate,
    initial_parameters,
)
from ._02fit import fit

__all__ = [
    # Types
    "ReaclibRate",
    "Parameter",
    # Constants
    "BLOCK_SIZE",
    "INVALID",
    # Functions
    #  - Layout
    "parameter_count",
    "parameter_index",
    "parameter_names",
    "initial_parameters",
    #  - Evaluation
    "evaluate",
    "components",
    #  - Fitting
    "fit",
]
