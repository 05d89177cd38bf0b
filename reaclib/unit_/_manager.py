"""Decorator for automatically handling model units."""

import functools
import inspect
from collections.abc import Callable, Sequence
from typing import TypeVar

import pydantic

from . import dim
from .dim import Dimension
from .system import UNITS, Units, UnitsData

F = TypeVar("F", bound=Callable)


def manage_units(
    arg_dims: Sequence[Dimension | None], ret_dim: Dimension | None = None
) -> Callable[[F], F]:
    """Transform method into a unit managing method.

    Converts arguments to internal units, calls the method, then converts the return
    value back to desired units. The dimensions line up with the leading parameters of
    the method after `self`, whether the arguments are passed by position or by
    keyword. Parameters with a dimension of `None` (e.g. indices) are passed through
    as-is.

    :param arg_dims: Argument dimensions
    :param ret_dim: Return dimensions
    :return: Method decorator
    """

    def manage_units_(func0: F) -> F:
        sig = inspect.signature(func0)
        names = [n for n in list(sig.parameters)[1:] if n != "units"]
        assert len(names) >= len(arg_dims), f"{names} !~ {arg_dims}"
        dim_dct = dict(zip(names, arg_dims, strict=False))

        @functools.wraps(func0)
        def func(
            self: pydantic.BaseModel,
            *args: object,
            units: UnitsData | None = None,
            **kwargs: object,
        ) -> object:
            # If no units were specified, return as-is
            if units is None:
                return func0(self, *args, units=units, **kwargs)

            # Process units
            units0 = Units.model_validate(units)
            dim_kwargs = self.model_dump()

            # Convert arguments, by name
            bound = sig.bind(self, *args, units=units, **kwargs)
            for name, dim_ in dim_dct.items():
                if dim_ is not None and name in bound.arguments:
                    val = bound.arguments[name]
                    bound.arguments[name] = dim.convert(
                        units0, UNITS, dim_, val, **dim_kwargs
                    )

            # Call function
            ret = func0(*bound.args, **bound.kwargs)

            # Convert return
            if ret_dim is not None:
                ret = dim.convert(UNITS, units0, ret_dim, ret, **dim_kwargs)

            return ret

        return func

    return manage_units_
