"""Type utilities."""

import abc
from typing import Annotated

import pint
import pydantic
from pydantic_core import core_schema


# Abstract base classes
class Frozen(pydantic.BaseModel, abc.ABC):
    """Abstract base class for frozen models.

    Enforces faux-immutability to prevent model fields from changing, preventing data
    from being corrupted by inconsistent mutations.
    """

    model_config = pydantic.ConfigDict(frozen=True)


# Annotated types for pydantic
Unit_ = Annotated[
    pydantic.SkipValidation[pint.Unit],
    pydantic.BeforeValidator(lambda x: pint.Unit(x)),
    # Use abbreviated unit names upon serialization
    pydantic.PlainSerializer(lambda x: format(x, "~")),
    pydantic.GetPydanticSchema(
        lambda _, handler: core_schema.with_default_schema(handler(str)),
    ),
]
