"""Utilities."""

from . import type_

__all__ = ["type_"]
