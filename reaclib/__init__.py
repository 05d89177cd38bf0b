"""Fitting of thermonuclear reaction rates in the JINA REACLIB form."""

from . import rate, unit_, util

__all__ = ["rate", "unit_", "util"]
