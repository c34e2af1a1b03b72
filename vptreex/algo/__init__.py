"""Vantage-point selection and tree construction."""

from .build import build_nodes, create
from .select import (
    ExhaustiveSelection,
    RandomSelection,
    SampledSelection,
    Selection,
    SelectionStrategy,
    parse_selection,
    resolve_selection,
)

__all__ = [
    "ExhaustiveSelection",
    "RandomSelection",
    "SampledSelection",
    "Selection",
    "SelectionStrategy",
    "build_nodes",
    "create",
    "parse_selection",
    "resolve_selection",
]
