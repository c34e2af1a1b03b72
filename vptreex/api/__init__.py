"""Public ergonomic façade for vptreex."""

from .vptree import VantagePointTree

__all__ = ["VantagePointTree"]
