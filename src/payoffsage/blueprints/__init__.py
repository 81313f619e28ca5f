"""Blueprint exports."""

from . import planner

__all__ = ["planner"]
