# grid_search_lab/core/errors.py
from __future__ import annotations


class GridError(ValueError):
    """Malformed puzzle input: ragged rows, unknown symbols, missing markers."""


class TransitionRuleError(AssertionError):
    """A TransitionRule produced an edge the engine cannot trust (caller bug)."""
