# grid_search_lab/core/state.py
# Search-graph nodes: a grid coordinate plus an optional facing.
from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from functools import total_ordering
from typing import NamedTuple, Optional, Tuple

from .grid import Coord

_DELTAS: Tuple[Coord, ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))
_SYMBOLS = {"^": 0, ">": 1, "v": 2, "<": 3}


class Direction(IntEnum):
    NORTH = 0
    EAST = 1
    SOUTH = 2
    WEST = 3

    @property
    def delta(self) -> Coord:
        return _DELTAS[self]

    def turn_right(self) -> "Direction":
        return Direction((self + 1) % 4)

    def turn_left(self) -> "Direction":
        return Direction((self - 1) % 4)

    def opposite(self) -> "Direction":
        return Direction((self + 2) % 4)

    def step(self, c: Coord) -> Coord:
        dx, dy = _DELTAS[self]
        return (c[0] + dx, c[1] + dy)

    @classmethod
    def from_delta(cls, dx: int, dy: int) -> "Direction":
        return cls(_DELTAS.index((dx, dy)))

    @classmethod
    def from_symbol(cls, ch: str) -> "Direction":
        return cls(_SYMBOLS[ch])


@total_ordering
@dataclass(frozen=True)
class StateKey:
    """Equal iff position and facing are equal. Orders by position, then facing (None first)."""
    position: Coord
    facing: Optional[Direction] = None

    def sort_key(self) -> Tuple[Coord, int]:
        return (self.position, -1 if self.facing is None else int(self.facing))

    def __lt__(self, other: "StateKey") -> bool:
        if not isinstance(other, StateKey):
            return NotImplemented
        return self.sort_key() < other.sort_key()

    @property
    def x(self) -> int:
        return self.position[0]

    @property
    def y(self) -> int:
        return self.position[1]

    def moved(self, direction: Optional[Direction] = None) -> "StateKey":
        """One step along `direction` (default: the current facing), facing kept."""
        d = self.facing if direction is None else direction
        return StateKey(d.step(self.position), self.facing)

    def turned(self, facing: Direction) -> "StateKey":
        return StateKey(self.position, facing)

    def __repr__(self) -> str:
        if self.facing is None:
            return f"StateKey({self.position})"
        return f"StateKey({self.position}, {self.facing.name})"


class Edge(NamedTuple):
    to: StateKey
    cost: int
