# grid_search_lab/core/grid.py
# Immutable 2-D grid of single-character symbols. Every search in the lab runs over one of these.
from __future__ import annotations
from dataclasses import dataclass
from typing import Iterable, List, Optional, Sequence, Tuple

import numpy as np

from .errors import GridError

Coord = Tuple[int, int]  # (x, y) == (col, row)

# Orthogonal offsets in Direction order (N, E, S, W); y grows downward.
_OFFSETS: Tuple[Coord, ...] = ((0, -1), (1, 0), (0, 1), (-1, 0))


@dataclass(frozen=True)
class Grid:
    """
    Flat row-major buffer of symbols plus its dimensions.

    - len(cells) == width * height, checked at construction
    - lookups are bounds-checked: get() returns None off the grid
    - there are no mutators; with_symbols() hands back a fresh Grid
    """
    width: int
    height: int
    cells: Tuple[str, ...]

    def __post_init__(self) -> None:
        if self.width < 0 or self.height < 0:
            raise GridError(f"negative grid size {self.width}x{self.height}")
        if len(self.cells) != self.width * self.height:
            raise GridError(
                f"buffer holds {len(self.cells)} cells, expected {self.width}x{self.height}"
            )

    # --- construction --------------------------------------------------------

    @classmethod
    def from_lines(cls, lines: Iterable[str], alphabet: Optional[str] = None) -> "Grid":
        rows = [line.rstrip("\r\n") for line in lines]
        while rows and not rows[-1].strip():
            rows.pop()
        if not rows:
            raise GridError("empty grid")

        width = len(rows[0])
        cells: List[str] = []
        for y, row in enumerate(rows):
            if len(row) != width:
                raise GridError(f"row {y} has {len(row)} cells, expected {width}")
            for x, ch in enumerate(row):
                if alphabet is not None and ch not in alphabet:
                    raise GridError(f"unknown symbol {ch!r} at ({x}, {y})")
                cells.append(ch)
        return cls(width, len(rows), tuple(cells))

    @classmethod
    def from_text(cls, text: str, alphabet: Optional[str] = None) -> "Grid":
        return cls.from_lines(text.strip("\n").splitlines(), alphabet=alphabet)

    @classmethod
    def filled(cls, width: int, height: int, symbol: str = ".") -> "Grid":
        return cls(width, height, (symbol,) * (width * height))

    # --- lookup --------------------------------------------------------------

    def in_bounds(self, x: int, y: int) -> bool:
        return 0 <= x < self.width and 0 <= y < self.height

    def get(self, x: int, y: int) -> Optional[str]:
        if not self.in_bounds(x, y):
            return None
        return self.cells[y * self.width + x]

    def at(self, c: Coord) -> Optional[str]:
        return self.get(c[0], c[1])

    def find_all(self, symbol: str) -> List[Coord]:
        """All coordinates holding `symbol`, row-major."""
        return [(i % self.width, i // self.width) for i, ch in enumerate(self.cells) if ch == symbol]

    def find_first(self, symbol: str) -> Optional[Coord]:
        try:
            i = self.cells.index(symbol)
        except ValueError:
            return None
        return (i % self.width, i // self.width)

    def require(self, symbol: str) -> Coord:
        c = self.find_first(symbol)
        if c is None:
            raise GridError(f"missing {symbol!r} marker")
        return c

    def neighbours(self, x: int, y: int) -> List[Coord]:
        out: List[Coord] = []
        for dx, dy in _OFFSETS:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                out.append((nx, ny))
        return out

    def rows(self) -> List[str]:
        w = self.width
        return ["".join(self.cells[y * w:(y + 1) * w]) for y in range(self.height)]

    # --- copy-on-write -------------------------------------------------------

    def with_symbols(self, coords: Iterable[Coord], symbol: str = "#") -> "Grid":
        buf = list(self.cells)
        for x, y in coords:
            if not self.in_bounds(x, y):
                raise GridError(f"({x}, {y}) is outside the {self.width}x{self.height} grid")
            buf[y * self.width + x] = symbol
        return Grid(self.width, self.height, tuple(buf))

    def with_obstacle(self, x: int, y: int, symbol: str = "#") -> "Grid":
        return self.with_symbols([(x, y)], symbol)

    # --- presentation helpers ------------------------------------------------

    def render(self, path: Optional[Sequence[Coord]] = None, mark: str = "O") -> str:
        buf = list(self.cells)
        for x, y in path or ():
            if self.in_bounds(x, y):
                buf[y * self.width + x] = mark
        w = self.width
        return "\n".join("".join(buf[y * w:(y + 1) * w]) for y in range(self.height))

    def to_array(self) -> np.ndarray:
        """(height, width) array of symbols, row-major like the buffer."""
        return np.array(self.cells, dtype="<U1").reshape(self.height, self.width)

    def __str__(self) -> str:
        return self.render()
