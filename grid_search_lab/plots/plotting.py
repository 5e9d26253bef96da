# grid_search_lab/plots/plotting.py
# Draws a grid (walls dark, open cells light) with an optional path overlay, for debugging searches.
from __future__ import annotations
from typing import Optional, Sequence

import matplotlib.pyplot as plt
import numpy as np

from ..core.grid import Coord, Grid


def draw_grid_path(grid: Grid, path: Optional[Sequence[Coord]] = None, walls: str = "#",
                   title: str = "Search Path"):
    cells = grid.to_array()
    blocked = np.isin(cells, list(walls)).astype(float)

    fig, ax = plt.subplots(figsize=(max(4, grid.width / 4), max(4, grid.height / 4)))
    ax.imshow(blocked, cmap="Greys", vmin=0, vmax=1.5, interpolation="nearest")
    if path:
        xs = [x for x, _ in path]
        ys = [y for _, y in path]
        ax.plot(xs, ys, color="tab:orange", linewidth=2)
        ax.scatter([xs[0], xs[-1]], [ys[0], ys[-1]], c=["tab:green", "tab:red"], zorder=3)
    ax.set_title(title)
    ax.set_xticks([]); ax.set_yticks([])
    fig.tight_layout()
    return fig


def save_grid_path(grid: Grid, path: Optional[Sequence[Coord]], out_path, **kwargs) -> None:
    fig = draw_grid_path(grid, path, **kwargs)
    fig.savefig(out_path, format="png", dpi=160)
    plt.close(fig)
