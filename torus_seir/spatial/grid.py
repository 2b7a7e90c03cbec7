"""
Toroidal Grid
=============
Occupancy lattice whose edges wrap around
Each cell holds the indices of the individuals currently standing on it
"""

import numpy as np
from typing import AbstractSet, List, Set, Tuple

from ..core.population import Individual


class ToroidalGrid:
    """
    2D wrap-around lattice for individual-level spatial modeling

    Cells store population indices, never the individuals themselves.
    """

    def __init__(self, width: int, height: int):
        """
        Initialize grid

        Args:
            width: Number of columns (x extent)
            height: Number of rows (y extent)
        """
        if width < 1 or height < 1:
            raise ValueError(f"Grid dimensions must be positive, got {width} x {height}")

        self.width = width
        self.height = height
        self.cells: List[Set[int]] = [set() for _ in range(width * height)]

    @property
    def n_cells(self) -> int:
        return self.width * self.height

    def wrap(self, x: int, y: int) -> Tuple[int, int]:
        """Wrap coordinates onto the torus (floor modulo)"""
        return x % self.width, y % self.height

    def cell_index(self, x: int, y: int) -> int:
        """Flat index of the wrapped cell at (x, y)"""
        wx, wy = self.wrap(x, y)
        return wx * self.height + wy

    def place(self, individual: Individual, x: int, y: int):
        """
        Put an individual on the grid

        Must not be called twice for the same individual; use
        move_individual for relocation.
        """
        wx, wy = self.wrap(x, y)
        cell = wx * self.height + wy
        self.cells[cell].add(individual.index)
        individual.x, individual.y, individual.cell = wx, wy, cell

    def move_individual(self, individual: Individual,
                        old_x: int, old_y: int,
                        new_x: int, new_y: int):
        """Relocate an individual from the old cell to the new one"""
        # KeyError here means the individual was not where the caller claimed
        self.cells[self.cell_index(old_x, old_y)].remove(individual.index)

        wx, wy = self.wrap(new_x, new_y)
        cell = wx * self.height + wy
        self.cells[cell].add(individual.index)
        individual.x, individual.y, individual.cell = wx, wy, cell

    def individuals_at(self, x: int, y: int) -> AbstractSet[int]:
        """Indices of the individuals in the wrapped cell (do not mutate)"""
        return self.cells[self.cell_index(x, y)]

    def occupancy(self, x: int, y: int) -> int:
        return len(self.individuals_at(x, y))

    def total_occupancy(self) -> int:
        return sum(len(cell) for cell in self.cells)

    def occupancy_map(self) -> np.ndarray:
        """Get 2D array of occupancy counts, indexed [x, y]"""
        counts = np.fromiter((len(cell) for cell in self.cells), dtype=int, count=self.n_cells)
        return counts.reshape(self.width, self.height)

    def summary(self) -> str:
        """Return grid occupancy statistics"""
        occ = self.occupancy_map()

        summary = f"Toroidal Grid Summary\n"
        summary += f"=" * 50 + "\n"
        summary += f"Dimensions: {self.width} x {self.height} = {self.n_cells} cells\n"
        summary += f"Individuals placed: {int(occ.sum()):,}\n"
        summary += f"Occupancy per cell:\n"
        summary += f"  Mean: {occ.mean():.3f}\n"
        summary += f"  Max: {int(occ.max())}\n"
        summary += f"  Empty cells: {int((occ == 0).sum()):,}\n"
        return summary
