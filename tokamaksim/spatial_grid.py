"""Uniform Cartesian binning of particles for neighbour lookups."""

from __future__ import annotations

import math
from itertools import accumulate
from typing import List, NamedTuple

from tokamaksim.particle_system import ParticleSystem
from tokamaksim.vec import Vec3


class CellLocation(NamedTuple):
    """Flat cell index and whether any coordinate had to be clamped into the grid."""

    index: int
    clamped: bool


class SpatialGrid:
    """Cubic grid covering [-offset, +offset) on each axis, with counting-sort buffers."""

    def __init__(self, reactor_size_m: float, requested_cell_size_m: float) -> None:
        self.cell_size_m: float = max(requested_cell_size_m, reactor_size_m / 50.0)
        self.grid_width: int = int(math.ceil((reactor_size_m * 2.0) / self.cell_size_m))
        self.total_cells: int = self.grid_width ** 3
        self.cell_counts: List[int] = [0] * self.total_cells
        self.cell_offsets: List[int] = [0] * self.total_cells
        self.write_heads: List[int] = [0] * self.total_cells
        self.sorted_particle_ids: List[int] = []

    def _axis_index(self, coordinate: float, offset_m: float) -> tuple:
        scaled = (coordinate + offset_m) / self.cell_size_m
        if not math.isfinite(scaled):
            return 0, True
        cell = math.floor(scaled)
        if cell < 0:
            return 0, True
        if cell > self.grid_width - 1:
            return self.grid_width - 1, True
        return int(cell), False

    def locate(self, position: Vec3, offset_m: float) -> CellLocation:
        """Cell holding ``position``, clamping out-of-domain coordinates to the edge."""
        x, cx = self._axis_index(position.x, offset_m)
        y, cy = self._axis_index(position.y, offset_m)
        z, cz = self._axis_index(position.z, offset_m)
        index = x + self.grid_width * (y + self.grid_width * z)
        return CellLocation(index, cx or cy or cz)

    def get_cell_index(self, position: Vec3, offset_m: float) -> int:
        """Flat index of the cell holding ``position``."""
        return self.locate(position, offset_m).index

    def is_valid_cell_index(self, cell_index: int) -> bool:
        return 0 <= cell_index < self.total_cells

    def ensure_particle_capacity(self, particle_count: int) -> None:
        """Grow the sorted-id buffer so it can hold ``particle_count`` entries."""
        missing = particle_count - len(self.sorted_particle_ids)
        if missing > 0:
            self.sorted_particle_ids.extend([0] * missing)

    def reset_counts(self) -> None:
        self.cell_counts = [0] * self.total_cells

    def build_offsets(self) -> None:
        """Exclusive prefix sum of the cell counts."""
        if not self.cell_offsets:
            return
        self.cell_offsets = [0, *accumulate(self.cell_counts[:-1])]

    def reset_write_heads(self) -> None:
        self.write_heads = list(self.cell_offsets)


def sort_particles_into_grid(particles: ParticleSystem, grid: SpatialGrid, grid_offset_m: float) -> int:
    """Counting-sort particle ids by cell; return how many positions were clamped."""
    positions = particles.positions
    grid.ensure_particle_capacity(len(positions))
    grid.reset_counts()

    cells = []
    clamp_count = 0
    for position in positions:
        location = grid.locate(position, grid_offset_m)
        if location.clamped:
            clamp_count += 1
        grid.cell_counts[location.index] += 1
        cells.append(location.index)

    grid.build_offsets()
    grid.reset_write_heads()

    for particle_id, cell in enumerate(cells):
        dest = grid.write_heads[cell]
        grid.write_heads[cell] = dest + 1
        grid.sorted_particle_ids[dest] = particle_id

    return clamp_count