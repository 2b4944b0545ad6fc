"""Intermolecular energy of a ligand in a receptor grid."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from ligdock.geometry import trilinear_weights
from ligdock.grid import GridInfo, GridMaps
from ligdock.ligand import Ligand

# Energy added for every atom that stays outside the grid.
OUT_OF_GRID_PENALTY = 16777216.0

# Per-atom energy reported for an atom that stays outside the grid.
OUT_OF_GRID_PERATOM = 100000.0


def trilinear_interpolate(
    cube: Sequence[Sequence[Sequence[float]]],
    weights: Sequence[Sequence[Sequence[float]]],
) -> float:
    """Weighted sum of the eight cube corner values, both indexed ``[x][y][z]``."""
    return sum(
        cube[i][j][k] * weights[i][j][k]
        for i in (0, 1)
        for j in (0, 1)
        for k in (0, 1)
    )


def _inside(grid: GridInfo, x: float, y: float, z: float) -> bool:
    sx, sy, sz = grid.size_xyz
    return 0 <= x < sx - 1 and 0 <= y < sy - 1 and 0 <= z < sz - 1


def _place_in_grid(
    grid: GridInfo, coords: Sequence[float], tolerance: float
) -> tuple[float, float, float] | None:
    """The atom position, nudged by ``tolerance`` if needed, or None if outside."""
    x, y, z = coords[0], coords[1], coords[2]
    if _inside(grid, x, y, z):
        return x, y, z
    if tolerance != 0:
        sx, sy, sz = grid.size_xyz
        if x < 0:
            x += tolerance
        if y < 0:
            y += tolerance
        if z < 0:
            z += tolerance
        if x >= sx - 1:
            x -= tolerance
        if y >= sy - 1:
            y -= tolerance
        if z >= sz - 1:
            z -= tolerance
    if not _inside(grid, x, y, z):
        return None
    return x, y, z


@dataclass(frozen=True)
class _Cell:
    lows: tuple[int, int, int]
    highs: tuple[int, int, int]
    weights: list[list[list[float]]]

    @classmethod
    def at(cls, x: float, y: float, z: float) -> _Cell:
        lows = (math.floor(x), math.floor(y), math.floor(z))
        highs = (math.ceil(x), math.ceil(y), math.ceil(z))
        weights = trilinear_weights(x - lows[0], y - lows[1], z - lows[2])
        return cls(lows, highs, weights)

    def interpolate(self, maps: GridMaps, type_id: int) -> float:
        xs = (self.lows[0], self.highs[0])
        ys = (self.lows[1], self.highs[1])
        zs = (self.lows[2], self.highs[2])
        cube = [
            [[maps.value(type_id, zv, yv, xv) for zv in zs] for yv in ys]
            for xv in xs
        ]
        return trilinear_interpolate(cube, self.weights)


def inter_energy(
    grid: GridInfo,
    maps: GridMaps,
    ligand: Ligand,
    outofgrid_tolerance: float = 0.0,
) -> float:
    """Intermolecular energy of a ligand whose coordinates are in grid units.

    An atom outside the grid is moved inwards by ``outofgrid_tolerance``; if
    it is still outside, a large penalty is added for it instead.
    """
    elec_map = maps.num_of_atypes
    desolv_map = elec_map + 1
    energy = 0.0
    for atom in reversed(range(ligand.num_of_atoms)):
        position = _place_in_grid(grid, ligand.coords[atom], outofgrid_tolerance)
        if position is None:
            energy += OUT_OF_GRID_PENALTY
            continue
        cell = _Cell.at(*position)
        charge = ligand.charges[atom]
        energy += cell.interpolate(maps, ligand.type_ids[atom])
        energy += charge * cell.interpolate(maps, elec_map)
        energy += abs(charge) * cell.interpolate(maps, desolv_map)
    return energy


def inter_energy_per_atom(
    grid: GridInfo,
    maps: GridMaps,
    ligand: Ligand,
    outofgrid_tolerance: float = 0.0,
) -> tuple[float, list[float], list[float]]:
    """Per-atom van der Waals and electrostatic energies.

    Returns the total electrostatic energy and the per-atom van der Waals
    and electrostatic lists.  Atoms outside the grid get a large value in
    both lists and add nothing to the total.
    """
    elec_map = maps.num_of_atypes
    n = ligand.num_of_atoms
    peratom_vdw = [0.0] * n
    peratom_elec = [0.0] * n
    elec_total = 0.0
    for atom in reversed(range(n)):
        position = _place_in_grid(grid, ligand.coords[atom], outofgrid_tolerance)
        if position is None:
            peratom_vdw[atom] = OUT_OF_GRID_PERATOM
            peratom_elec[atom] = OUT_OF_GRID_PERATOM
            continue
        cell = _Cell.at(*position)
        peratom_vdw[atom] = cell.interpolate(maps, ligand.type_ids[atom])
        elec = ligand.charges[atom] * cell.interpolate(maps, elec_map)
        peratom_elec[atom] = elec
        elec_total += elec
    return elec_total, peratom_vdw, peratom_elec