"""Ligand structure read from AutoDock4 PDBQT files."""

from __future__ import annotations

import copy
import os
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from ligdock.constants import MAX_NUM_OF_ATOMS, MAX_NUM_OF_ATYPES, MAX_NUM_OF_ROTBONDS

# Characters skipped after the record keyword to reach the first coordinate.
_COORD_SKIP = {"ATOM": 27, "HETATM": 25}


class LigandError(Exception):
    """Raised when a ligand file is missing or cannot be used."""


@dataclass
class Ligand:
    """A ligand: atoms, their types, charges and torsion tree."""

    atom_types: list[str] = field(default_factory=list)
    type_ids: list[int] = field(default_factory=list)
    coords: list[list[float]] = field(default_factory=list)
    charges: list[float] = field(default_factory=list)
    rigid_structures: list[int] = field(default_factory=list)
    rotbonds: list[tuple[int, int]] = field(default_factory=list)
    atom_rotbonds: list[list[bool]] = field(default_factory=list)
    bonds: list[list[int]] = field(default_factory=list)
    intra_contributors: list[list[bool]] = field(default_factory=list)
    vdw: Any = None
    rotbond_moving_vectors: list[tuple[float, float, float]] = field(default_factory=list)
    rotbond_unit_vectors: list[tuple[float, float, float]] = field(default_factory=list)

    @property
    def num_of_atoms(self) -> int:
        return len(self.coords)

    @property
    def num_of_atypes(self) -> int:
        return len(self.atom_types)

    @property
    def num_of_rotbonds(self) -> int:
        return len(self.rotbonds)

    def type_index(self, type_name: str) -> int:
        """Index of ``type_name`` among the ligand's atom types."""
        found = None
        for index, name in enumerate(self.atom_types):
            if name == type_name:
                found = index
        if found is None:
            raise LigandError(f"no grid for ligand atom type {type_name}")
        return found

    def centroid_offset(self) -> tuple[float, float, float]:
        """Vector moving the geometric centre of the ligand to the origin."""
        if not self.coords:
            raise ValueError("ligand has no atoms")
        n = len(self.coords)
        return tuple(-sum(c[i] for c in self.coords) / n for i in range(3))  # type: ignore[return-value]

    def translate(self, vector: Sequence[float]) -> None:
        """Move every atom by ``vector``."""
        for atom in self.coords:
            for i in range(3):
                atom[i] += vector[i]

    def scale(self, factor: float) -> None:
        """Multiply every atom coordinate by ``factor``."""
        for atom in self.coords:
            for i in range(3):
                atom[i] *= factor

    def copy(self) -> Ligand:
        """An independent deep copy."""
        return copy.deepcopy(self)


@dataclass
class _Branch:
    atom_a: int
    atom_b: int
    is_open: bool = True


def _read_lines(path: str | os.PathLike[str]) -> list[str]:
    path = os.fspath(path)
    try:
        with open(path, encoding="latin-1") as handle:
            return handle.read().splitlines()
    except OSError as exc:
        raise LigandError(f"can't open ligand data file {path}") from exc


def _keyword(line: str) -> str:
    parts = line.split(None, 1)
    return parts[0] if parts else ""


def _parse_atom(line: str, keyword: str) -> tuple[tuple[float, float, float], float, str]:
    start = line.index(keyword) + len(keyword) + _COORD_SKIP[keyword]
    fields = line[start:].split()
    if len(fields) < 7:
        raise LigandError(f"malformed atom record: {line.strip()!r}")
    try:
        x, y, z = (float(value) for value in fields[:3])
        charge = float(fields[5])
    except ValueError as exc:
        raise LigandError(f"malformed atom record: {line.strip()!r}") from exc
    return (x, y, z), charge, fields[6]


def _bond_ends(tokens: list[str], line: str) -> tuple[int, int]:
    if len(tokens) < 3:
        raise LigandError(f"malformed torsion record: {line.strip()!r}")
    try:
        return int(tokens[1]) - 1, int(tokens[2]) - 1
    except ValueError as exc:
        raise LigandError(f"malformed torsion record: {line.strip()!r}") from exc


def scan_atom_types(
    path: str | os.PathLike[str], cgmaps: bool = False
) -> tuple[list[str], list[str]]:
    """Collect the ligand's atom types and the grid map types they need.

    Returns the atom types in order of first appearance and the grid
    types, which end with the electrostatic ``e`` and desolvation ``d`` maps.
    Without ``cgmaps``, CGx types share the ``CG`` map and Gx types the ``G0`` map.
    """
    atom_types: list[str] = []
    for line in _read_lines(path):
        keyword = _keyword(line)
        if keyword not in _COORD_SKIP:
            continue
        _, _, atom_type = _parse_atom(line, keyword)
        atom_type = atom_type[:3]
        if atom_type in atom_types:
            continue
        if len(atom_types) >= MAX_NUM_OF_ATYPES:
            raise LigandError("too many types of ligand atoms")
        atom_types.append(atom_type)

    grid_types: list[str] = []
    for atom_type in atom_types:
        if cgmaps:
            grid_types.append(atom_type)
        else:
            grid_type = atom_type[:2]
            if len(grid_type) > 1 and grid_type[1].isdigit():
                grid_type = grid_type[0] + "0"
            grid_types.append(grid_type)
    grid_types.extend(["e", "d"])
    return atom_types, grid_types


def read_ligand(path: str | os.PathLike[str], atom_types: Sequence[str]) -> Ligand:
    """Read atoms, charges and the torsion tree of a PDBQT ligand."""
    lines = _read_lines(path)
    ligand = Ligand(atom_types=list(atom_types))

    for line in lines:
        keyword = _keyword(line)
        if keyword not in _COORD_SKIP:
            continue
        if ligand.num_of_atoms >= MAX_NUM_OF_ATOMS:
            raise LigandError(
                f"ligand consists of too many atoms; the maximum is {MAX_NUM_OF_ATOMS}"
            )
        coords, charge, atom_type = _parse_atom(line, keyword)
        type_id = ligand.type_index(atom_type)
        ligand.type_ids.append(type_id)
        ligand.coords.append(list(coords))
        ligand.charges.append(charge)

    branches: list[_Branch] = []
    membership: list[list[bool]] = []
    rotbonds: list[tuple[int, int]] = []
    rigid_structures: list[int] = []
    current_struct = reserved_struct = 1

    for line in lines:
        tokens = line.split()
        if not tokens:
            continue
        keyword = tokens[0]
        if keyword in _COORD_SKIP:
            membership.append([branch.is_open for branch in branches])
            rigid_structures.append(current_struct)
        elif keyword == "BRANCH":
            if len(branches) >= MAX_NUM_OF_ROTBONDS:
                raise LigandError(
                    "ligand includes too many rotatable bonds; "
                    f"the maximum is {MAX_NUM_OF_ROTBONDS}"
                )
            atom_a, atom_b = _bond_ends(tokens, line)
            branches.append(_Branch(atom_a, atom_b))
            reserved_struct += 1
            current_struct = reserved_struct
        elif keyword == "ENDBRANCH":
            bond = _bond_ends(tokens, line)
            rotbonds.append(bond)
            for branch in branches:
                if (branch.atom_a, branch.atom_b) == bond:
                    branch.is_open = False
            current_struct -= 1

    if len(rotbonds) != len(branches):
        raise LigandError("BRANCH and ENDBRANCH records do not match")

    # Rotatable bonds are kept in ENDBRANCH order; membership columns follow
    # BRANCH order and are rearranged accordingly.
    columns: list[int | None] = []
    for bond in rotbonds:
        match = None
        for index, branch in enumerate(branches):
            if (branch.atom_a, branch.atom_b) == bond:
                match = index
        columns.append(match)

    ligand.rigid_structures = rigid_structures
    ligand.rotbonds = rotbonds
    ligand.atom_rotbonds = [
        [column is not None and column < len(row) and row[column] for column in columns]
        for row in membership
    ]
    return ligand