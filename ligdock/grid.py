"""Reading grid descriptions (.fld) and the receptor energy maps (.map)."""

from __future__ import annotations

import os
from collections.abc import Iterator, Sequence
from dataclasses import dataclass
from typing import Callable, TypeVar

from ligdock.constants import MAX_NUM_GRIDPOINTS

_T = TypeVar("_T")


class GridError(Exception):
    """Raised when grid files are missing or malformed."""


@dataclass(frozen=True)
class GridInfo:
    """Geometry of a receptor grid and where its map files live."""

    grid_file_path: str
    receptor_name: str
    size_xyz: tuple[int, int, int]
    spacing: float
    size_xyz_angstr: tuple[float, float, float]
    origo_real_xyz: tuple[float, float, float]


@dataclass
class GridMaps:
    """Grid point values of all maps.

    Each grid point holds four values: its own, and those of its +y, +z
    and +y+z neighbours, so that a cube corner set can be read linearly.
    """

    size_xyz: tuple[int, int, int]
    grid_types: list[str]
    data: list[float]

    @property
    def num_of_atypes(self) -> int:
        """Number of atom-type maps (without the electrostatic and desolvation maps)."""
        return len(self.grid_types) - 2

    def value(self, type_id: int, z: int, y: int, x: int) -> float:
        """Value of map ``type_id`` at grid point (x, y, z)."""
        sx, sy, sz = self.size_xyz
        if not (0 <= type_id < len(self.grid_types)):
            raise IndexError(f"map index {type_id} out of range")
        if not (0 <= x < sx and 0 <= y < sy and 0 <= z < sz):
            raise IndexError(f"grid point ({x}, {y}, {z}) out of range")
        return self.data[4 * (((type_id * sz + z) * sy + y) * sx + x)]


def _next_value(tokens: Iterator[str], kind: Callable[[str], _T], key: str) -> _T:
    token = next(tokens, None)
    if token is None:
        raise GridError(f"missing value after {key}")
    try:
        return kind(token)
    except ValueError as exc:
        raise GridError(f"invalid value {token!r} after {key}") from exc


def read_fld(path: str | os.PathLike[str]) -> GridInfo:
    """Read a ``.maps.fld`` grid description."""
    path = os.fspath(path)
    try:
        with open(path, encoding="latin-1") as handle:
            text = handle.read()
    except OSError as exc:
        raise GridError(f"can't open fld file {path}") from exc

    spacing: float | None = None
    gpoints: tuple[int, int, int] | None = None
    center: tuple[float, float, float] | None = None
    receptor = ""

    tokens = iter(text.split())
    for token in tokens:
        if token == "#SPACING":
            spacing = _next_value(tokens, float, token)
            if spacing > 1:
                raise GridError("grid spacing is too big")
        elif token == "#NELEMENTS":
            gpoints = tuple(_next_value(tokens, int, token) for _ in range(3))  # type: ignore[assignment]
            if any(n + 1 > MAX_NUM_GRIDPOINTS for n in gpoints):
                raise GridError(
                    f"each dimension of the grid must be below {MAX_NUM_GRIDPOINTS}"
                )
        elif token == "#CENTER":
            center = tuple(_next_value(tokens, float, token) for _ in range(3))  # type: ignore[assignment]
        elif token == "#MACROMOLECULE":
            name = next(tokens, None)
            if name is None:
                raise GridError("missing value after #MACROMOLECULE")
            receptor = name.split(".", 1)[0]

    if spacing is None or gpoints is None or center is None:
        raise GridError(f"fld file {path} lacks #SPACING, #NELEMENTS or #CENTER")

    size = tuple(n + 1 for n in gpoints)
    return GridInfo(
        grid_file_path=os.path.dirname(path) or ".",
        receptor_name=receptor,
        size_xyz=size,  # type: ignore[arg-type]
        spacing=spacing,
        size_xyz_angstr=tuple((s - 1) * spacing for s in size),  # type: ignore[arg-type]
        origo_real_xyz=tuple(
            c - n * 0.5 * spacing for c, n in zip(center, gpoints)
        ),  # type: ignore[arg-type]
    )


def _missing_map_message(path: str, grid_type: str, cgmaps: bool) -> str:
    message = f"can't open {path}"
    if grid_type.startswith("CG") or grid_type.startswith("G"):
        if cgmaps:
            hint = "expecting an individual map for each CGx and Gx (x=0..9) atom type"
        else:
            hint = (
                "expecting one map file, ending in .CG.map and .G0.map, "
                "for CGx and Gx atom types, respectively"
            )
        message = f"{message} ({hint})"
    return message


def _read_map_values(path: str, grid_type: str, count: int, cgmaps: bool) -> list[float]:
    try:
        with open(path, encoding="latin-1") as handle:
            tokens = handle.read().split()
    except OSError as exc:
        raise GridError(_missing_map_message(path, grid_type, cgmaps)) from exc
    try:
        start = tokens.index("CENTER") + 4
    except ValueError as exc:
        raise GridError(f"map file {path} has no CENTER line") from exc
    raw = tokens[start:start + count]
    if len(raw) < count:
        raise GridError(f"map file {path} holds fewer than {count} values")
    try:
        return [float(token) for token in raw]
    except ValueError as exc:
        raise GridError(f"map file {path} holds a non-numeric value") from exc


def read_maps(grid: GridInfo, grid_types: Sequence[str], cgmaps: bool = False) -> GridMaps:
    """Read one ``.map`` file per grid type and lay out the values for interpolation."""
    sx, sy, sz = grid.size_xyz
    g1 = sx
    g2 = sx * sy
    npoints = g2 * sz
    data = [0.0] * (4 * npoints * len(grid_types))

    for type_id, grid_type in enumerate(grid_types):
        path = os.path.join(grid.grid_file_path, f"{grid.receptor_name}.{grid_type}.map")
        values = _read_map_values(path, grid_type, npoints, cgmaps)
        base = type_id * npoints
        for offset, value in enumerate(values):
            y = (offset // g1) % sy
            z = offset // g2
            slot = 4 * (base + offset)
            data[slot] = value
            if y > 0:
                data[slot - 4 * g1 + 1] = value
            if z > 0:
                data[slot - 4 * g2 + 2] = value
            if y > 0 and z > 0:
                data[slot - 4 * (g2 + g1) + 3] = value

    return GridMaps(size_xyz=grid.size_xyz, grid_types=list(grid_types), data=data)