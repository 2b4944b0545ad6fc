"""Van der Waals, hydrogen-bond and solvation parameters of ligand atom types."""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

from ligdock.constants import ATYPE_CG_IDX, ATYPE_NUM
from ligdock.geometry import prefix_equals_ignore_case
from ligdock.ligand import LigandError

# Names of the atom types in the lookup tables below, in table order.
_TABLE_NAMES: tuple[str, ...] = (
    "H", "HD", "HS", "C", "A",
    "N", "NA", "NS", "OA", "OS",
    "F", "MG", "P", "SA", "S",
    "CL", "CA", "MN", "FE", "ZN",
    "BR", "I",
    "CG", "G0", "W", "CX", "NX", "OX",
)

# Sum of vdW radii of two like atoms (A).
_REQM: tuple[float, ...] = (
    2.00, 2.00, 2.00, 4.00, 4.00,
    3.50, 3.50, 3.50, 3.20, 3.20,
    3.09, 1.30, 4.20, 4.00, 4.00,
    4.09, 1.98, 1.30, 1.30, 1.48,
    4.33, 4.72,
    4.00, 0.00, 0.00, 4.00, 3.50, 3.20,
)

# vdW well depth (kcal/mol).
_EPS: tuple[float, ...] = (
    0.020, 0.020, 0.020, 0.150, 0.150,
    0.160, 0.160, 0.160, 0.200, 0.200,
    0.080, 0.875, 0.200, 0.200, 0.200,
    0.276, 0.550, 0.875, 0.010, 0.550,
    0.389, 0.550,
    0.150, 0.000, 0.000, 0.150, 0.160, 0.200,
)

# Sum of vdW radii of two like atoms (A) for a hydrogen bond.
_REQM_HBOND: tuple[float, ...] = (
    0.0, 0.0, 0.0, 0.0, 0.0,
    0.0, 1.9, 1.9, 1.9, 1.9,
    0.0, 0.0, 0.0, 2.5, 0.0,
    0.0, 0.0, 0.0, 0.0, 0.0,
    0.0, 0.0,
    0.0, 0.0, 0.0, 0.0, 0.0, 1.9,
)

# Well depth (kcal/mol) for a hydrogen bond; hydrogens carry 1 so the
# product needs no knowledge of which partner is the hydrogen.
_EPS_HBOND: tuple[float, ...] = (
    0.0, 1.0, 1.0, 0.0, 0.0,
    0.0, 5.0, 5.0, 5.0, 5.0,
    0.0, 0.0, 0.0, 1.0, 0.0,
    0.0, 0.0, 0.0, 0.0, 0.0,
    0.0, 0.0,
    0.0, 0.0, 0.0, 0.0, 0.0, 5.0,
)

# Atomic volumes.
_VOLUME: tuple[float, ...] = (
    0.0000, 0.0000, 0.0000, 33.5103, 33.5103,
    22.4493, 22.4493, 22.4493, 17.1573, 17.1573,
    15.4480, 1.5600, 38.7924, 33.5103, 33.5103,
    35.8235, 2.7700, 2.1400, 1.8400, 1.7000,
    42.5661, 55.0585,
    33.5103, 0.0000, 0.0000, 33.5103, 22.4493, 17.1573,
)

# Atomic solvation parameters.
_SOLPAR: tuple[float, ...] = (
    0.00051, 0.00051, 0.00051, -0.00143, -0.00052,
    -0.00162, -0.00162, -0.00162, -0.00251, -0.00251,
    -0.00110, -0.00110, -0.00110, -0.00214, -0.00214,
    -0.00110, -0.00110, -0.00110, -0.00110, -0.00110,
    -0.00110, -0.00110,
    -0.00143, 0.00000, 0.00000, -0.00143, -0.00162, -0.00251,
)

_H_DONORS = frozenset({"HD", "HS"})
_H_ACCEPTORS = frozenset({"NA", "NS", "OA", "OS", "SA"})


def is_h_bond(atype1: str, atype2: str) -> bool:
    """True if a hydrogen bond can form between the two atom types."""
    return (atype1 in _H_DONORS and atype2 in _H_ACCEPTORS) or (
        atype2 in _H_DONORS and atype1 in _H_ACCEPTORS
    )


def vdw_table_index(type_name: str) -> int:
    """Index of ``type_name`` in the van der Waals and solvation tables.

    CGx types map to ``CG`` and Gx types to ``G0``.
    """
    found: int | None = None
    if type_name:
        first = type_name[0].upper()
        for index, name in enumerate(_TABLE_NAMES):
            if prefix_equals_ignore_case(name, type_name, 2):
                found = index
            elif len(name) > 1 and name[1] == "0" and name[0] == first:
                found = index
    if found is None:
        raise LigandError(f"ligand includes atom with unknown type: {type_name}")
    return found


@dataclass
class VdwParameters:
    """Pairwise energy coefficients and per-type parameters of a ligand.

    ``vdw_a``/``vdw_b`` are the 12-6 van der Waals coefficients and
    ``vdw_c``/``vdw_d`` the 12-10 hydrogen-bond coefficients, indexed by
    pairs of ligand atom types.  ``table_ids`` maps each ligand atom type to
    its row in the ``reqm`` and ``reqm_hbond`` tables.
    """

    vdw_a: list[list[float]]
    vdw_b: list[list[float]]
    vdw_c: list[list[float]]
    vdw_d: list[list[float]]
    table_ids: list[int]
    reqm: list[float]
    reqm_hbond: list[float]
    volume: list[float]
    solpar: list[float]


def compute_vdw_parameters(
    atom_types: Sequence[str], coeff_vdw: float, coeff_hb: float
) -> VdwParameters:
    """Compute the energy coefficients for every pair of ``atom_types``."""
    table_ids = [vdw_table_index(name) for name in atom_types]
    n = len(atom_types)
    vdw_a = [[0.0] * n for _ in range(n)]
    vdw_b = [[0.0] * n for _ in range(n)]
    vdw_c = [[0.0] * n for _ in range(n)]
    vdw_d = [[0.0] * n for _ in range(n)]

    for i, (name1, id1) in enumerate(zip(atom_types, table_ids)):
        for j, (name2, id2) in enumerate(zip(atom_types, table_ids)):
            if is_h_bond(name1, name2):
                eps12 = coeff_hb * _EPS_HBOND[id1] * _EPS_HBOND[id2]
                reqm12 = _REQM_HBOND[id1] + _REQM_HBOND[id2]
                vdw_c[i][j] = 5 * eps12 * reqm12 ** 12
                vdw_d[i][j] = 6 * eps12 * reqm12 ** 10
                continue
            cg_cg_pair = (
                id1 == ATYPE_CG_IDX and id2 == ATYPE_CG_IDX and name1[2:] == name2[2:]
            )
            if cg_cg_pair:
                continue
            eps12 = coeff_vdw * math.sqrt(_EPS[id1] * _EPS[id2])
            reqm12 = 0.5 * (_REQM[id1] + _REQM[id2])
            vdw_a[i][j] = eps12 * reqm12 ** 12
            vdw_b[i][j] = 2 * eps12 * reqm12 ** 6

    return VdwParameters(
        vdw_a=vdw_a,
        vdw_b=vdw_b,
        vdw_c=vdw_c,
        vdw_d=vdw_d,
        table_ids=table_ids,
        reqm=list(_REQM),
        reqm_hbond=list(_REQM_HBOND),
        volume=[_VOLUME[index] for index in table_ids],
        solpar=[_SOLPAR[index] for index in table_ids],
    )