"""Intramolecular energy of a ligand, with distance-dependent lookup tables."""

from __future__ import annotations

import math
from dataclasses import dataclass

from ligdock.constants import ATYPE_CG_IDX, ATYPE_G0_IDX, G
from ligdock.forcefield import is_h_bond
from ligdock.geometry import distance
from ligdock.grid import GridInfo, GridMaps
from ligdock.intermolecular import inter_energy
from ligdock.ligand import Ligand

# Tables cover the distances 0.01, 0.02, ..., 20.48 A.
TABLE_SIZE = 2048
MAX_TABLE_DISTANCE = 20.48

# Width of the Gaussian desolvation term (A).
DESOLV_SIGMA = 3.6

# Distance cutoff of the van der Waals term for reference energies (A).
REFERENCE_DCUTOFF = 8.0


def ddd_mehler_solmajer(distance: float) -> float:
    """Distance-dependent dielectric function of Mehler and Solmajer."""
    lam = 0.003627
    epsilon0 = 78.4
    a = -8.5525
    rk = 7.7839
    b = epsilon0 - a
    return a + b / (1.0 + rk * math.exp(-lam * b * distance))


def distance_tables(
    scaled_coeff_elec: float, coeff_desolv: float
) -> tuple[list[float], list[float], list[float], list[float], list[float]]:
    """Tables of 1/r^6, 1/r^10, 1/r^12, W_el/(r*eps(r)) and W_des*exp(-r^2/(2 sigma^2))."""
    r_6: list[float] = []
    r_10: list[float] = []
    r_12: list[float] = []
    r_epsr: list[float] = []
    desolv: list[float] = []
    for step in range(1, TABLE_SIZE + 1):
        dist = step / 100
        r_6.append(1 / dist ** 6)
        r_10.append(1 / dist ** 10)
        r_12.append(1 / dist ** 12)
        r_epsr.append(scaled_coeff_elec / (dist * ddd_mehler_solmajer(dist)))
        desolv.append(
            coeff_desolv * math.exp(-dist * dist / (2 * DESOLV_SIGMA * DESOLV_SIGMA))
        )
    return r_6, r_10, r_12, r_epsr, desolv


def charge_tables(ligand: Ligand, qasp: float) -> tuple[list[list[float]], list[float]]:
    """Pairwise charge products q1*q2 and per-atom qasp*|q| values."""
    charges = ligand.charges
    q1q2 = [[qi * qj for qj in charges] for qi in charges]
    qasp_mul_absq = [qasp * abs(q) for q in charges]
    return q1q2, qasp_mul_absq


@dataclass
class IntraTables:
    """Lookup tables needed by :func:`intra_energy` for one ligand."""

    r_6_table: list[float]
    r_10_table: list[float]
    r_12_table: list[float]
    r_epsr_table: list[float]
    desolv_table: list[float]
    q1q2: list[list[float]]
    qasp_mul_absq: list[float]

    @classmethod
    def build(
        cls,
        ligand: Ligand,
        scaled_coeff_elec: float,
        coeff_desolv: float,
        qasp: float,
    ) -> IntraTables:
        """Compute the distance and charge tables for ``ligand``."""
        r_6, r_10, r_12, r_epsr, desolv = distance_tables(scaled_coeff_elec, coeff_desolv)
        q1q2, qasp_mul_absq = charge_tables(ligand, qasp)
        return cls(r_6, r_10, r_12, r_epsr, desolv, q1q2, qasp_mul_absq)


def _table_index(dist: float) -> int:
    index = math.floor(100 * dist + 0.5) - 1
    return min(max(index, 0), TABLE_SIZE - 1)


def intra_energy(
    ligand: Ligand,
    dcutoff: float,
    smooth: float,
    ignore_desolv: bool,
    tables: IntraTables,
) -> float:
    """Intramolecular energy of a prepared ligand.

    The van der Waals / hydrogen-bond term uses a smoothed distance and is
    cut off at ``dcutoff``; electrostatics and desolvation use the real
    distance up to the end of the tables.  CG-G0 pairs add a linear term at
    any distance.
    """
    params = ligand.vdw
    contributors = ligand.intra_contributors
    n = ligand.num_of_atoms
    if params is None:
        raise ValueError("ligand has no van der Waals parameters")
    if len(contributors) < n:
        raise ValueError("ligand has no intramolecular contributor matrix")

    names = ligand.atom_types
    delta = 0.5 * smooth
    vw = el = desolv = 0.0

    for i in range(n - 1):
        for j in range(i + 1, n):
            if not contributors[i][j]:
                continue
            dist = distance(ligand.coords[i], ligand.coords[j])
            t1 = ligand.type_ids[i]
            t2 = ligand.type_ids[j]
            row1 = params.table_ids[t1]
            row2 = params.table_ids[t2]
            hbond = is_h_bond(names[t1], names[t2])

            if hbond:
                opt = params.reqm_hbond[row1] + params.reqm_hbond[row2]
            else:
                opt = 0.5 * (params.reqm[row1] + params.reqm[row2])

            if dist <= opt - delta:
                smoothed = dist + delta
            elif dist < opt + delta:
                smoothed = opt
            else:
                smoothed = dist - delta

            if dist < dcutoff:
                k = _table_index(smoothed)
                if hbond:
                    vw += (
                        params.vdw_c[t1][t2] * tables.r_12_table[k]
                        - params.vdw_d[t1][t2] * tables.r_10_table[k]
                    )
                else:
                    vw += (
                        params.vdw_a[t1][t2] * tables.r_12_table[k]
                        - params.vdw_b[t1][t2] * tables.r_6_table[k]
                    )

            if dist < MAX_TABLE_DISTANCE:
                k = _table_index(dist)
                s1 = params.solpar[t1] + tables.qasp_mul_absq[i]
                s2 = params.solpar[t2] + tables.qasp_mul_absq[j]
                v1 = params.volume[t1]
                v2 = params.volume[t2]
                el += tables.q1q2[i][j] * tables.r_epsr_table[k]
                desolv += (s1 * v2 + s2 * v1) * tables.desolv_table[k]

            if {row1, row2} == {ATYPE_CG_IDX, ATYPE_G0_IDX}:
                vw += G * dist

    return vw + el if ignore_desolv else vw + el + desolv


def reference_energies(
    ligand: Ligand,
    smooth: float,
    grid: GridInfo,
    maps: GridMaps,
    scaled_coeff_elec: float,
    coeff_desolv: float,
    qasp: float,
) -> tuple[float, float]:
    """Intramolecular and intermolecular energy of a ligand in real coordinates.

    The ligand itself is left unchanged.
    """
    tables = IntraTables.build(ligand, scaled_coeff_elec, coeff_desolv, qasp)
    intra = intra_energy(ligand, REFERENCE_DCUTOFF, smooth, False, tables)

    in_grid = ligand.copy()
    in_grid.translate([-c for c in grid.origo_real_xyz])
    in_grid.scale(1.0 / grid.spacing)
    inter = inter_energy(grid, maps, in_grid, 0.0)
    return intra, inter