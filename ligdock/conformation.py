"""Rotatable-bond geometry, conformation changes and RMSD of ligands."""

from __future__ import annotations

import math
import warnings
from collections.abc import Sequence

from ligdock.geometry import distance, rotate, vec_point2line
from ligdock.ligand import Ligand, LigandError

Vector = tuple[float, float, float]

# Value returned when an RMSD cannot be computed.
RMSD_MISMATCH = 100000.0


def rotbond_vectors(ligand: Ligand) -> tuple[list[Vector], list[Vector]]:
    """Moving and unit vectors of each rotatable bond.

    The moving vector shifts the bond axis through the origin; the unit
    vector points from the first to the second atom of the bond.
    """
    moving: list[Vector] = []
    units: list[Vector] = []
    origin = (0.0, 0.0, 0.0)
    for atom_a, atom_b in ligand.rotbonds:
        point_a = ligand.coords[atom_a]
        point_b = ligand.coords[atom_b]
        dist = distance(point_a, point_b)
        if dist == 0.0:
            raise LigandError("two atoms have the same XYZ coordinates")
        unit = tuple(
            min((b - a) / dist, 0.999999) if (b - a) / dist >= 1 else (b - a) / dist
            for a, b in zip(point_a[:3], point_b[:3])
        )
        moving.append(vec_point2line(origin, point_a, point_b))
        units.append(unit)  # type: ignore[arg-type]
    return moving, units


def _spherical_unit(phi_deg: float, theta_deg: float) -> Vector:
    phi = math.radians(phi_deg)
    theta = math.radians(theta_deg)
    return (
        math.sin(theta) * math.cos(phi),
        math.sin(theta) * math.sin(phi),
        math.cos(theta),
    )


def change_conformation(
    ligand: Ligand, genotype: Sequence[float], ref_ori_angles: Sequence[float]
) -> Ligand:
    """A copy of ``ligand`` placed according to ``genotype``.

    Genes 0-2 are the translation, genes 3-5 the orientation (axis angles
    phi and theta, and rotation angle, in degrees), and genes from 6 on the
    torsion angles.  ``ref_ori_angles`` gives the reference orientation in
    the same form as genes 3-5.  The input ligand is left unchanged.
    """
    result = ligand.copy()
    genrot_unit = _spherical_unit(genotype[3], genotype[4])
    ref_unit = _spherical_unit(ref_ori_angles[0], ref_ori_angles[1])
    ref_angle = ref_ori_angles[2]
    origin = (0.0, 0.0, 0.0)

    result.translate(result.centroid_offset())

    num_rotbonds = result.num_of_rotbonds
    for atom_index, atom in enumerate(result.coords):
        point: Vector = (atom[0], atom[1], atom[2])
        if atom_index < len(result.atom_rotbonds):
            flags = result.atom_rotbonds[atom_index][:num_rotbonds]
            for rotbond_id, flag in enumerate(flags):
                if flag:
                    point = rotate(
                        point,
                        result.rotbond_moving_vectors[rotbond_id],
                        result.rotbond_unit_vectors[rotbond_id],
                        genotype[6 + rotbond_id],
                    )
        point = rotate(point, origin, ref_unit, ref_angle)
        point = rotate(point, origin, genrot_unit, genotype[5])
        atom[0], atom[1], atom[2] = point

    result.translate(genotype[:3])
    return result


def rmsd(reference: Ligand, ligand: Ligand, handle_symmetry: bool = False) -> float:
    """Root mean square deviation between two conformations of a ligand.

    With ``handle_symmetry`` each atom is compared to the closest reference
    atom of the same type instead of the atom with the same index.  If the
    atom counts differ, a warning is issued and a very large value returned.
    """
    if reference.num_of_atoms != ligand.num_of_atoms:
        warnings.warn("RMSD can't be calculated, atom number mismatch", stacklevel=2)
        return RMSD_MISMATCH
    if ligand.num_of_atoms == 0:
        raise ValueError("RMSD is undefined for a ligand without atoms")

    if not handle_symmetry:
        total = sum(
            distance(atom, ref_atom) ** 2
            for atom, ref_atom in zip(ligand.coords, reference.coords)
        )
    else:
        total = 0.0
        for type_id, atom in zip(ligand.type_ids, ligand.coords):
            mindist2 = RMSD_MISMATCH
            for ref_type, ref_atom in zip(reference.type_ids, reference.coords):
                if ref_type == type_id:
                    mindist2 = min(mindist2, distance(atom, ref_atom) ** 2)
            total += mindist2

    return math.sqrt(total / ligand.num_of_atoms)