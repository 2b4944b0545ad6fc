import math

import pytest

from ligdock.constants import G
from ligdock.forcefield import compute_vdw_parameters
from ligdock.grid import GridInfo, GridMaps
from ligdock.intermolecular import inter_energy
from ligdock.intramolecular import (
    TABLE_SIZE,
    IntraTables,
    charge_tables,
    ddd_mehler_solmajer,
    distance_tables,
    intra_energy,
    reference_energies,
)
from ligdock.ligand import Ligand


def _pair(names, dist, charges=(0.0, 0.0)):
    atom_types = list(dict.fromkeys(names))
    ligand = Ligand(
        atom_types=atom_types,
        type_ids=[atom_types.index(name) for name in names],
        coords=[[0.0, 0.0, 0.0], [dist, 0.0, 0.0]],
        charges=list(charges),
        intra_contributors=[[False, True], [True, False]],
    )
    ligand.vdw = compute_vdw_parameters(atom_types, 1.0, 1.0)
    return ligand


def _energy(ligand, dcutoff=8.0, smooth=0.0, ignore_desolv=True, elec=1.0, desolv=1.0, qasp=0.0):
    tables = IntraTables.build(ligand, elec, desolv, qasp)
    return intra_energy(ligand, dcutoff, smooth, ignore_desolv, tables)


def test_dielectric_increases_towards_bulk_value():
    values = [ddd_mehler_solmajer(d) for d in (0.5, 2.0, 5.0, 10.0, 20.0)]
    assert values == sorted(values)
    assert ddd_mehler_solmajer(10000.0) == pytest.approx(78.4)


def test_distance_tables_shapes_and_relations():
    r_6, r_10, r_12, r_epsr, desolv = distance_tables(2.0, 0.5)
    assert all(len(t) == TABLE_SIZE for t in (r_6, r_10, r_12, r_epsr, desolv))
    for i in (0, 99, 399, TABLE_SIZE - 1):
        dist = (i + 1) / 100
        assert r_12[i] == pytest.approx(r_6[i] ** 2)
        assert r_10[i] * dist ** 10 == pytest.approx(1.0)
        assert r_epsr[i] * dist * ddd_mehler_solmajer(dist) == pytest.approx(2.0)
    assert desolv == sorted(desolv, reverse=True)
    assert desolv[0] < 0.5


def test_charge_tables():
    ligand = _pair(["C", "C"], 2.0, charges=(0.4, -0.25))
    q1q2, qasp_mul_absq = charge_tables(ligand, 0.01)
    assert q1q2[0][1] == q1q2[1][0] == pytest.approx(0.4 * -0.25)
    assert q1q2[0][0] == pytest.approx(0.16)
    assert qasp_mul_absq == pytest.approx([0.004, 0.0025])


def test_vdw_minimum_at_optimal_distance():
    ligand = _pair(["C", "C"], 4.0)
    assert _energy(ligand) == pytest.approx(-0.15, rel=1e-6)


def test_smoothing_flattens_around_optimum():
    smoothed = _energy(_pair(["C", "C"], 3.8), smooth=1.0)
    exact = _energy(_pair(["C", "C"], 4.0), smooth=0.0)
    assert smoothed == pytest.approx(exact)


def test_vdw_cut_off_beyond_dcutoff():
    assert _energy(_pair(["C", "C"], 9.0), dcutoff=8.0) == 0.0


def test_non_contributors_give_zero():
    ligand = _pair(["C", "C"], 3.0, charges=(1.0, 1.0))
    ligand.intra_contributors = [[False, False], [False, False]]
    assert _energy(ligand, ignore_desolv=False) == 0.0


def test_electrostatics_flip_with_charge_sign():
    attract = _energy(_pair(["C", "C"], 9.0, charges=(0.5, -0.5)))
    repel = _energy(_pair(["C", "C"], 9.0, charges=(0.5, 0.5)))
    assert attract < 0
    assert repel == pytest.approx(-attract)


def test_desolvation_term_included_unless_ignored():
    ligand = _pair(["C", "C"], 5.0)
    with_desolv = _energy(ligand, ignore_desolv=False)
    without = _energy(ligand, ignore_desolv=True)
    assert with_desolv < without


def test_cg_g0_pair_is_linear_in_distance():
    ligand = _pair(["CG0", "G0"], 2.0)
    assert _energy(ligand, ignore_desolv=False) == pytest.approx(G * 2.0)


def test_missing_parameters_raise():
    ligand = _pair(["C", "C"], 3.0)
    ligand.vdw = None
    with pytest.raises(ValueError):
        _energy(ligand)


def test_reference_energies_leave_ligand_unchanged():
    size = (5, 5, 5)
    grid = GridInfo(
        grid_file_path=".",
        receptor_name="rec",
        size_xyz=size,
        spacing=0.5,
        size_xyz_angstr=(2.0, 2.0, 2.0),
        origo_real_xyz=(10.0, 10.0, 10.0),
    )
    data = []
    for t in range(3):
        for z in range(5):
            for y in range(5):
                for x in range(5):
                    data.extend([float(x + t), 0.0, 0.0, 0.0])
    maps = GridMaps(size_xyz=size, grid_types=["C", "e", "d"], data=data)

    ligand = _pair(["C", "C"], 1.0, charges=(0.2, -0.1))
    ligand.coords = [[10.5, 10.5, 10.5], [11.0, 10.75, 10.5]]
    before = [list(c) for c in ligand.coords]

    intra, inter = reference_energies(ligand, 0.5, grid, maps, 1.0, 1.0, 0.01)

    assert ligand.coords == before
    tables = IntraTables.build(ligand, 1.0, 1.0, 0.01)
    assert intra == pytest.approx(intra_energy(ligand, 8.0, 0.5, False, tables))

    moved = ligand.copy()
    moved.coords = [[(c - 10.0) / 0.5 for c in atom] for atom in ligand.coords]
    assert inter == pytest.approx(inter_energy(grid, maps, moved, 0.0))
    assert math.isfinite(intra)