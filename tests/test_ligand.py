import pytest

from ligdock.ligand import Ligand, LigandError, read_ligand, scan_atom_types


def atom(serial, x, y, z, charge, atype, record="ATOM"):
    head = f"{record:<6}{serial:5d} {atype:<4} LIG A   1    "
    return f"{head}{x:8.3f}{y:8.3f}{z:8.3f}  1.00  0.00    {charge:6.3f} {atype:<2}\n"


SIMPLE = (
    "ROOT\n"
    + atom(1, 0.0, 0.0, 0.0, 0.1, "C")
    + atom(2, 1.2, 0.0, 0.0, -0.2, "OA")
    + "ENDROOT\n"
    + "BRANCH   2   3\n"
    + atom(3, 2.0, 1.0, 0.0, 0.05, "C")
    + atom(4, 3.0, 1.0, 0.0, 0.15, "HD")
    + "ENDBRANCH   2   3\n"
    + "TORSDOF 1\n"
)

NESTED = (
    "ROOT\n"
    + atom(1, 0.0, 0.0, 0.0, 0.0, "C")
    + atom(2, 1.5, 0.0, 0.0, 0.0, "C")
    + "ENDROOT\n"
    + "BRANCH   2   3\n"
    + atom(3, 2.5, 1.0, 0.0, 0.0, "C")
    + "BRANCH   3   4\n"
    + atom(4, 3.5, 1.0, 1.0, 0.0, "OA")
    + "ENDBRANCH   3   4\n"
    + "ENDBRANCH   2   3\n"
)


@pytest.fixture
def simple_path(tmp_path):
    path = tmp_path / "lig.pdbqt"
    path.write_text(SIMPLE)
    return path


def test_scan_atom_types(simple_path):
    types, grid_types = scan_atom_types(simple_path, False)
    assert types == ["C", "OA", "HD"]
    assert grid_types == types + ["e", "d"]


def test_scan_flexring_types_share_maps(tmp_path):
    path = tmp_path / "ring.pdbqt"
    path.write_text(
        atom(1, 0, 0, 0, 0, "CG1") + atom(2, 1, 0, 0, 0, "G1") + atom(3, 2, 0, 0, 0, "C")
    )
    types, grid_types = scan_atom_types(path, False)
    assert types == ["CG1", "G1", "C"]
    assert grid_types == ["CG", "G0", "C", "e", "d"]
    _, individual = scan_atom_types(path, True)
    assert individual == types + ["e", "d"]


def test_scan_too_many_types(tmp_path):
    path = tmp_path / "many.pdbqt"
    path.write_text("".join(atom(i + 1, i, 0, 0, 0, f"X{i}") for i in range(15)))
    with pytest.raises(LigandError):
        scan_atom_types(path, False)


def test_scan_missing_file(tmp_path):
    with pytest.raises(LigandError):
        scan_atom_types(tmp_path / "absent.pdbqt", False)


def test_read_ligand_atoms(simple_path):
    types, _ = scan_atom_types(simple_path, False)
    ligand = read_ligand(simple_path, types)
    assert ligand.num_of_atoms == 4
    assert [ligand.atom_types[t] for t in ligand.type_ids] == ["C", "OA", "C", "HD"]
    assert ligand.coords[1] == pytest.approx([1.2, 0.0, 0.0])
    assert ligand.charges == pytest.approx([0.1, -0.2, 0.05, 0.15])


def test_read_ligand_torsion_tree(simple_path):
    types, _ = scan_atom_types(simple_path, False)
    ligand = read_ligand(simple_path, types)
    assert ligand.rotbonds == [(1, 2)]
    assert ligand.rigid_structures == [1, 1, 2, 2]
    assert ligand.atom_rotbonds == [[False], [False], [True], [True]]


def test_read_ligand_nested_branches_follow_endbranch_order(tmp_path):
    path = tmp_path / "nested.pdbqt"
    path.write_text(NESTED)
    types, _ = scan_atom_types(path, False)
    ligand = read_ligand(path, types)
    assert ligand.rotbonds == [(2, 3), (1, 2)]
    assert ligand.rigid_structures == [1, 1, 2, 3]
    assert ligand.atom_rotbonds == [
        [False, False],
        [False, False],
        [False, True],
        [True, True],
    ]


def test_hetatm_records_read_like_atoms(tmp_path):
    path = tmp_path / "het.pdbqt"
    path.write_text(atom(1, -1.5, 2.25, 3.0, -0.3, "OA", record="HETATM"))
    ligand = read_ligand(path, ["OA"])
    assert ligand.coords == [pytest.approx([-1.5, 2.25, 3.0])]
    assert ligand.charges == pytest.approx([-0.3])


def test_unknown_atom_type(simple_path):
    with pytest.raises(LigandError, match="OA"):
        read_ligand(simple_path, ["C", "HD"])


def test_too_many_atoms(tmp_path):
    path = tmp_path / "big.pdbqt"
    path.write_text("".join(atom(i + 1, 0, 0, 0, 0, "C") for i in range(257)))
    with pytest.raises(LigandError):
        read_ligand(path, ["C"])


def test_too_many_rotatable_bonds(tmp_path):
    path = tmp_path / "torsions.pdbqt"
    path.write_text(atom(1, 0, 0, 0, 0, "C") + "BRANCH 1 2\n" * 59)
    with pytest.raises(LigandError):
        read_ligand(path, ["C"])


def test_unbalanced_branches(tmp_path):
    path = tmp_path / "open.pdbqt"
    path.write_text(atom(1, 0, 0, 0, 0, "C") + "BRANCH 1 2\n" + atom(2, 1, 0, 0, 0, "C"))
    with pytest.raises(LigandError):
        read_ligand(path, ["C"])


def test_translate_by_centroid_offset_centres_ligand(simple_path):
    types, _ = scan_atom_types(simple_path, False)
    ligand = read_ligand(simple_path, types)
    ligand.translate(ligand.centroid_offset())
    assert ligand.centroid_offset() == pytest.approx((0.0, 0.0, 0.0), abs=1e-12)


def test_scale_and_copy_are_independent(simple_path):
    types, _ = scan_atom_types(simple_path, False)
    ligand = read_ligand(simple_path, types)
    original = ligand.copy()
    ligand.scale(2.0)
    for scaled, kept in zip(ligand.coords, original.coords):
        assert scaled == pytest.approx([2 * c for c in kept])
    assert original.coords[1] == pytest.approx([1.2, 0.0, 0.0])


def test_type_index_lookup():
    ligand = Ligand(atom_types=["C", "OA"])
    assert ligand.type_index("OA") == 1
    with pytest.raises(LigandError):
        ligand.type_index("N")


def test_centroid_of_empty_ligand():
    with pytest.raises(ValueError):
        Ligand().centroid_offset()