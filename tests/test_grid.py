import itertools
import os

import pytest

from ligdock.grid import GridError, read_fld, read_maps


def write_fld(directory, nelements=(1, 1, 1), spacing=0.375, center=(1.0, 2.0, 3.0)):
    path = directory / "rec.maps.fld"
    path.write_text(
        "# AVS field file\n"
        f"#SPACING {spacing}\n"
        f"#NELEMENTS {nelements[0]} {nelements[1]} {nelements[2]}\n"
        f"#CENTER {center[0]} {center[1]} {center[2]}\n"
        "#MACROMOLECULE rec.pdbqt\n"
        "#GRID_PARAMETER_FILE rec.gpf\n"
        "ndim=3\n"
    )
    return path


def write_maps(directory, grid, grid_types):
    sx, sy, sz = grid.size_xyz
    counter = itertools.count(1)
    expected = {}
    for t, gtype in enumerate(grid_types):
        lines = [
            "GRID_PARAMETER_FILE rec.gpf",
            "GRID_DATA_FILE rec.maps.fld",
            "MACROMOLECULE rec.pdbqt",
            f"SPACING {grid.spacing}",
            f"NELEMENTS {sx - 1} {sy - 1} {sz - 1}",
            "CENTER 1.0 2.0 3.0",
        ]
        for z in range(sz):
            for y in range(sy):
                for x in range(sx):
                    value = float(next(counter))
                    expected[(t, z, y, x)] = value
                    lines.append(f"{value:.3f}")
        (directory / f"rec.{gtype}.map").write_text("\n".join(lines) + "\n")
    return expected


def test_read_fld_basic_fields(tmp_path):
    grid = read_fld(write_fld(tmp_path, nelements=(2, 4, 6)))
    assert grid.receptor_name == "rec"
    assert grid.spacing == 0.375
    assert grid.size_xyz == (3, 5, 7)
    assert os.path.samefile(grid.grid_file_path, tmp_path)


def test_read_fld_origin_is_centered(tmp_path):
    center = (1.0, 2.0, 3.0)
    grid = read_fld(write_fld(tmp_path, nelements=(2, 4, 6), center=center))
    for origin, extent, c in zip(grid.origo_real_xyz, grid.size_xyz_angstr, center):
        assert origin + extent / 2 == pytest.approx(c)


def test_read_fld_extent_matches_points(tmp_path):
    grid = read_fld(write_fld(tmp_path, nelements=(2, 4, 6)))
    for size, extent in zip(grid.size_xyz, grid.size_xyz_angstr):
        assert extent == pytest.approx((size - 1) * grid.spacing)


def test_spacing_too_big(tmp_path):
    with pytest.raises(GridError):
        read_fld(write_fld(tmp_path, spacing=1.5))


def test_grid_too_large(tmp_path):
    with pytest.raises(GridError):
        read_fld(write_fld(tmp_path, nelements=(256, 2, 2)))


def test_missing_fld(tmp_path):
    with pytest.raises(GridError):
        read_fld(tmp_path / "absent.maps.fld")


def test_read_maps_values(tmp_path):
    grid = read_fld(write_fld(tmp_path))
    types = ["C", "e", "d"]
    expected = write_maps(tmp_path, grid, types)
    maps = read_maps(grid, types, False)
    assert maps.num_of_atypes == len(types) - 2
    for (t, z, y, x), value in expected.items():
        assert maps.value(t, z, y, x) == value


def test_read_maps_neighbour_slots(tmp_path):
    grid = read_fld(write_fld(tmp_path))
    types = ["C", "e", "d"]
    expected = write_maps(tmp_path, grid, types)
    maps = read_maps(grid, types, False)
    assert maps.data[:4] == [
        expected[(0, 0, 0, 0)],
        expected[(0, 0, 1, 0)],
        expected[(0, 1, 0, 0)],
        expected[(0, 1, 1, 0)],
    ]


def test_value_out_of_range(tmp_path):
    grid = read_fld(write_fld(tmp_path))
    types = ["C", "e", "d"]
    write_maps(tmp_path, grid, types)
    maps = read_maps(grid, types, False)
    with pytest.raises(IndexError):
        maps.value(0, 2, 0, 0)


def test_missing_map_file(tmp_path):
    grid = read_fld(write_fld(tmp_path))
    write_maps(tmp_path, grid, ["C", "e", "d"])
    with pytest.raises(GridError, match="G0"):
        read_maps(grid, ["C", "G0", "e", "d"], False)


def test_short_map_file(tmp_path):
    grid = read_fld(write_fld(tmp_path))
    (tmp_path / "rec.C.map").write_text("CENTER 1 2 3\n0.5\n0.25\n")
    with pytest.raises(GridError):
        read_maps(grid, ["C"], False)