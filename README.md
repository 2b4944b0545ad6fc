# ligdock

A pure-Python library for molecular docking work: reading receptor grid maps
and PDBQT ligands, finding bonds and force-field parameters of a ligand,
placing it according to a genotype, scoring poses, and refining genotypes with
a Solis-Wets local search. It has no dependencies beyond the standard library.

## Modules

- `ligdock.grid` – `read_fld` reads a `*.maps.fld` file into a `GridInfo`
  (size, spacing, origin, receptor name, directory of the map files);
  `read_maps` reads one `<receptor>.<type>.map` file per grid type into a
  `GridMaps`, whose `value(type_id, z, y, x)` returns a grid point value.
  Problems are raised as `GridError`.
- `ligdock.ligand` – `scan_atom_types(path, cgmaps)` returns the ligand's atom
  types and the grid types they need (ending with `e` and `d`);
  `read_ligand(path, atom_types)` returns a `Ligand` with coordinates,
  charges, rigid structures and the torsion tree. `Ligand` also offers
  `type_index`, `centroid_offset`, `translate`, `scale` and `copy`.
  Problems are raised as `LigandError`.
- `ligdock.bonds` – `find_bonds(ligand)` returns the bond matrix (1 covalent,
  2 virtual CG–CG bond, 0 none; water atoms never bond); `bond_name_index`
  classifies an atom type.
- `ligdock.forcefield` – `is_h_bond`, `vdw_table_index` and
  `compute_vdw_parameters(atom_types, coeff_vdw, coeff_hb)`, which returns a
  `VdwParameters` with the 12-6 and 12-10 coefficients, volumes and
  solvation parameters.
- `ligdock.conformation` – `rotbond_vectors(ligand)` returns the moving and
  unit vectors of the rotatable bonds; `change_conformation(ligand, genotype,
  ref_ori_angles)` returns a repositioned copy; `rmsd(reference, ligand,
  handle_symmetry)` compares two poses.
- `ligdock.intermolecular` – `inter_energy` and `inter_energy_per_atom` score
  a ligand whose coordinates are in grid units by trilinear interpolation
  (`trilinear_interpolate`), with a penalty for atoms outside the grid.
- `ligdock.intramolecular` – `IntraTables.build`, `distance_tables`,
  `charge_tables`, `ddd_mehler_solmajer`, `intra_energy` and
  `reference_energies` (intra- and intermolecular energy of a ligand in real
  coordinates).
- `ligdock.local_search` – `solis_wets` refines one genotype given an energy
  function; `run_local_search` applies it across a population;
  `select_entity` and `normalize_angles` are the helpers it uses. Settings go
  in `SolisWetsSettings`; results come back as `LocalSearchResult`.
- `ligdock.rng` – `Lcg` with `gcc_lcg` and `msvc_lcg` constants,
  `random_unit` and `random_below`.
- `ligdock.geometry` – vector, quaternion rotation, trilinear weight and
  case-insensitive string helpers.
- `ligdock.constants` – limits and atom-type indices, and the `BondType` enum.

## Installation

```
pip install .
```

For the tests:

```
pip install ".[test]"
pytest
```

## Example

```python
from ligdock.bonds import find_bonds
from ligdock.conformation import rotbond_vectors
from ligdock.forcefield import compute_vdw_parameters
from ligdock.grid import read_fld, read_maps
from ligdock.intermolecular import inter_energy
from ligdock.ligand import read_ligand, scan_atom_types

grid = read_fld("receptor.maps.fld")
atom_types, grid_types = scan_atom_types("ligand.pdbqt", False)
maps = read_maps(grid, grid_types, False)

ligand = read_ligand("ligand.pdbqt", atom_types)
ligand.bonds = find_bonds(ligand)
ligand.vdw = compute_vdw_parameters(ligand.atom_types, 0.1662, 0.1209)
moving, units = rotbond_vectors(ligand)
ligand.rotbond_moving_vectors = moving
ligand.rotbond_unit_vectors = units

in_grid = ligand.copy()
in_grid.translate([-c for c in grid.origo_real_xyz])
in_grid.scale(1.0 / grid.spacing)
print(inter_energy(grid, maps, in_grid))
```

The force-field weights above are only sample values; supply your own.

## What the package does not do

- It does not work out which atom pairs take part in the intramolecular
  energy. `intra_energy` and `reference_energies` read
  `Ligand.intra_contributors`, a square matrix of booleans that you must fill
  in yourself before calling them.
- There is no single call that reads and fully prepares a ligand; the steps
  are combined by hand as in the example.
- It does not write ligands back to PDBQT or any other file format.
- It has no command-line program, and no genetic algorithm or docking driver
  around the local search.