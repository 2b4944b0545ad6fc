"""Detecting covalent bonds of a ligand from interatomic distances."""

from __future__ import annotations

from ligdock.constants import BondType
from ligdock.geometry import distance, prefix_equals_ignore_case
from ligdock.ligand import Ligand, LigandError

# Names recognised when detecting bonds, with their bond-index class.
# A name whose second letter is "x" or "0" matches every type beginning
# with its first letter.
_BOND_NAMES: tuple[tuple[str, BondType], ...] = (
    ("C", BondType.C),
    ("A", BondType.C),
    ("Hx", BondType.H),
    ("Nx", BondType.N),
    ("Ox", BondType.O),
    ("F", BondType.XX),
    ("MG", BondType.XX),
    ("P", BondType.P),
    ("Sx", BondType.S),
    ("CL", BondType.XX),
    ("CA", BondType.XX),
    ("MN", BondType.XX),
    ("FE", BondType.XX),
    ("ZN", BondType.XX),
    ("BR", BondType.XX),
    ("I", BondType.XX),
    ("CG", BondType.C),
    ("G0", BondType.C),
    ("W", BondType.O),  # waters never bond; the class is irrelevant
    ("CX", BondType.C),
)

_CG_NAME_INDEX = 16
_W_NAME_INDEX = 18

# Minimum and maximum bond lengths (A) between bond-index classes.
_LIMITS: dict[tuple[BondType, BondType], tuple[float, float]] = {
    (BondType.C, BondType.C): (1.20, 1.545),
    (BondType.C, BondType.N): (1.1, 1.479),
    (BondType.C, BondType.O): (1.15, 1.47),
    (BondType.C, BondType.H): (1.022, 1.12),
    (BondType.C, BondType.XX): (0.9, 1.545),
    (BondType.C, BondType.P): (1.85, 1.89),
    (BondType.C, BondType.S): (1.55, 1.835),
    (BondType.N, BondType.N): (1.0974, 1.128),
    (BondType.N, BondType.O): (1.0619, 1.25),
    (BondType.N, BondType.H): (1.004, 1.041),
    (BondType.N, BondType.XX): (0.9, 1.041),
    (BondType.N, BondType.P): (1.4910, 1.4910),
    (BondType.N, BondType.S): (1.58, 1.672),
    (BondType.O, BondType.O): (1.208, 1.51),
    (BondType.O, BondType.H): (0.955, 1.0289),
    (BondType.O, BondType.XX): (0.955, 2.1),
    (BondType.O, BondType.P): (1.36, 1.67),
    (BondType.O, BondType.S): (1.41, 1.47),
    (BondType.H, BondType.H): (100.0, -100.0),  # never bonded
    (BondType.H, BondType.XX): (0.9, 1.5),
    (BondType.H, BondType.P): (1.40, 1.44),
    (BondType.H, BondType.S): (1.325, 1.3455),
    (BondType.XX, BondType.XX): (0.9, 2.1),
    (BondType.XX, BondType.P): (0.9, 2.1),
    (BondType.XX, BondType.S): (1.325, 2.1),
    (BondType.P, BondType.P): (2.18, 2.23),
    (BondType.P, BondType.S): (1.83, 1.88),
    (BondType.S, BondType.S): (2.03, 2.05),
}


def _limits(type1: BondType, type2: BondType) -> tuple[float, float]:
    return _LIMITS.get((type1, type2)) or _LIMITS[(type2, type1)]


def bond_name_index(type_name: str) -> int:
    """Index of ``type_name`` in the bond-detection name table."""
    found: int | None = None
    if type_name:
        first = type_name[0].upper()
        for index, (name, _) in enumerate(_BOND_NAMES):
            if len(name) > 1 and name[1] in ("x", "0"):
                if name[0] == first:
                    found = index
            elif prefix_equals_ignore_case(name, type_name, 2):
                found = index
    if found is None:
        raise LigandError(f"ligand includes atom with unknown type: {type_name}")
    return found


def find_bonds(ligand: Ligand) -> list[list[int]]:
    """Bond matrix of the ligand's atoms.

    An entry is 1 for a covalent bond (and for an atom with itself), 2 for
    the virtual bond between two CG atoms with the same number, and 0
    otherwise.  Water (W) atoms are never bonded.
    """
    type_names = [ligand.atom_types[type_id] for type_id in ligand.type_ids]
    name_ids = [bond_name_index(name) for name in type_names]
    n = ligand.num_of_atoms
    bonds = [[0] * n for _ in range(n)]

    for i in range(n):
        for j in range(i, n):
            name1, name2 = name_ids[i], name_ids[j]
            if name1 == _W_NAME_INDEX or name2 == _W_NAME_INDEX:
                kind = 0
            else:
                low, high = _limits(_BOND_NAMES[name1][1], _BOND_NAMES[name2][1])
                dist = distance(ligand.coords[i], ligand.coords[j])
                if i == j or low <= dist <= high:
                    kind = 1
                elif (
                    name1 == _CG_NAME_INDEX
                    and name2 == _CG_NAME_INDEX
                    and type_names[i][2:] == type_names[j][2:]
                ):
                    kind = 2
                else:
                    kind = 0
            bonds[i][j] = kind
            bonds[j][i] = kind
    return bonds