"""Limits, atom-type indices and tuning constants shared across the package."""

from enum import IntEnum


class BondType(IntEnum):
    """Bond-index classes of atoms, as used by the bond-length tables."""

    C = 0
    N = 1
    O = 2  # noqa: E741
    H = 3
    XX = 4
    P = 5
    S = 6


NUM_ENUM_ATOMTYPES = len(BondType)

# Number of atom types in the van der Waals / solvation lookup tables:
# 22 initial types + CG + G0 (flexible rings) + W (waters) + CX + NX + OX.
ATYPE_NUM = 28

ATYPE_CG_IDX = 22
ATYPE_G0_IDX = 23
ATYPE_W_IDX = 24
ATYPE_CX_IDX = 25
ATYPE_NX_IDX = 26
ATYPE_OX_IDX = 27

# Number of names in the bond-detection type table.
ATYPE_GETBONDS = 20

MAX_NUM_OF_ATOMS = 256
MAX_NUM_OF_ATYPES = 14
MAX_NUM_OF_ROTBONDS = 58
MAX_INTRAE_CONTRIBUTORS = MAX_NUM_OF_ATOMS * MAX_NUM_OF_ATOMS
MAX_NUM_OF_ROTATIONS = MAX_NUM_OF_ATOMS * MAX_NUM_OF_ROTBONDS
MAX_POPSIZE = 2048
MAX_NUM_OF_RUNS = 1000
MAX_NUM_GRIDPOINTS = 256
MAX_NUM_OF_DOCKS = 1000

# Stride of one genotype in a flat population array; must exceed
# MAX_NUM_OF_ROTBONDS + 6.
GENOTYPE_LENGTH_IN_GLOBMEM = 64
ACTUAL_GENOTYPE_LENGTH = MAX_NUM_OF_ROTBONDS + 6

# Solis-Wets step-size expansion and contraction factors.
LS_EXP_FACTOR = 2.0
LS_CONT_FACTOR = 0.5

# Default number of cooperating workers per team.
NUM_OF_THREADS_PER_BLOCK = 16

# Resolution of axis correction.
NUM_AXIS_CORRECTION = 1000

# Coefficient of the linear CG-G0 pair energy term used for flexible rings.
G = 50