"""Grid maps, ligand structure, scoring and Solis-Wets local search for docking."""

__version__ = "0.1.0"