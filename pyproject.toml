[build-system]
requires = ["hatchling"]
build-backend = "hatchling.build"

[project]
name = "ligdock"
version = "0.1.0"
description = "Ligand reading, grid-based scoring and Solis-Wets local search for molecular docking"
requires-python = ">=3.10"
dependencies = []
keywords = ["docking", "ligand", "pdbqt", "grid maps", "solis-wets", "chemistry"]
classifiers = [
    "Development Status :: 3 - Alpha",
    "Intended Audience :: Science/Research",
    "Programming Language :: Python :: 3",
    "Programming Language :: Python :: 3 :: Only",
    "Programming Language :: Python :: 3.10",
    "Programming Language :: Python :: 3.11",
    "Programming Language :: Python :: 3.12",
    "Programming Language :: Python :: 3.13",
    "Operating System :: OS Independent",
    "Topic :: Scientific/Engineering :: Chemistry",
]

[project.optional-dependencies]
test = ["pytest"]

[tool.hatch.build.targets.wheel]
packages = ["ligdock"]

[tool.pytest.ini_options]
testpaths = ["tests"]
addopts = "-ra"
