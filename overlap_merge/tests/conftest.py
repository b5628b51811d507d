"""
Configuration for pytest fixtures.

This module contains fixtures and utilities for testing the overlap_merge package.
"""

import math
import os
import pytest

from overlap_merge.core.atoms import AtomRecord
from overlap_merge.core.geometry import Point
from overlap_merge.core.settings import MergeSettings
from overlap_merge.core.tables import TypeCategoryTable, CutoffTable

# Define directories
TEST_DIR = os.path.dirname(os.path.abspath(__file__))
DATA_DIR = os.path.join(TEST_DIR, 'data')


def _make_atom(key, positions, atom_type="C.3", charge=0.0):
    """Build an AtomRecord from plain coordinate tuples."""
    return AtomRecord(
        serial=key,
        key=key,
        positions=[Point(*p) for p in positions],
        type=atom_type,
        charge=charge,
    )


def _make_row(serial, name, x, y, z, atom_type, charge=0.0):
    """Build a nine-field MOL2 atom row."""
    return [str(serial), name, f"{x:.4f}", f"{y:.4f}", f"{z:.4f}", atom_type, "1", "LIG", f"{charge:.3f}"]


@pytest.fixture
def settings():
    """
    Settings with an empty category table, so every atom lands in category 0.
    
    Returns:
        MergeSettings: Default run settings
    """
    return MergeSettings(cutoff=1.1, categories=TypeCategoryTable(), cutoffs=CutoffTable())


@pytest.fixture
def categories():
    """A small category table with carbon, nitrogen and oxygen classes."""
    return TypeCategoryTable({
        "C.3": 1, "C.2": 1, "C.ar": 1,
        "N.3": 2, "N.ar": 2,
        "O.3": 3, "O.2": 3,
    })


@pytest.fixture
def triangle_positions():
    """
    Three points with pairwise distances 0.3 (A-B), 0.3 (A-C) and 0.55 (B-C).
    
    Returns:
        list: Coordinate tuples for A, B and C
    """
    x = -0.1225 / 0.6
    y = math.sqrt(0.09 - x * x)
    return [(0.0, 0.0, 0.0), (0.3, 0.0, 0.0), (x, y, 0.0)]


@pytest.fixture
def triangle_atoms(triangle_positions):
    """Three single C.3 atoms forming the 0.3/0.3/0.55 triangle."""
    return [_make_atom(f"0_{i}_C{i + 1}", [p]) for i, p in enumerate(triangle_positions)]


@pytest.fixture
def mol2_text():
    """
    A two-molecule MOL2 text. The first molecule has two overlapping carbons,
    an oxygen and a nitrogen; the second molecule has a single atom.
    """
    return """# generated for tests
@<TRIPOS>MOLECULE
ligand
 4 1
SMALL
USER_CHARGES

@<TRIPOS>ATOM
      1 C1      0.0000    0.0000    0.0000 C.3       1 LIG       0.000
      2 C2      0.5000    0.0000    0.0000 C.3       1 LIG       0.000
      3 O1      3.0000    0.0000    0.0000 O.3       1 LIG      -0.100
      4 N1      6.0000    0.0000    0.0000 N.3       1 LIG       0.100  # trailing comment
@<TRIPOS>BOND
     1     1     2    1
@<TRIPOS>MOLECULE
single
 1
SMALL
USER_CHARGES
@<TRIPOS>ATOM
      1 S1      1.0000    1.0000    1.0000 S.3       1 LIG       0.000
"""


@pytest.fixture
def mol2_file(tmp_path, mol2_text):
    """The MOL2 text written to a temporary file."""
    path = tmp_path / "model.mol2"
    path.write_text(mol2_text)
    return str(path)


@pytest.fixture
def make_atom():
    """Factory for AtomRecord objects."""
    return _make_atom


@pytest.fixture
def make_row():
    """Factory for MOL2 atom rows."""
    return _make_row


@pytest.fixture
def benzene_pair_file():
    """Two copies of a benzene ring, 0.2 apart along z."""
    return os.path.join(DATA_DIR, 'benzene_pair.mol2')
