"""
Overlap Merge
=============

A package for removing overlapping atoms from small-molecule models.

Atoms that lie close together and are chemically compatible are fused into
superatoms, either by an in-process greedy nearest-pair merge or through an
external graph clustering tool such as MCL.
"""

__version__ = "0.1.0"

from .core.geometry import Point
from .core.atoms import AtomRecord, Molecule
from .core.tables import TypeCategoryTable, CutoffTable
from .core.settings import MergeSettings

from .core.binning import bin_atoms
from .core.distance import selection_distance, export_distance, same_type
from .core.cutoffs import resolve_cutoff
from .core.merge import merge_bin, merge_bins, filter_clusters

from .core.graph import bins_to_edges, clusters_to_atoms
from .core.clusterer import MclClusterer, ComponentClusterer, StaticClusterer
from .core.strategies import GreedyMergeStrategy, GraphMergeStrategy, process_molecule

from .io.mol2 import read_mol2, parse_mol2

from .analysis.dataframe import superatoms_dataframe

# Define what gets imported with "from overlap_merge import *"
__all__ = [
    # Data model
    'Point',
    'AtomRecord',
    'Molecule',
    'TypeCategoryTable',
    'CutoffTable',
    'MergeSettings',

    # Greedy merge
    'bin_atoms',
    'selection_distance',
    'export_distance',
    'same_type',
    'resolve_cutoff',
    'merge_bin',
    'merge_bins',
    'filter_clusters',

    # Graph pathway
    'bins_to_edges',
    'clusters_to_atoms',
    'MclClusterer',
    'ComponentClusterer',
    'StaticClusterer',

    # Strategies
    'GreedyMergeStrategy',
    'GraphMergeStrategy',
    'process_molecule',

    # I/O
    'read_mol2',
    'parse_mol2',
    'superatoms_dataframe'
]
