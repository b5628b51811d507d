"""
Core functionality for overlap_merge package.

This module contains the binning, distance model, merge engines and the graph
clustering pathway.
"""

from .geometry import Point, mean_point
from .atoms import AtomRecord, Molecule
from .tables import TypeCategoryTable, CutoffTable, load_category_table, load_cutoff_table
from .settings import MergeSettings, parse_delete_types
from .binning import bin_atoms, nib_reclassify
from .distance import same_type, selection_distance, export_distance
from .cutoffs import resolve_cutoff
from .merge import merge_bin, merge_bins, filter_clusters, keep_cluster
from .graph import bins_to_edges, clusters_to_atoms, cluster_types, format_abc, parse_cluster_output
from .clusterer import Clusterer, MclClusterer, ComponentClusterer, StaticClusterer
from .strategies import MergeStrategy, GreedyMergeStrategy, GraphMergeStrategy, MergeResult, process_molecule

__all__ = [
    'Point',
    'mean_point',
    'AtomRecord',
    'Molecule',
    'TypeCategoryTable',
    'CutoffTable',
    'load_category_table',
    'load_cutoff_table',
    'MergeSettings',
    'parse_delete_types',
    'bin_atoms',
    'nib_reclassify',
    'same_type',
    'selection_distance',
    'export_distance',
    'resolve_cutoff',
    'merge_bin',
    'merge_bins',
    'filter_clusters',
    'keep_cluster',
    'bins_to_edges',
    'clusters_to_atoms',
    'cluster_types',
    'format_abc',
    'parse_cluster_output',
    'Clusterer',
    'MclClusterer',
    'ComponentClusterer',
    'StaticClusterer',
    'MergeStrategy',
    'GreedyMergeStrategy',
    'GraphMergeStrategy',
    'MergeResult',
    'process_molecule'
]
