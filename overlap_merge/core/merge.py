"""
Greedy overlap merging for overlap_merge package.

Within one bin the nearest mergeable pair is fused repeatedly until no pair
lies within its cutoff. The surviving superatoms are then filtered by size,
with a separate minimum for charged superatoms.
"""

import math
from typing import Dict, List, Sequence, Tuple

import numpy as np

from .atoms import AtomRecord
from .cutoffs import resolve_cutoff
from .distance import UNREACHABLE, apply_penalties, same_type
from .settings import MergeSettings
from ..utils.logger import get_logger

logger = get_logger(__name__)


def pair_distance_matrix(atoms: Sequence[AtomRecord], settings: MergeSettings) -> np.ndarray:
    """
    Selection distances of all unordered pairs.

    Only the upper triangle is filled; the diagonal, the lower triangle and
    pairs that fail the same-type test hold ``UNREACHABLE``.

    Parameters:
        atoms (sequence): Records of one bin
        settings (MergeSettings): Run settings

    Returns:
        numpy.ndarray: Square matrix of selection distances
    """
    n_atoms = len(atoms)
    distances = np.full((n_atoms, n_atoms), UNREACHABLE)
    centroids = [atom.centroid for atom in atoms]
    for row in range(n_atoms - 1):
        for col in range(row + 1, n_atoms):
            if not same_type(atoms[row], atoms[col], settings.categories,
                             settings.similar, settings.charge_difference):
                continue
            base = (centroids[row] - centroids[col]).norm()
            distances[row, col] = apply_penalties(base, atoms[row], atoms[col])
    return distances


def merge_bin(atoms: Sequence[AtomRecord], settings: MergeSettings) -> Tuple[List[AtomRecord], int]:
    """
    Fuse the atoms of one bin, nearest pair first.

    Each round picks the pair with the smallest selection distance (the first
    one found on ties), resolves its cutoff and stops if the distance is not
    strictly below it. Otherwise the lower-index record (acceptor) absorbs the
    higher-index one (donor), which leaves the bin. Records are modified in
    place.

    Parameters:
        atoms (sequence): Records of one bin
        settings (MergeSettings): Run settings

    Returns:
        tuple: (surviving records in bin order, number of merges performed)
    """
    atoms = list(atoms)
    merges = 0
    default = settings.default_cutoff
    while len(atoms) > 1:
        distances = pair_distance_matrix(atoms, settings)
        row, col = (int(i) for i in np.unravel_index(int(np.argmin(distances)), distances.shape))
        best = float(distances[row, col])
        if math.isinf(best):
            break
        limit = resolve_cutoff(atoms[row], atoms[col], settings.cutoffs, default)
        if not best < limit:
            break
        atoms[row].absorb(atoms[col])
        del atoms[col]
        merges += 1
    return atoms, merges


def keep_cluster(size: int, charge: float, settings: MergeSettings) -> bool:
    """
    Decide whether a superatom of ``size`` contributors survives filtering.

    Neutral superatoms (``|charge| <= nib_threshold``) need at least
    ``cluster_min`` contributors, charged ones at least ``min_charged``.
    """
    if abs(charge) <= settings.nib_threshold:
        return size >= settings.cluster_min
    return size >= settings.min_charged


def filter_clusters(atoms: Sequence[AtomRecord], settings: MergeSettings) -> List[AtomRecord]:
    """Drop superatoms that are too small for their charge class."""
    return [atom for atom in atoms if keep_cluster(atom.size, atom.charge, settings)]


def merge_and_filter_bin(atoms: Sequence[AtomRecord], settings: MergeSettings) -> Tuple[List[AtomRecord], int]:
    merged, merges = merge_bin(atoms, settings)
    return filter_clusters(merged, settings), merges


def merge_bins(bins: Dict[int, List[AtomRecord]], settings: MergeSettings,
               n_jobs: int = 1) -> Tuple[List[AtomRecord], int]:
    """
    Merge and filter every bin of one molecule.

    Bins are independent, so with ``n_jobs`` other than 1 they are processed
    in parallel with joblib. Results are gathered in category order either way.

    Parameters:
        bins (dict): Category id -> records
        settings (MergeSettings): Run settings
        n_jobs (int): Number of parallel jobs

    Returns:
        tuple: (surviving records of all bins, total number of merges)
    """
    groups = list(bins.values())
    if n_jobs != 1 and len(groups) > 1:
        from joblib import Parallel, delayed
        logger.debug(f"Merging {len(groups)} bins with {n_jobs} workers")
        results = Parallel(n_jobs=n_jobs)(
            delayed(merge_and_filter_bin)(group, settings) for group in groups
        )
    else:
        results = [merge_and_filter_bin(group, settings) for group in groups]

    atoms: List[AtomRecord] = []
    merges = 0
    for survivors, count in results:
        atoms.extend(survivors)
        merges += count
    return atoms, merges
