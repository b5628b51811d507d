"""
Merge strategies for overlap_merge package.

Both strategies start from the same bins and end with the same size/charge
filter, so their results are directly comparable:

- ``GreedyMergeStrategy`` fuses nearest pairs in-process.
- ``GraphMergeStrategy`` hands a weighted edge list to a ``Clusterer`` and
  maps the returned groups back onto the atoms.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Dict, List

from .atoms import AtomRecord, Molecule
from .binning import bin_atoms
from .clusterer import Clusterer
from .graph import bins_to_edges, clusters_to_atoms
from .merge import merge_bins
from .settings import DEFAULT_N_JOBS, MergeSettings
from ..utils.logger import get_logger

logger = get_logger(__name__)

NO_MERGE_NOTE = "No atoms were merged due to overlap"


@dataclass
class MergeResult:
    """
    Outcome of merging one molecule.

    Attributes:
        atoms: Superatoms that survived filtering, in output order
        merges: Number of fusions performed
        input_count: Number of binned atoms before merging
        molecule: Index of the molecule
    """
    atoms: List[AtomRecord] = field(default_factory=list)
    merges: int = 0
    input_count: int = 0
    molecule: int = 0

    @property
    def note(self):
        """Informational note for the output, or None."""
        return NO_MERGE_NOTE if self.merges == 0 else None


class MergeStrategy(ABC):
    """Turns the bins of one molecule into filtered superatoms."""

    def __init__(self, settings: MergeSettings):
        self.settings = settings

    @abstractmethod
    def merge(self, bins: Dict[int, List[AtomRecord]]) -> MergeResult:
        pass


class GreedyMergeStrategy(MergeStrategy):
    """Iterative nearest-pair fusion within each bin."""

    def __init__(self, settings: MergeSettings, n_jobs: int = DEFAULT_N_JOBS):
        super().__init__(settings)
        self.n_jobs = n_jobs

    def merge(self, bins):
        input_count = sum(len(atoms) for atoms in bins.values())
        atoms, merges = merge_bins(bins, self.settings, n_jobs=self.n_jobs)
        return MergeResult(atoms=atoms, merges=merges, input_count=input_count)


class GraphMergeStrategy(MergeStrategy):
    """Delegated clustering through a graph clustering tool."""

    def __init__(self, settings: MergeSettings, clusterer: Clusterer):
        super().__init__(settings)
        self.clusterer = clusterer

    def merge(self, bins):
        input_count = sum(len(atoms) for atoms in bins.values())
        edges = bins_to_edges(bins, self.settings)
        if edges:
            groups = self.clusterer.cluster(edges)
        else:
            logger.debug("No atom pairs within cutoff; clustering tool not invoked")
            groups = []
        atoms, merges = clusters_to_atoms(groups, bins, self.settings)
        return MergeResult(atoms=atoms, merges=merges, input_count=input_count)


def process_molecule(molecule: Molecule, index: int, settings: MergeSettings,
                     strategy: MergeStrategy) -> MergeResult:
    """
    Bin and merge one molecule.

    Parameters:
        molecule (Molecule): Parsed molecule
        index (int): Position of the molecule in its file
        settings (MergeSettings): Run settings
        strategy (MergeStrategy): How to merge

    Returns:
        MergeResult: Surviving superatoms and merge statistics
    """
    bins = bin_atoms(molecule.atoms, settings, molecule=index)
    result = strategy.merge(bins)
    result.molecule = index
    logger.debug(f"Molecule {index}: {result.input_count} atoms -> {len(result.atoms)} superatoms "
                 f"({result.merges} merges)")
    if result.merges == 0:
        logger.info(f"Note: {NO_MERGE_NOTE}")
    return result
