"""
Run settings for overlap_merge package.

Defaults are read from the packaged ``system_config.yaml``; if it cannot be
loaded the hard-coded fallbacks below apply.
"""

from dataclasses import dataclass, field, replace
from typing import FrozenSet, Optional

import yaml

from .tables import CutoffTable, TypeCategoryTable
from ..utils.config_utils import load_config
from ..utils.exceptions import InvalidInputError

# Load configuration
try:
    config = load_config()
    DEFAULT_CUTOFF = config['merging']['default_cutoff']
    DEFAULT_CHARGE_DIFFERENCE = config['merging']['charge_difference']
    DEFAULT_SIMILAR = config['merging']['similar_types']
    DEFAULT_CLUSTER_MIN = config['merging']['cluster_min']
    DEFAULT_N_JOBS = config['merging'].get('n_jobs', 1)
    DEFAULT_USE_NIB = config['nib']['enabled']
    DEFAULT_NIB_THRESHOLD = config['nib']['threshold']
    DEFAULT_NIB_FLATTEN_NEUTRAL = config['nib']['flatten_neutral']
    DEFAULT_PREFIX = config['output']['prefix']
    MCL_EXECUTABLE = config['mcl']['executable']
    MCL_TIMEOUT = config['mcl'].get('timeout')
    ATOMTYPES_FILE = config['tables']['atomtypes']
    CUTOFFS_FILE = config['tables']['cutoffs']
except (KeyError, TypeError, FileNotFoundError, yaml.YAMLError):
    # Fallback to default values if config loading fails
    DEFAULT_CUTOFF = 1.1  # Merge radius in Angstrom
    DEFAULT_CHARGE_DIFFERENCE = 0.2
    DEFAULT_SIMILAR = False
    DEFAULT_CLUSTER_MIN = 1
    DEFAULT_N_JOBS = 1
    DEFAULT_USE_NIB = False
    DEFAULT_NIB_THRESHOLD = 0.2
    DEFAULT_NIB_FLATTEN_NEUTRAL = True
    DEFAULT_PREFIX = "model"
    MCL_EXECUTABLE = "mcl"
    MCL_TIMEOUT = None
    ATOMTYPES_FILE = "atomtypes.json"
    CUTOFFS_FILE = "cutoffs.json"


@dataclass(frozen=True)
class MergeSettings:
    """
    Everything that controls one run. Built once and shared read-only by
    binning, merging, graph export and import.
    
    Attributes:
        cutoff: Default merge radius, used when no table entry applies
        categories: Type category table
        cutoffs: Per-type cutoff table; its ``*`` entry replaces ``cutoff``
        similar: Merge types of the same category, not only identical types
        charge_difference: Largest charge difference allowed within a merge
        use_nib: Reclassify types by charge before binning
        nib_threshold: Charge magnitude above which an atom counts as charged
        nib_flatten_neutral: Zero the charge of neutral atoms under NIB
        delete_types: Types that are discarded entirely
        cluster_min: Smallest cluster kept for neutral superatoms
        cluster_min_charged: Smallest cluster kept for charged superatoms,
            ``None`` means ``cluster_min``
        prefix: Output molecule name prefix
    """
    cutoff: float = DEFAULT_CUTOFF
    categories: TypeCategoryTable = field(default_factory=TypeCategoryTable)
    cutoffs: CutoffTable = field(default_factory=CutoffTable)
    similar: bool = DEFAULT_SIMILAR
    charge_difference: float = DEFAULT_CHARGE_DIFFERENCE
    use_nib: bool = DEFAULT_USE_NIB
    nib_threshold: float = DEFAULT_NIB_THRESHOLD
    nib_flatten_neutral: bool = DEFAULT_NIB_FLATTEN_NEUTRAL
    delete_types: FrozenSet[str] = frozenset()
    cluster_min: int = DEFAULT_CLUSTER_MIN
    cluster_min_charged: Optional[int] = None
    prefix: str = DEFAULT_PREFIX

    def __post_init__(self):
        if self.cutoff <= 0:
            raise InvalidInputError(f"Cutoff must be positive, got {self.cutoff}")
        if self.charge_difference < 0:
            raise InvalidInputError(f"Charge difference must not be negative, got {self.charge_difference}")

    @property
    def default_cutoff(self) -> float:
        """The run's default radius: the wildcard table entry if present."""
        wildcard = self.cutoffs.wildcard
        return self.cutoff if wildcard is None else wildcard

    @property
    def min_charged(self) -> int:
        if self.cluster_min_charged is None:
            return self.cluster_min
        return self.cluster_min_charged

    def with_options(self, **changes) -> "MergeSettings":
        return replace(self, **changes)


def parse_delete_types(text: Optional[str]) -> FrozenSet[str]:
    """Split a comma separated type list, ignoring empty items."""
    if not text:
        return frozenset()
    return frozenset(item.strip() for item in text.split(",") if item.strip())
