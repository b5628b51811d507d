"""
Merge radius resolution for overlap_merge package.
"""

from .atoms import AtomRecord
from .tables import CutoffTable


def resolve_cutoff(acceptor: AtomRecord, donor: AtomRecord, cutoffs: CutoffTable, default: float) -> float:
    """
    Merge radius for one candidate pair.
    
    An entry for the acceptor's type replaces the default outright, even when
    it is larger. An entry for the donor's type can then only narrow the limit.
    
    Parameters:
        acceptor (AtomRecord): Record that would be kept
        donor (AtomRecord): Record that would be absorbed
        cutoffs (CutoffTable): Per-type radii
        default (float): Radius used when the acceptor's type has no entry
        
    Returns:
        float: The radius; the pair merges only if its distance is strictly below it
    """
    limit = default
    acceptor_limit = cutoffs.get(acceptor.type)
    if acceptor_limit is not None:
        limit = acceptor_limit
    donor_limit = cutoffs.get(donor.type)
    if donor_limit is not None and donor_limit < limit:
        limit = donor_limit
    return limit
