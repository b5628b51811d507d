"""
Distance model for overlap_merge package.

``selection_distance`` ranks candidate pairs for the greedy merge and carries
two tie-break penalties. ``export_distance`` feeds the graph pathway and has
neither; the two are expected to disagree on the same pair.
"""

import math

from .atoms import AtomRecord
from .tables import TypeCategoryTable

UNREACHABLE = math.inf

AROMATIC_TYPES = frozenset({"C.ar", "N.ar"})
# Typical aromatic ring bond length
AROMATIC_BOND_LENGTH = 1.38
AROMATIC_PENALTY = 4.0
MONATOMIC_FACTOR = 2.0


def same_type(lhs: AtomRecord, rhs: AtomRecord, categories: TypeCategoryTable,
              similar: bool = False, charge_difference: float = 0.2) -> bool:
    """
    Decide whether two records may be merged at all.
    
    The charges must lie within ``charge_difference`` of each other. The types
    must be identical, or, with ``similar``, both known to the category table
    and in the same category.
    """
    if abs(lhs.charge - rhs.charge) > charge_difference:
        return False
    if similar and lhs.type in categories and rhs.type in categories:
        return categories.category(lhs.type) == categories.category(rhs.type)
    return lhs.type == rhs.type


def euclidean_distance(lhs: AtomRecord, rhs: AtomRecord) -> float:
    return (lhs.centroid - rhs.centroid).norm()


def selection_distance(lhs: AtomRecord, rhs: AtomRecord) -> float:
    """
    Centroid distance with the greedy engine's penalties applied.
    
    Two single atoms count double, so grown clusters are completed before new
    ones are started. A pair involving an aromatic ring atom that lies further
    apart than a ring bond counts four times.
    """
    return apply_penalties(euclidean_distance(lhs, rhs), lhs, rhs)


def apply_penalties(base: float, lhs: AtomRecord, rhs: AtomRecord) -> float:
    """Apply the selection penalties to an already computed centroid distance."""
    dist = base
    if lhs.is_monatomic() and rhs.is_monatomic():
        dist *= MONATOMIC_FACTOR
    if (lhs.type in AROMATIC_TYPES or rhs.type in AROMATIC_TYPES) and base > AROMATIC_BOND_LENGTH:
        dist *= AROMATIC_PENALTY
    return dist


def export_distance(lhs: AtomRecord, rhs: AtomRecord) -> float:
    """Squared centroid distance, without penalties."""
    delta = lhs.centroid - rhs.centroid
    return delta.dot(delta)
