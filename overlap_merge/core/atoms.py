"""
Atom and molecule records for overlap_merge package.

An ``AtomRecord`` is a working copy of one input atom. Merging appends the
positions of absorbed atoms to it, so a record with several positions is a
superatom whose location is the mean of those positions.
"""

from dataclasses import dataclass, field
from typing import List

from .geometry import Point, mean_point


@dataclass
class AtomRecord:
    """
    One atom, or a superatom built from several atoms.
    
    Attributes:
        serial: Serial of the source row
        key: Identity key, ``<category>_<index>_<name>`` once binned
        positions: Contributed positions, never empty
        type: Atom type label (e.g. ``C.ar``)
        charge: Charge with the largest magnitude seen among the contributors
        molecule: Index of the source molecule
    """
    serial: str
    key: str
    positions: List[Point]
    type: str
    charge: float = 0.0
    molecule: int = 0

    @property
    def centroid(self) -> Point:
        return mean_point(self.positions)

    @property
    def size(self) -> int:
        return len(self.positions)

    def is_monatomic(self) -> bool:
        return len(self.positions) == 1

    def absorb(self, other: "AtomRecord") -> None:
        """Take over the positions of ``other`` and keep the more extreme charge."""
        self.positions.extend(other.positions)
        if abs(self.charge) < abs(other.charge):
            self.charge = other.charge


@dataclass
class Molecule:
    """A molecule as read from the exchange format. Bonds and substructures are opaque."""
    name: str
    atoms: List[List[str]] = field(default_factory=list)
    bonds: List[str] = field(default_factory=list)
    substructures: List[str] = field(default_factory=list)
