"""
Binning of raw atom rows for overlap_merge package.

Atoms are grouped by type category before merging; merges never cross bins.
"""

from typing import Dict, List, Sequence

from .atoms import AtomRecord
from .geometry import Point
from .settings import MergeSettings
from ..utils.exceptions import MoleculeFormatError
from ..utils.logger import get_logger

logger = get_logger(__name__)

ROW_FIELDS = 9

# Types assigned by NIB reclassification
NIB_NEGATIVE_TYPE = "O.3"
NIB_POSITIVE_TYPE = "N.3"
NIB_NEUTRAL_TYPE = "C.3"
AROMATIC_CARBON_TYPE = "C.ar"


def nib_reclassify(atom_type: str, charge: float, threshold: float, flatten_neutral: bool = True):
    """
    Relabel an atom by its charge in the manner of negative image based models.
    
    Parameters:
        atom_type (str): Original type
        charge (float): Atom charge
        threshold (float): Charge magnitude that separates charged from neutral
        flatten_neutral (bool): Zero the charge of neutral atoms
        
    Returns:
        tuple: (type, charge) after reclassification
    """
    if charge < -threshold:
        return NIB_NEGATIVE_TYPE, charge
    if charge > threshold:
        return NIB_POSITIVE_TYPE, charge
    if flatten_neutral:
        charge = 0.0
    if atom_type != AROMATIC_CARBON_TYPE:
        atom_type = NIB_NEUTRAL_TYPE
    return atom_type, charge


def bin_atoms(rows: Sequence[Sequence[str]], settings: MergeSettings, molecule: int = 0) -> Dict[int, List[AtomRecord]]:
    """
    Turn raw atom rows into per-category working sets.
    
    Each row holds serial, name, x, y, z, type, two substructure fields and
    the charge. Rows with any other field count are skipped. Atoms whose
    final type is in the delete set are discarded.
    
    Parameters:
        rows (sequence): Atom rows, each a sequence of nine strings
        settings (MergeSettings): Run settings
        molecule (int): Index of the molecule the rows belong to
        
    Returns:
        dict: Category id -> list of AtomRecord, categories in ascending order
    """
    bins: Dict[int, List[AtomRecord]] = {}
    for row in rows:
        if len(row) != ROW_FIELDS:
            logger.debug(f"Skipping atom row with {len(row)} fields: {' '.join(row)}")
            continue
        atom_type = row[5]
        try:
            charge = float(row[8])
            position = Point(float(row[2]), float(row[3]), float(row[4]))
        except ValueError as e:
            raise MoleculeFormatError(f"Invalid number in atom row {row[0]}: {e}") from e
        if settings.use_nib:
            atom_type, charge = nib_reclassify(atom_type, charge, settings.nib_threshold,
                                               settings.nib_flatten_neutral)

        if atom_type in settings.delete_types:
            continue

        category = settings.categories.category(atom_type)
        members = bins.setdefault(category, [])
        members.append(AtomRecord(
            serial=row[0],
            key=f"{category}_{len(members)}_{row[1]}",
            positions=[position],
            type=atom_type,
            charge=charge,
            molecule=molecule,
        ))
    return dict(sorted(bins.items()))


def parse_key(key: str):
    """
    Split an identity key into its category and index within the category.
    
    Returns:
        tuple: (category, index)
    """
    parts = key.split("_")
    return int(parts[0]), int(parts[1])
