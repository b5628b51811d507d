"""
Read-only lookup tables that drive binning and cutoff resolution.

The tables copy their input and expose no way to change it afterwards.
"""

from typing import Dict, List, Mapping, Optional

from ..utils.config_utils import load_json_table
from ..utils.exceptions import ConfigurationError
from ..utils.logger import get_logger

logger = get_logger(__name__)

WILDCARD = "*"


class TypeCategoryTable:
    """
    Maps atom type labels to integer categories. Types in the same category
    are "similar". Unknown types fall into category 0.
    """

    def __init__(self, categories: Optional[Mapping[str, int]] = None):
        try:
            self._categories = {str(k): int(v) for k, v in (categories or {}).items()}
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid atom type category table: {e}") from e

    def category(self, atom_type: str) -> int:
        return self._categories.get(atom_type, 0)

    def __contains__(self, atom_type) -> bool:
        return atom_type in self._categories

    def __len__(self) -> int:
        return len(self._categories)

    def as_dict(self) -> Dict[str, int]:
        return dict(self._categories)

    def types_by_category(self) -> Dict[int, List[str]]:
        """Group the known types under their category, both sorted."""
        groups: Dict[int, List[str]] = {}
        for atom_type in sorted(self._categories):
            groups.setdefault(self._categories[atom_type], []).append(atom_type)
        return dict(sorted(groups.items()))


class CutoffTable:
    """Maps atom type labels (and the ``*`` wildcard) to merge radii."""

    def __init__(self, cutoffs: Optional[Mapping[str, float]] = None):
        try:
            self._cutoffs = {str(k): float(v) for k, v in (cutoffs or {}).items()}
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid cutoff table: {e}") from e

    def get(self, atom_type: str) -> Optional[float]:
        return self._cutoffs.get(atom_type)

    def __contains__(self, atom_type) -> bool:
        return atom_type in self._cutoffs

    def __len__(self) -> int:
        return len(self._cutoffs)

    @property
    def wildcard(self) -> Optional[float]:
        return self._cutoffs.get(WILDCARD)

    def as_dict(self) -> Dict[str, float]:
        return dict(self._cutoffs)

    def filled(self, default: float, types) -> Dict[str, float]:
        """
        The table with the wildcard and every type in ``types`` present,
        missing entries taking ``default``.
        """
        table = dict(self._cutoffs)
        table.setdefault(WILDCARD, default)
        for atom_type in types:
            table.setdefault(atom_type, default)
        return dict(sorted(table.items()))


def _valid_entries(data: Mapping, convert, what: str) -> Dict[str, object]:
    """Convert table values, reporting and dropping the ones that do not convert."""
    entries = {}
    for key, value in data.items():
        try:
            entries[str(key)] = convert(value)
        except (TypeError, ValueError):
            logger.error(f"JSON state: ignoring {what} entry {key!r}: {value!r} is not a number")
    return entries


def load_category_table(userdata: Optional[str] = None, filename: str = "atomtypes.json") -> TypeCategoryTable:
    """
    Load the type category table. User data, when it parses, replaces the
    packaged defaults. Entries whose category is not an integer are reported
    and left out.
    """
    data = load_json_table(filename, userdata, replace_defaults=True)
    return TypeCategoryTable(_valid_entries(data, int, "atom type category"))


def load_cutoff_table(userdata: Optional[str] = None, filename: str = "cutoffs.json") -> CutoffTable:
    """
    Load the cutoff table. User entries are laid over the packaged defaults.
    Entries whose cutoff is not a number are reported and left out.
    """
    data = load_json_table(filename, userdata)
    return CutoffTable(_valid_entries(data, float, "cutoff"))
