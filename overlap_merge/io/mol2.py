"""
Tripos MOL2 input and output for overlap_merge package.

The reader keeps atom rows as whitespace-split fields and bond and
substructure lines verbatim. The writer emits merged superatoms.
"""

import os
from collections import defaultdict
from datetime import datetime
from typing import Iterable, List, Optional, Sequence

from ..core.atoms import AtomRecord, Molecule
from ..utils.exceptions import MoleculeFormatError
from ..utils.logger import get_logger

logger = get_logger(__name__)

RTI = "@<TRIPOS>"


def _clean(line: str) -> str:
    """Drop a trailing comment and collapse whitespace."""
    return " ".join(line.split("#", 1)[0].split())


def parse_mol2(lines: Iterable[str]) -> List[Molecule]:
    """
    Parse MOL2 text into molecules.

    Only as many atom rows as the MOLECULE record declares are kept. Lines
    inside the MOLECULE record that start with ``#`` are not counted; other
    comments are stripped. DICT and SET records are skipped.

    Parameters:
        lines (iterable): Lines of MOL2 text

    Returns:
        list: Molecules that have at least one atom row
    """
    molecules: List[Molecule] = []
    current: Optional[Molecule] = None
    section = None
    header_line = 0
    declared = 0

    def flush():
        if current is not None and current.atoms:
            if len(current.atoms) != declared:
                logger.debug(f"Molecule '{current.name}' declares {declared} atoms, found {len(current.atoms)}")
            molecules.append(current)

    for raw in lines:
        text = _clean(raw)
        if text.startswith(RTI):
            record = text[len(RTI):].split(" ")[0]
            if record == "MOLECULE":
                flush()
                current = Molecule(name="")
                declared = 0
                header_line = 0
            elif current is None:
                current = Molecule(name="")
            section = record
            continue

        if section == "MOLECULE":
            if raw.lstrip().startswith("#"):
                continue
            if header_line == 0:
                current.name = text
            elif header_line == 1:
                try:
                    declared = int(text.split()[0])
                except (IndexError, ValueError) as e:
                    raise MoleculeFormatError(f"Invalid atom count line in molecule '{current.name}': {text!r}") from e
            header_line += 1
        elif not text:
            continue
        elif section == "ATOM":
            if len(current.atoms) < declared:
                current.atoms.append(text.split(" "))
        elif section == "BOND":
            current.bonds.append(text)
        elif section == "SUBSTRUCTURE":
            current.substructures.append(text)

    flush()
    return molecules


def read_mol2(filename: str) -> List[Molecule]:
    """
    Read molecules from a MOL2 file.

    Raises:
        FileNotFoundError: If the file does not exist
        MoleculeFormatError: If the file cannot be parsed
    """
    if not os.path.exists(filename):
        raise FileNotFoundError(f"File {filename} does not exist.")
    with open(filename, "r") as f:
        return parse_mol2(f)


def format_header(name: str, atom_count: int) -> str:
    """MOLECULE record followed by the ATOM record tag."""
    return (
        f"{RTI}MOLECULE\n"
        f" {name}\n"
        f" {atom_count}\n"
        " SMALL\n"
        " USER_CHARGES\n"
        "\n"
        f"{RTI}ATOM\n"
    )


def format_provenance(version: str, command: Sequence[str], note: Optional[str] = None,
                      created: Optional[datetime] = None) -> str:
    """Comment block describing how the output was made."""
    created = created or datetime.now()
    lines = [
        f"# Output from overlap {version}\n",
        f"# Created: {created.strftime('%a %b %d %H:%M:%S %Y')}\n",
        "# Command:" + "".join(f" {arg}" for arg in command) + "\n",
    ]
    if note:
        lines.append(f"#\n# Note: {note}\n")
    lines.append("\n")
    return "".join(lines)


def format_atoms(atoms: Sequence[AtomRecord]) -> str:
    """
    ATOM rows for superatoms, numbered from 1.

    Names are the element part of the type (text before the first ``.``)
    followed by a running count of that element.
    """
    counters = defaultdict(int)
    lines = []
    for serial, atom in enumerate(atoms, start=1):
        element = atom.type.split(".")[0]
        counters[element] += 1
        name = f"{element}{counters[element]}"
        c = atom.centroid
        lines.append(
            f"{serial:7d} {name:<7} {c.x:9.4f} {c.y:9.4f} {c.z:9.4f} "
            f"{atom.type:<9} 1 LIG     {atom.charge:9.3f}\n"
        )
    return "".join(lines)


def format_result(atoms: Sequence[AtomRecord], name: str, version: str, command: Sequence[str],
                  note: Optional[str] = None) -> str:
    """Complete MOL2 output for one merged molecule."""
    return (
        format_provenance(version, command, note)
        + format_header(name, len(atoms))
        + format_atoms(atoms)
        + "\n"
    )
