"""
Graph pathway for overlap_merge package.

Instead of merging in-process, the mergeable pairs of every bin can be written
out as a weighted edge list (ABC format: ``key key weight`` per line) for an
external graph clustering tool. The groups it returns are mapped back onto the
binned atoms with the same fusion and filter rules as the greedy engine.
"""

from typing import Dict, Iterable, List, Sequence, Tuple

import networkx as nx

from .atoms import AtomRecord
from .binning import parse_key
from .cutoffs import resolve_cutoff
from .distance import export_distance, same_type
from .merge import keep_cluster
from .settings import MergeSettings
from ..utils.exceptions import ClusterMappingError
from ..utils.logger import get_logger

logger = get_logger(__name__)

Edge = Tuple[str, str, float]


def bins_to_edges(bins: Dict[int, List[AtomRecord]], settings: MergeSettings) -> List[Edge]:
    """
    Weighted edges between mergeable atoms.

    For each same-type pair within a bin the weight is the squared cutoff of
    the pair minus the squared distance. Only positive weights become edges,
    so an edge means "closer than the cutoff" and a larger weight means closer.

    Parameters:
        bins (dict): Category id -> records
        settings (MergeSettings): Run settings

    Returns:
        list: (key, key, weight) tuples
    """
    default = settings.default_cutoff
    edges: List[Edge] = []
    for atoms in bins.values():
        for row in range(len(atoms) - 1):
            for col in range(row + 1, len(atoms)):
                if not same_type(atoms[row], atoms[col], settings.categories,
                                 settings.similar, settings.charge_difference):
                    continue
                limit = resolve_cutoff(atoms[row], atoms[col], settings.cutoffs, default)
                weight = limit * limit - export_distance(atoms[row], atoms[col])
                if weight > 0:
                    edges.append((atoms[row].key, atoms[col].key, weight))
    return edges


def format_abc(edges: Iterable[Edge]) -> str:
    """Render edges as ABC text, one ``key key weight`` line each."""
    return "".join(f"{lhs} {rhs} {weight:g}\n" for lhs, rhs, weight in edges)


def edges_to_graph(edges: Iterable[Edge]) -> nx.Graph:
    """Build an undirected weighted graph from ABC edges."""
    G = nx.Graph()
    for lhs, rhs, weight in edges:
        G.add_edge(lhs, rhs, weight=weight)
    return G


def parse_cluster_output(text: str) -> List[List[str]]:
    """
    Read clustering output: one group per line, keys separated by tabs.
    The first key of a group is its acceptor.
    """
    groups = []
    for line in text.splitlines():
        keys = [word for word in line.split("\t") if word.strip()]
        if keys:
            groups.append([key.strip() for key in keys])
    return groups


def _lookup(bins: Dict[int, List[AtomRecord]], key: str) -> Tuple[Tuple[int, int], AtomRecord]:
    try:
        category, index = parse_key(key)
        return (category, index), bins[category][index]
    except (ValueError, IndexError, KeyError) as e:
        raise ClusterMappingError(f"Clustering output refers to unknown atom '{key}'") from e


def clusters_to_atoms(groups: Sequence[Sequence[str]], bins: Dict[int, List[AtomRecord]],
                      settings: MergeSettings) -> Tuple[List[AtomRecord], int]:
    """
    Fuse the binned atoms according to clustering output.

    Every group collapses onto its first member, which keeps the most extreme
    charge of the group. Groups are filtered by member count like the greedy
    engine's superatoms. A key already placed in an earlier group is
    reported and skipped. Atoms not named by any group are emitted on their own
    afterwards, filtered as single-member clusters. Records are modified in
    place.

    Parameters:
        groups (sequence): Groups of identity keys
        bins (dict): Category id -> records the keys refer to
        settings (MergeSettings): Run settings

    Returns:
        tuple: (resulting records, number of merges performed)
    """
    used = set()
    atoms: List[AtomRecord] = []
    merges = 0
    for group in groups:
        members = []
        for key in group:
            ident, atom = _lookup(bins, key)
            if ident in used:
                logger.warning(f"Atom '{key}' appears in more than one cluster; keeping its first cluster")
                continue
            used.add(ident)
            members.append(atom)
        if not members:
            continue
        acceptor = members[0]
        for donor in members[1:]:
            acceptor.absorb(donor)
            merges += 1
        if keep_cluster(len(members), acceptor.charge, settings):
            atoms.append(acceptor)

    # Groups need not cover singletons; flush the atoms never mentioned
    for category, records in bins.items():
        for index, atom in enumerate(records):
            if (category, index) in used:
                continue
            if keep_cluster(1, atom.charge, settings):
                atoms.append(atom)
    return atoms, merges


def cluster_types(groups: Sequence[Sequence[str]], bins: Dict[int, List[AtomRecord]]) -> str:
    """Report the atom types of each group, one line per group."""
    lines = []
    for group in groups:
        types = [_lookup(bins, key)[1].type for key in group]
        lines.append("".join(f"{atom_type:<6}" for atom_type in types))
    return "".join(line + "\n" for line in lines)
