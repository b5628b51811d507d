"""
Graph clustering back ends for overlap_merge package.

A clusterer takes the complete ABC edge list of one molecule and returns the
complete grouping of node keys. The call is synchronous: nothing is streamed
and a failure leaves no partial result.
"""

import subprocess
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

import networkx as nx

from .graph import Edge, edges_to_graph, format_abc, parse_cluster_output
from .settings import MCL_EXECUTABLE, MCL_TIMEOUT
from ..utils.exceptions import ClusteringToolError
from ..utils.logger import get_logger

logger = get_logger(__name__)


class Clusterer(ABC):
    """Port to a graph clustering tool."""

    @abstractmethod
    def cluster(self, edges: Sequence[Edge]) -> List[List[str]]:
        """
        Cluster a weighted graph.

        Args:
            edges: Undirected weighted edges, larger weight meaning closer

        Returns:
            Groups of node keys, acceptor first
        """
        pass


class MclClusterer(Clusterer):
    """Runs the Markov Cluster Algorithm command line tool ``mcl``."""

    def __init__(self, executable: str = MCL_EXECUTABLE, inflation: Optional[float] = None,
                 threads: Optional[int] = None, timeout: Optional[float] = MCL_TIMEOUT):
        self.executable = executable
        self.inflation = inflation
        self.threads = threads
        self.timeout = timeout

    def command(self) -> List[str]:
        """Command line: read ABC from stdin, write clusters to stdout."""
        cmd = [self.executable, "-", "--abc", "-V", "all"]
        if self.inflation is not None:
            cmd += ["-I", f"{self.inflation:g}"]
        if self.threads is not None:
            cmd += ["--te", str(self.threads)]
        cmd += ["-o", "-"]
        return cmd

    def cluster(self, edges: Sequence[Edge]) -> List[List[str]]:
        cmd = self.command()
        logger.debug(f"Running {' '.join(cmd)} on {len(edges)} edges")
        try:
            result = subprocess.run(
                cmd,
                input=format_abc(edges),
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except OSError as e:
            raise ClusteringToolError(f"Failed to start {self.executable}: {e}") from e
        except subprocess.TimeoutExpired as e:
            raise ClusteringToolError(f"{self.executable} did not finish within {self.timeout} seconds") from e

        if result.returncode != 0:
            message = result.stderr.strip().splitlines()[-1:] if result.stderr else []
            raise ClusteringToolError(
                f"{self.executable} exited with code {result.returncode}"
                + (f": {message[0]}" if message else "")
            )
        return parse_cluster_output(result.stdout)


class ComponentClusterer(Clusterer):
    """
    In-process clustering with networkx: every connected component of the
    edge graph is one group. The member with the largest total edge weight
    leads its group.
    """

    def cluster(self, edges: Sequence[Edge]) -> List[List[str]]:
        G = edges_to_graph(edges)
        strength = dict(G.degree(weight="weight"))
        groups = []
        for component in nx.connected_components(G):
            members = sorted(component, key=lambda key: (-strength[key], key))
            groups.append(members)
        groups.sort(key=lambda members: (-len(members), members[0]))
        return groups


class StaticClusterer(Clusterer):
    """
    Returns preset groups and remembers the edges it was given. Stands in
    for a real tool where none should run.
    """

    def __init__(self, groups: Optional[Sequence[Sequence[str]]] = None):
        self.groups = [list(group) for group in (groups or [])]
        self.calls: List[List[Edge]] = []

    def cluster(self, edges: Sequence[Edge]) -> List[List[str]]:
        self.calls.append(list(edges))
        return [list(group) for group in self.groups]
