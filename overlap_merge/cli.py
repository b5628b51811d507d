"""
Command-line interface for overlap_merge package.

This module provides a Typer-based CLI that removes overlapping atoms from a
MOL2 model, either with the built-in greedy merge or through a graph
clustering tool such as MCL.
"""
import os
import sys
import json
from typing import List, Optional

import typer
from rich.console import Console

from . import __version__
from .core.atoms import Molecule
from .core.binning import bin_atoms
from .core.clusterer import ComponentClusterer, MclClusterer
from .core.graph import bins_to_edges, cluster_types, clusters_to_atoms, format_abc, parse_cluster_output
from .core.settings import (
    ATOMTYPES_FILE,
    CUTOFFS_FILE,
    DEFAULT_CHARGE_DIFFERENCE,
    DEFAULT_CLUSTER_MIN,
    DEFAULT_CUTOFF,
    DEFAULT_N_JOBS,
    DEFAULT_NIB_FLATTEN_NEUTRAL,
    DEFAULT_NIB_THRESHOLD,
    DEFAULT_PREFIX,
    DEFAULT_SIMILAR,
    DEFAULT_USE_NIB,
    MCL_EXECUTABLE,
    MergeSettings,
    parse_delete_types,
)
from .core.strategies import (
    NO_MERGE_NOTE,
    GraphMergeStrategy,
    GreedyMergeStrategy,
    MergeResult,
    process_molecule,
)
from .core.tables import load_category_table, load_cutoff_table
from .io.mol2 import format_result, read_mol2
from .analysis.dataframe import export_csv_data, merge_summary_stat, superatoms_dataframe
from .utils.exceptions import OverlapMergeError
from .utils.logger import get_logger, setup_logging

logger = get_logger(__name__)

ENGINES = ("greedy", "mcl", "networkx")

# Create Typer app
app = typer.Typer(help="Remove overlapping atoms from a model by merging them into superatoms.")

# stdout carries MOL2 / ABC output, so messages go to stderr
console = Console(stderr=True)


def validate_input_file(file_path: str) -> bool:
    """
    Validate input file existence.

    Raises:
        FileNotFoundError: If file doesn't exist
    """
    if not os.path.exists(file_path):
        raise FileNotFoundError(f"File {file_path} does not exist.")
    return True


def load_molecules(model: str) -> List[Molecule]:
    validate_input_file(model)
    molecules = read_mol2(model)
    if not molecules:
        logger.warning(f"No molecules with atoms found in {model}")
    return molecules


class _Output:
    """Writes to a file when a path is given, otherwise to stdout."""

    def __init__(self, path: Optional[str]):
        self.path = path
        self._handle = None

    def __enter__(self):
        if self.path:
            os.makedirs(os.path.dirname(self.path) or '.', exist_ok=True)
            self._handle = open(self.path, "w")
        return self

    def write(self, text: str) -> None:
        if self._handle is not None:
            self._handle.write(text)
        else:
            sys.stdout.write(text)
            sys.stdout.flush()

    def __exit__(self, *exc):
        if self._handle is not None:
            self._handle.close()
        return False


def _settings(ctx: typer.Context) -> MergeSettings:
    return ctx.obj["settings"]


@app.callback()
def main_callback(
    ctx: typer.Context,
    cutoff: float = typer.Option(DEFAULT_CUTOFF, "--cutoff", "-c", help="Default merge radius; a '*' entry in the cutoff table overrides it"),
    cutoffs: Optional[str] = typer.Option(None, "--cutoffs", help="JSON cutoffs per atom type (file or inline JSON), laid over the packaged defaults"),
    similar: bool = typer.Option(DEFAULT_SIMILAR, "--similar/--no-similar", "-s", help="Merge similar atom types, i.e. types in the same category"),
    similar_json: Optional[str] = typer.Option(None, "--similar-json", help="JSON atom type categories (file or inline JSON)"),
    chargediff: float = typer.Option(DEFAULT_CHARGE_DIFFERENCE, "--chargediff", help="Charges must be within this difference to merge"),
    delete_types: Optional[str] = typer.Option(None, "--delete-types", help="Comma-separated atom types to discard completely"),
    nib: bool = typer.Option(DEFAULT_USE_NIB, "--nib/--no-nib", help="Retype atoms by charge: positive N.3, negative O.3, neutral C.3/C.ar"),
    nib_threshold: float = typer.Option(DEFAULT_NIB_THRESHOLD, "--nib-threshold", help="Charge magnitude that separates charged from neutral atoms"),
    nib_charged: bool = typer.Option(not DEFAULT_NIB_FLATTEN_NEUTRAL, "--nib-charged/--nib-flatten", help="Keep the charges of neutral atoms with --nib"),
    clustermin: int = typer.Option(DEFAULT_CLUSTER_MIN, "--clustermin", help="Minimum cluster size to include"),
    clustermin_charged: Optional[int] = typer.Option(None, "--clustermin-charged", help="Minimum cluster size for charged superatoms (default: clustermin)"),
    prefix: str = typer.Option(DEFAULT_PREFIX, "--prefix", help="Prefix of the output molecule names"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Show detailed progress and debug information"),
    log_file: Optional[str] = typer.Option(None, "--log-file", help="Write a detailed log to this file"),
):
    """Shared merge options; they go before the command name."""
    setup_logging(verbose=verbose, log_file=log_file)
    try:
        settings = MergeSettings(
            cutoff=cutoff,
            categories=load_category_table(similar_json, ATOMTYPES_FILE),
            cutoffs=load_cutoff_table(cutoffs, CUTOFFS_FILE),
            similar=similar,
            charge_difference=chargediff,
            use_nib=nib,
            nib_threshold=nib_threshold,
            nib_flatten_neutral=not nib_charged,
            delete_types=parse_delete_types(delete_types),
            cluster_min=clustermin,
            cluster_min_charged=clustermin_charged,
            prefix=prefix,
        )
    except OverlapMergeError as e:
        console.print(f"[red]Error: {str(e)}[/red]")
        raise typer.Exit(code=1)
    ctx.obj = {"settings": settings}


@app.command("merge")
def merge_command(
    ctx: typer.Context,
    model: str = typer.Argument(..., help="MOL2 file"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output MOL2 file (default: stdout)"),
    engine: str = typer.Option("greedy", "--engine", "-e", help="Merge engine: greedy, mcl, or networkx"),
    mcl: bool = typer.Option(False, "--mcl", help="Shorthand for --engine mcl"),
    mcl_inflation: Optional[float] = typer.Option(None, "--mcl-inflation", "-I", help="MCL main inflation value"),
    mcl_threads: Optional[int] = typer.Option(None, "--mcl-threads", help="MCL expansion thread number"),
    mcl_executable: str = typer.Option(MCL_EXECUTABLE, "--mcl-executable", help="Path to the mcl program"),
    n_jobs: int = typer.Option(DEFAULT_N_JOBS, "--n-jobs", "-j", help="Parallel jobs for greedy merging of bins"),
    csv: Optional[str] = typer.Option(None, "--csv", help="Also write a CSV table of the superatoms"),
    summary: bool = typer.Option(False, "--summary", help="Print a summary of the run"),
):
    """Merge overlapping atoms and write the superatoms as MOL2."""
    settings = _settings(ctx)
    if mcl:
        engine = "mcl"
    if engine not in ENGINES:
        console.print(f"[red]Error: Unknown engine '{engine}'. Choose from: {', '.join(ENGINES)}[/red]")
        raise typer.Exit(code=1)

    if engine == "greedy":
        strategy = GreedyMergeStrategy(settings, n_jobs=n_jobs)
    elif engine == "mcl":
        strategy = GraphMergeStrategy(settings, MclClusterer(mcl_executable, mcl_inflation, mcl_threads))
    else:
        strategy = GraphMergeStrategy(settings, ComponentClusterer())

    results: List[MergeResult] = []
    try:
        molecules = load_molecules(model)
        with _Output(output) as out:
            for index, molecule in enumerate(molecules):
                result = process_molecule(molecule, index, settings, strategy)
                results.append(result)
                out.write(format_result(result.atoms, f"{settings.prefix}{index}", __version__,
                                        sys.argv, result.note))
    except (OverlapMergeError, OSError) as e:
        console.print(f"[red]Error: {str(e)}[/red]")
        raise typer.Exit(code=1)

    if csv:
        export_csv_data(superatoms_dataframe(results, settings.prefix), csv)
        console.print(f"Saved superatom table to {csv}")
    if summary:
        console.print(merge_summary_stat(results, settings.prefix))


@app.command("abc")
def abc_command(
    ctx: typer.Context,
    model: str = typer.Argument(..., help="MOL2 file"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output ABC file (default: stdout)"),
):
    """Write the weighted ABC edge list for a graph clustering tool."""
    settings = _settings(ctx)
    try:
        molecules = load_molecules(model)
        with _Output(output) as out:
            for index, molecule in enumerate(molecules):
                bins = bin_atoms(molecule.atoms, settings, molecule=index)
                out.write(format_abc(bins_to_edges(bins, settings)))
    except (OverlapMergeError, OSError) as e:
        console.print(f"[red]Error: {str(e)}[/red]")
        raise typer.Exit(code=1)


@app.command("map-clusters")
def map_clusters_command(
    ctx: typer.Context,
    model: str = typer.Argument(..., help="MOL2 file"),
    clusters: str = typer.Argument(..., help="Clustering output (e.g. from mcl) for this model"),
    types: bool = typer.Option(False, "--types", help="Show the atom types of each cluster instead of merging"),
    output: Optional[str] = typer.Option(None, "--output", "-o", help="Output file (default: stdout)"),
):
    """Map clustering output back onto the atoms of the model."""
    settings = _settings(ctx)
    try:
        molecules = load_molecules(model)
        validate_input_file(clusters)
        with open(clusters, "r") as f:
            groups = parse_cluster_output(f.read())
        with _Output(output) as out:
            for index, molecule in enumerate(molecules):
                bins = bin_atoms(molecule.atoms, settings, molecule=index)
                if types:
                    out.write(cluster_types(groups, bins))
                    continue
                atoms, merges = clusters_to_atoms(groups, bins, settings)
                if merges == 0:
                    logger.info(f"Note: {NO_MERGE_NOTE}")
                out.write(format_result(atoms, f"{settings.prefix}{index}", __version__, sys.argv,
                                        NO_MERGE_NOTE if merges == 0 else None))
    except (OverlapMergeError, OSError) as e:
        console.print(f"[red]Error: {str(e)}[/red]")
        raise typer.Exit(code=1)


@app.command("show-cutoffs")
def show_cutoffs_command(ctx: typer.Context):
    """Show the effective cutoffs per atom type as JSON."""
    settings = _settings(ctx)
    table = settings.cutoffs.filled(settings.default_cutoff, settings.categories.as_dict())
    typer.echo(json.dumps(table, indent=4))


@app.command("show-similar")
def show_similar_command(ctx: typer.Context):
    """Show the atom type categories, as a listing and as JSON."""
    categories = _settings(ctx).categories
    rule = "#" * 30
    lines = [rule, "# Category: types", rule]
    for category, members in categories.types_by_category().items():
        lines.append(f"{category}:" + "".join(f" {t}" for t in members))
    lines += [rule, "# in JSON:", rule]
    typer.echo("\n".join(lines))
    typer.echo(json.dumps(dict(sorted(categories.as_dict().items())), indent=4))


@app.command("version")
def version():
    """Show the version of overlap_merge."""
    console.print(f"[bold green]overlap_merge version: {__version__}[/bold green]")


def main():
    """Main entry point for the command-line interface."""
    app()
