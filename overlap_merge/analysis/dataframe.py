"""
Dataframe creation and summaries for overlap_merge package.

This module tabulates merge results so they can be inspected or exported.
"""

import os

import pandas as pd

SUPERATOM_COLUMNS = ["molecule", "serial", "name", "type", "charge", "size", "x", "y", "z"]


def superatoms_dataframe(results, prefix="model"):
    """
    Create a dataframe with one row per output superatom.

    Parameters:
        results (list): MergeResult objects, one per molecule
        prefix (str): Molecule name prefix, as used for the MOL2 output

    Returns:
        pandas.DataFrame: Columns molecule, serial, name, type, charge, size, x, y, z
    """
    records = []
    for result in results:
        for serial, atom in enumerate(result.atoms, start=1):
            centroid = atom.centroid
            records.append({
                "molecule": f"{prefix}{result.molecule}",
                "serial": serial,
                "name": atom.key.split("_", 2)[-1],
                "type": atom.type,
                "charge": atom.charge,
                "size": atom.size,
                "x": centroid.x,
                "y": centroid.y,
                "z": centroid.z,
            })
    return pd.DataFrame(records, columns=SUPERATOM_COLUMNS)


def export_csv_data(df, filename):
    """
    Export data to a CSV file.

    Parameters:
        df (pandas.DataFrame): DataFrame to export
        filename (str): Output filename

    Returns:
        str: Path to the saved file
    """
    os.makedirs(os.path.dirname(filename) or '.', exist_ok=True)
    df.to_csv(filename, index=False)
    return filename


def merge_summary_stat(results, prefix="model"):
    """
    Generate a text summary of a merge run.

    Parameters:
        results (list): MergeResult objects, one per molecule
        prefix (str): Molecule name prefix

    Returns:
        str: A formatted multi-line summary
    """
    total_in = sum(result.input_count for result in results)
    total_out = sum(len(result.atoms) for result in results)
    total_merges = sum(result.merges for result in results)

    lines = [
        "Summary of Overlap Merging",
        "==========================",
        f"Molecules Processed: {len(results)}",
        f"Input Atoms: {total_in}",
        f"Output Superatoms: {total_out}",
        f"Merges: {total_merges}",
        "",
    ]
    for result in results:
        sizes = [atom.size for atom in result.atoms]
        largest = max(sizes) if sizes else 0
        lines.append(f"{prefix}{result.molecule}: {result.input_count} atoms -> "
                     f"{len(result.atoms)} superatoms, {result.merges} merges, largest cluster {largest}")
    return "\n".join(lines) + "\n"
