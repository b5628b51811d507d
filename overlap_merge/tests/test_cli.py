"""
Tests for command-line interface of the overlap_merge package.
"""

import json
import os
from unittest.mock import MagicMock, patch

import pytest
from typer.testing import CliRunner

from overlap_merge.cli import app, validate_input_file
from overlap_merge.core.settings import (
    ATOMTYPES_FILE,
    CUTOFFS_FILE,
    DEFAULT_NIB_FLATTEN_NEUTRAL,
    DEFAULT_SIMILAR,
    DEFAULT_USE_NIB,
    MergeSettings,
)
from overlap_merge.core.tables import CutoffTable, TypeCategoryTable
from overlap_merge.io.mol2 import read_mol2

runner = CliRunner()


@pytest.fixture
def single_mol2(tmp_path, mol2_text):
    """Only the first molecule of the sample, for cluster mapping."""
    path = tmp_path / "single.mol2"
    path.write_text(mol2_text.split("@<TRIPOS>MOLECULE\nsingle")[0])
    return str(path)


@pytest.fixture
def clusters_file(tmp_path):
    path = tmp_path / "model.clusters"
    path.write_text("1_0_C1\t1_1_C2\n")
    return str(path)


class TestMergeCommand:
    """Test the merge command."""

    def test_merge(self, mol2_file):
        result = runner.invoke(app, ["merge", mol2_file])
        assert result.exit_code == 0
        assert " model0\n 3\n" in result.stdout
        assert " model1\n 1\n" in result.stdout
        assert "0.2500" in result.stdout
        assert "# Note: No atoms were merged due to overlap" in result.stdout

    def test_merge_output_file(self, mol2_file, tmp_path):
        output = str(tmp_path / "out" / "merged.mol2")
        result = runner.invoke(app, ["--prefix", "lig", "merge", mol2_file, "--output", output])
        assert result.exit_code == 0
        molecules = read_mol2(output)
        assert [m.name for m in molecules] == ["lig0", "lig1"]
        assert [len(m.atoms) for m in molecules] == [3, 1]

    def test_clustermin(self, mol2_file):
        result = runner.invoke(app, ["--clustermin", "2", "merge", mol2_file])
        assert result.exit_code == 0
        assert " model0\n 1\n" in result.stdout
        assert " model1\n 0\n" in result.stdout

    def test_delete_types(self, mol2_file):
        result = runner.invoke(app, ["--delete-types", "O.3,S.3", "merge", mol2_file])
        assert result.exit_code == 0
        assert " model0\n 2\n" in result.stdout
        assert " model1\n 0\n" in result.stdout

    def test_networkx_engine(self, mol2_file):
        result = runner.invoke(app, ["merge", mol2_file, "--engine", "networkx"])
        assert result.exit_code == 0
        assert " model0\n 3\n" in result.stdout

    @patch('overlap_merge.core.clusterer.subprocess.run')
    def test_mcl_engine(self, mock_run, mol2_file):
        mock_run.return_value = MagicMock(returncode=0, stdout="1_0_C1\t1_1_C2\n", stderr="")
        result = runner.invoke(app, ["merge", mol2_file, "--mcl", "-I", "2.5"])
        assert result.exit_code == 0
        # the second molecule has no edges, so mcl runs once
        assert mock_run.call_count == 1
        assert "-I" in mock_run.call_args[0][0]
        assert " model0\n 3\n" in result.stdout

    @patch('overlap_merge.core.clusterer.subprocess.run')
    def test_mcl_failure(self, mock_run, mol2_file):
        mock_run.side_effect = FileNotFoundError("mcl")
        result = runner.invoke(app, ["merge", mol2_file, "--engine", "mcl"])
        assert result.exit_code == 1

    def test_unknown_engine(self, mol2_file):
        result = runner.invoke(app, ["merge", mol2_file, "--engine", "kmeans"])
        assert result.exit_code == 1

    def test_missing_file(self, tmp_path):
        result = runner.invoke(app, ["merge", str(tmp_path / "missing.mol2")])
        assert result.exit_code == 1

    def test_non_numeric_cutoffs_ignored(self, mol2_file):
        for table in ('{"C.3": "near"}', '{"C.3": null}'):
            result = runner.invoke(app, ["--cutoffs", table, "merge", mol2_file])
            assert result.exit_code == 0
            assert " model0\n 3\n" in result.stdout

    def test_csv_and_summary(self, mol2_file, tmp_path):
        csv = str(tmp_path / "superatoms.csv")
        result = runner.invoke(app, ["merge", mol2_file, "--csv", csv, "--summary"])
        assert result.exit_code == 0
        assert os.path.exists(csv)
        with open(csv) as f:
            assert len(f.read().strip().splitlines()) == 5
        assert "Summary of Overlap Merging" in result.output


class TestGraphCommands:
    """Test the ABC export and cluster mapping commands."""

    def test_abc(self, mol2_file):
        result = runner.invoke(app, ["abc", mol2_file])
        assert result.exit_code == 0
        assert "1_0_C1 1_1_C2 0.96" in result.stdout

    def test_map_clusters(self, single_mol2, clusters_file):
        result = runner.invoke(app, ["map-clusters", single_mol2, clusters_file])
        assert result.exit_code == 0
        assert " model0\n 3\n" in result.stdout
        assert "0.2500" in result.stdout

    def test_map_clusters_types(self, single_mol2, clusters_file):
        result = runner.invoke(app, ["map-clusters", single_mol2, clusters_file, "--types"])
        assert result.exit_code == 0
        assert "C.3   C.3   \n" in result.stdout

    def test_map_clusters_unknown_key(self, single_mol2, tmp_path):
        clusters = tmp_path / "bad.clusters"
        clusters.write_text("7_0_X1\t7_1_X2\n")
        result = runner.invoke(app, ["map-clusters", single_mol2, str(clusters)])
        assert result.exit_code == 1


class TestTableCommands:
    """Test the table listing commands."""

    def test_show_cutoffs(self):
        result = runner.invoke(app, ["--cutoffs", '{"C.3": 0.9}', "show-cutoffs"])
        assert result.exit_code == 0
        table = json.loads(result.stdout)
        assert table["C.3"] == 0.9
        assert table["*"] == 1.1
        assert table["N.3"] == 1.1

    def test_show_cutoffs_wildcard(self):
        result = runner.invoke(app, ["--cutoffs", '{"*": 0.7}', "show-cutoffs"])
        table = json.loads(result.stdout)
        assert table["*"] == 0.7
        assert table["C.ar"] == 0.7

    def test_show_similar(self):
        result = runner.invoke(app, ["show-similar"])
        assert result.exit_code == 0
        assert "# Category: types" in result.stdout
        assert "1: C.1 C.2 C.3 C.ar C.cat" in result.stdout
        assert '"C.ar": 1' in result.stdout

    def test_show_similar_user_table(self):
        result = runner.invoke(app, ["--similar-json", '{"Du": 4}', "show-similar"])
        assert "4: Du" in result.stdout
        assert "C.3" not in result.stdout


def test_version():
    result = runner.invoke(app, ["version"])
    assert result.exit_code == 0
    assert "overlap_merge version" in result.output


def test_validate_input_file(tmp_path):
    path = tmp_path / "model.mol2"
    path.write_text("")
    assert validate_input_file(str(path))
    with pytest.raises(FileNotFoundError):
        validate_input_file(str(tmp_path / "missing.mol2"))


def test_negative_cutoff(mol2_file):
    result = runner.invoke(app, ["--cutoff", "-1", "merge", mol2_file])
    assert result.exit_code == 1


class TestSystemConfigDefaults:
    """Test that the YAML defaults reach the shared options."""

    @patch('overlap_merge.cli.MergeSettings', wraps=MergeSettings)
    def test_flag_defaults(self, mock_settings):
        result = runner.invoke(app, ["show-cutoffs"])
        assert result.exit_code == 0
        kwargs = mock_settings.call_args[1]
        assert kwargs["similar"] == DEFAULT_SIMILAR
        assert kwargs["use_nib"] == DEFAULT_USE_NIB
        assert kwargs["nib_flatten_neutral"] == DEFAULT_NIB_FLATTEN_NEUTRAL

    @patch('overlap_merge.cli.MergeSettings', wraps=MergeSettings)
    def test_flags_turn_off(self, mock_settings):
        result = runner.invoke(app, ["--no-nib", "--no-similar", "--nib-flatten", "show-cutoffs"])
        assert result.exit_code == 0
        kwargs = mock_settings.call_args[1]
        assert kwargs["use_nib"] is False
        assert kwargs["similar"] is False
        assert kwargs["nib_flatten_neutral"] is True

    @patch('overlap_merge.cli.load_cutoff_table', return_value=CutoffTable())
    @patch('overlap_merge.cli.load_category_table', return_value=TypeCategoryTable())
    def test_table_files(self, mock_categories, mock_cutoffs):
        result = runner.invoke(app, ["show-similar"])
        assert result.exit_code == 0
        assert mock_categories.call_args[0][1] == ATOMTYPES_FILE
        assert mock_cutoffs.call_args[0][1] == CUTOFFS_FILE
