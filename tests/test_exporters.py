import pandas as pd
import pytest

from scdesim import DESim
from scdesim.cli import main
from scdesim.exporters import config_to_dict, write_outputs


def test_write_outputs(tmp_path, small_config):
    sim = DESim(small_config).simulate()
    paths = write_outputs(sim, tmp_path / "out")
    assert [p.name for p in paths] == ["counts.csv", "metadata.csv", "ground_truth.csv"]

    counts = pd.read_csv(paths[0], index_col=0)
    metadata = pd.read_csv(paths[1], index_col=0)
    truth = pd.read_csv(paths[2], index_col=0)
    assert counts.shape == sim.counts.shape
    assert metadata.index.tolist() == counts.columns.tolist()
    assert truth["is_diff"].sum() == small_config.n_diff_genes


def test_config_to_dict(small_config):
    params = config_to_dict(small_config)
    assert params["gene_list_path"] == ""
    assert params["samples"]["sample_4"] == {
        "sex": "male", "pathology": "disease", "cell_tag": "male_disease_",
    }


def test_to_anndata(small_config):
    pytest.importorskip("anndata")
    sim = DESim(small_config).simulate()
    adata = sim.to_anndata()
    assert adata.shape == (4 * small_config.n_cells, small_config.n_genes)
    assert adata.obs_names.tolist() == sim.counts.columns.tolist()
    assert adata.var["is_diff"].sum() == small_config.n_diff_genes
    assert adata.uns["scdesim_config"]["n_genes"] == small_config.n_genes


def test_cli_writes_outputs(tmp_path):
    outdir = tmp_path / "sim"
    code = main([
        "--n-cells", "8", "--n-genes", "30", "--n-diff-genes", "3",
        "--n-pseudobulks", "2", "--seed", "3", "--outdir", str(outdir),
    ])
    assert code == 0
    counts = pd.read_csv(outdir / "counts.csv", index_col=0)
    assert counts.shape == (30, 32)


def test_cli_defaults_follow_config():
    from scdesim import SimulationConfig
    from scdesim.cli import parse_args

    args = parse_args([])
    defaults = SimulationConfig()
    assert args.n_cells == defaults.n_cells
    assert args.n_pseudobulks == defaults.n_pseudobulks
    assert args.gene_list is None
    assert not args.h5ad
