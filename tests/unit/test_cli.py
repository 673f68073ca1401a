"""Tests for the command-line interface."""

import numpy as np
import pytest

from eegtrf.cli.main import build_parser, main
from eegtrf.cli.train import load_trials
from eegtrf.core.models import ModelType, TRFModel
from eegtrf.core.validation import InvalidArgument


@pytest.fixture
def data_files(tmp_path):
    """Write a stimulus and a response to disk."""
    rng = np.random.default_rng(5)
    stim = rng.standard_normal((200, 1))
    resp = np.zeros((200, 2))
    resp[3:, 0] = stim[:-3, 0]
    resp[:, 1] = rng.standard_normal(200)

    stim_path = tmp_path / "stim.npy"
    resp_path = tmp_path / "resp.npy"
    np.save(stim_path, stim)
    np.save(resp_path, resp)
    return stim_path, resp_path


def base_args(stim_path, resp_path, output):
    return [
        "train",
        "--stim", str(stim_path),
        "--resp", str(resp_path),
        "--fs", "100",
        "--dir", "1",
        "--tmin", "0",
        "--tmax", "50",
        "--lambda", "1",
        "--output", str(output),
    ]


class TestLoadTrials:
    """Tests for reading time series from disk."""

    def test_npy_is_single_trial(self, data_files):
        """Test .npy files load as one array."""
        stim = load_trials(data_files[0])
        assert isinstance(stim, np.ndarray)
        assert stim.shape == (200, 1)

    def test_npz_trials_sorted_by_key(self, tmp_path):
        """Test .npz files load one trial per array."""
        path = tmp_path / "trials.npz"
        np.savez(path, trial_b=np.ones((5, 2)), trial_a=np.zeros((3, 2)))
        trials = load_trials(path)
        assert [t.shape for t in trials] == [(3, 2), (5, 2)]

    def test_missing_and_unsupported(self, tmp_path):
        """Test missing files and unknown formats fail."""
        with pytest.raises(InvalidArgument):
            load_trials(tmp_path / "missing.npy")
        path = tmp_path / "data.csv"
        path.write_text("1,2\n")
        with pytest.raises(InvalidArgument):
            load_trials(path)


class TestMain:
    """Tests for the eegtrf entry point."""

    def test_train(self, data_files, tmp_path, capsys):
        """Test training from the command line."""
        output = tmp_path / "model.npz"
        assert main(base_args(*data_files, output)) == 0

        model = TRFModel.load(output)
        assert model.w.shape == (1, 6, 2)
        assert np.argmax(np.abs(model.w[0, :, 0])) == 3
        assert "Saved model" in capsys.readouterr().out

    def test_options_override_config(self, data_files, tmp_path):
        """Test YAML options with command-line overrides."""
        config = tmp_path / "train.yaml"
        config.write_text("method: Tikhonov\ntype: multi\nzeropad: true\n")
        output = tmp_path / "model.npz"

        args = base_args(*data_files, output) + [
            "--config", str(config), "--type", "sing", "--no-zeropad", "--n-jobs", "2",
        ]
        assert main(args) == 0
        assert TRFModel.load(output).type == ModelType.SINGLE

    def test_backward(self, data_files, tmp_path):
        """Test a backward model reverses the lags."""
        output = tmp_path / "decoder.npz"
        args = base_args(*data_files, output)
        args[args.index("--dir") + 1] = "-1"
        assert main(args) == 0
        np.testing.assert_allclose(TRFModel.load(output).t, np.arange(-5, 1) * 10.0)

    def test_invalid_arguments_exit_code(self, data_files, tmp_path, capsys):
        """Test training errors return a non-zero exit code."""
        output = tmp_path / "model.npz"
        args = base_args(*data_files, output)
        args[args.index("--fs") + 1] = "-1"

        assert main(args) == 1
        assert "FS" in capsys.readouterr().err
        assert not output.exists()

    def test_no_command(self, capsys):
        """Test running without a command prints help."""
        assert main([]) == 1
        assert "train" in capsys.readouterr().out

    def test_parser_defaults(self):
        """Test unset options are left to the configuration."""
        args = build_parser().parse_args(
            ["train", "--stim", "s.npy", "--resp", "r.npy", "--fs", "64", "--dir", "-1",
             "--tmin", "-100", "--tmax", "400", "--lambda", "0", "--output", "m.npz"]
        )
        assert args.dir == -1
        assert args.tmin == -100.0
        assert args.method is None
        assert args.zeropad is None
