"""Unit tests for the TRF pipeline module."""

import tempfile
from pathlib import Path

import mne
import numpy as np
import pytest

from eegtrf.core.models import TRFModel
from eegtrf.core.validation import InvalidArgument
from eegtrf.modules.trf import TRFModule
from eegtrf.pipeline.base import ModuleResult


@pytest.fixture
def stim_and_raw():
    """Create a stimulus envelope and raw EEG that follows it."""
    rng = np.random.default_rng(42)
    sfreq = 100
    n_samples = 1000
    n_channels = 4

    stim = rng.standard_normal(n_samples)
    data = 1e-6 * rng.standard_normal((n_channels, n_samples))
    # Channel 0 follows the stimulus by 5 samples (50 ms)
    data[0, 5:] += 1e-5 * stim[:-5]

    ch_names = [f"EEG{i:03d}" for i in range(n_channels)]
    info = mne.create_info(ch_names=ch_names, sfreq=sfreq, ch_types=["eeg"] * n_channels)
    raw = mne.io.RawArray(data, info, verbose=False)
    return stim, raw


@pytest.fixture
def output_dir():
    """Create temporary output directory."""
    with tempfile.TemporaryDirectory() as tmpdir:
        yield Path(tmpdir)


class TestTRFModule:
    """Tests for TRFModule class."""

    def test_init_validates_config(self, output_dir):
        """Test configuration is validated on construction."""
        module = TRFModule({"tmin": 0, "tmax": 100, "lambda": 10, "method": "Tik"}, output_dir)
        assert module.params.method.value == "Tikhonov"
        assert module.params.lam == 10.0

        with pytest.raises(InvalidArgument):
            TRFModule({"tmin": 0, "tmax": 100, "method": "lasso"}, output_dir)

    def test_validate_input(self, output_dir):
        """Test input must provide stim and resp."""
        module = TRFModule({"tmin": 0, "tmax": 100}, output_dir)
        assert module.validate_input({"stim": 1, "resp": 2})
        with pytest.raises(ValueError):
            module.validate_input(np.zeros(10))

    def test_process_raw(self, stim_and_raw, output_dir):
        """Test fitting against mne.io.Raw picks up the sample rate."""
        stim, raw = stim_and_raw
        module = TRFModule({"tmin": 0, "tmax": 100, "lambda": 0.1}, output_dir)

        result = module.process({"stim": stim, "resp": raw}, subject="sub-001")

        assert isinstance(result, ModuleResult)
        assert result.success, result.errors
        model = result.outputs["model"]
        assert model.fs == 100.0
        assert model.w.shape == (1, 11, 4)
        # Peak of channel 0 at 50 ms
        assert model.t[np.argmax(np.abs(model.w[0, :, 0]))] == pytest.approx(50.0)

        assert result.output_files == [output_dir / "sub-001_trf.npz"]
        loaded = TRFModel.load(result.output_files[0])
        np.testing.assert_allclose(loaded.w, model.w)
        assert result.metadata["n_lags"] == 11

    def test_process_backward_epochs(self, stim_and_raw, output_dir):
        """Test each epoch becomes a trial of a backward model."""
        stim, raw = stim_and_raw
        data = raw.get_data().reshape(4, 4, 250).transpose(1, 0, 2)
        epochs = mne.EpochsArray(data, raw.info, verbose=False)
        stim_trials = list(stim.reshape(4, 250))

        module = TRFModule(
            {"direction": -1, "tmin": 0, "tmax": 100, "lambda": 1e-9}, output_dir
        )
        result = module.process({"stim": stim_trials, "resp": epochs})

        assert result.success, result.errors
        model = result.outputs["model"]
        assert model.w.shape == (4, 11, 1)
        assert model.t[0] == pytest.approx(-100.0)
        assert result.output_files[0].name == "unknown_trf.npz"

    def test_arrays_require_fs(self, output_dir):
        """Test plain arrays fail without a configured sample rate."""
        module = TRFModule({"tmin": 0, "tmax": 100}, output_dir)
        result = module.process({"stim": np.random.randn(100), "resp": np.random.randn(100, 2)})

        assert not result.success
        assert "fs" in result.errors[0]

    def test_arrays_with_fs(self, output_dir):
        """Test plain arrays with a configured sample rate."""
        module = TRFModule({"fs": 50, "tmin": 0, "tmax": 100, "type": "single"}, output_dir)
        result = module.process({"stim": np.random.randn(100), "resp": np.random.randn(100, 2)})

        assert result.success, result.errors
        assert result.outputs["model"].type.value == "single"

    def test_fs_mismatch(self, stim_and_raw, output_dir):
        """Test a configured fs must agree with MNE data."""
        stim, raw = stim_and_raw
        module = TRFModule({"fs": 250, "tmin": 0, "tmax": 100}, output_dir)
        result = module.process({"stim": stim, "resp": raw})

        assert not result.success
        assert "does not match" in result.errors[0]

    def test_config_warnings_reported(self, output_dir):
        """Test likely unintended settings appear in the result warnings."""
        module = TRFModule(
            {"fs": 50, "tmin": 0, "tmax": 100, "method": "Tikhonov", "n_jobs": 4}, output_dir
        )
        result = module.process({"stim": np.random.randn(100, 3), "resp": np.random.randn(100, 2)})

        assert result.success, result.errors
        assert len(result.warnings) == 2
        assert any("leakage" in w for w in result.warnings)
        assert any("n_jobs=4" in w for w in result.warnings)

    def test_backward_warnings_use_response_channels(self, stim_and_raw, output_dir):
        """Test a decoder is checked against the response channel count."""
        stim, raw = stim_and_raw
        module = TRFModule(
            {"direction": -1, "tmin": 0, "tmax": 50, "method": "Tikhonov"}, output_dir
        )
        result = module.process({"stim": stim, "resp": raw})

        assert result.success, result.errors
        assert len(result.warnings) == 1
        assert "4 input features" in result.warnings[0]

        module = TRFModule({"tmin": 0, "tmax": 50, "method": "Tikhonov"}, output_dir)
        assert module.process({"stim": stim, "resp": raw}).warnings == []

    def test_shape_errors_reported(self, output_dir):
        """Test training errors are reported in the result."""
        module = TRFModule({"fs": 50, "tmin": 0, "tmax": 100}, output_dir)
        result = module.process({"stim": np.random.randn(100), "resp": np.random.randn(90, 2)})

        assert not result.success
        assert "observations" in result.errors[0]

    def test_output_spec(self, output_dir):
        """Test output specification."""
        module = TRFModule({"tmin": 0, "tmax": 100}, output_dir)
        assert "model" in module.get_output_spec()
