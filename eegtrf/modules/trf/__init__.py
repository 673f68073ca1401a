"""TRF training module."""

import logging
import time
from pathlib import Path
from typing import Any, Dict, Optional, Tuple

import mne
import numpy as np

from eegtrf.core.config import TrainConfig, TRFModuleConfig
from eegtrf.core.validation import InvalidArgument, TRFError, check_train_config
from eegtrf.pipeline.base import BaseModule, ModuleResult
from eegtrf.trf.train import train


logger = logging.getLogger(__name__)


def _as_trials(data: Any, label: str) -> Tuple[Any, Optional[float]]:
    """
    Unpack MNE containers into per-trial arrays (observations x channels).

    Returns the data and the sample rate of MNE objects (None otherwise).
    """
    if isinstance(data, mne.io.BaseRaw):
        return data.get_data(picks="data").T, float(data.info["sfreq"])
    if isinstance(data, mne.BaseEpochs):
        epochs = data.get_data(picks="data")
        return [epoch.T for epoch in epochs], float(data.info["sfreq"])
    if isinstance(data, (np.ndarray, list, tuple)):
        return data, None
    raise InvalidArgument(
        f"{label} must be an array, a list of arrays, mne.io.Raw or mne.Epochs, got {type(data)}"
    )


class TRFModule(BaseModule):
    """
    Fit a temporal response function for one subject.

    Input is a mapping with ``stim`` and ``resp`` entries. Either may be
    an array (observations x variables), a list of per-trial arrays, an
    ``mne.io.Raw`` (data channels become variables) or ``mne.Epochs``
    (each epoch becomes a trial).
    """

    name = "trf"
    version = "0.1.0"
    description = "Temporal response function training"

    def __init__(self, config: Dict[str, Any], output_dir: Path):
        super().__init__(config, output_dir)
        self.params = TRFModuleConfig.from_options(**config)

    def validate_input(self, data: Any) -> bool:
        if not isinstance(data, dict) or "stim" not in data or "resp" not in data:
            raise ValueError(f"Expected dict with 'stim' and 'resp', got {type(data)}")
        return True

    def _resolve_fs(self, *rates: Optional[float]) -> float:
        """Pick the configured sample rate or the one carried by MNE inputs."""
        found = {rate for rate in rates if rate is not None}
        if len(found) > 1:
            raise InvalidArgument(f"STIM and RESP have different sample rates: {sorted(found)}")
        fs = self.params.fs
        if fs is None:
            if not found:
                raise InvalidArgument("fs must be configured when inputs are plain arrays")
            return found.pop()
        if found and not np.isclose(fs, next(iter(found))):
            raise InvalidArgument(
                f"Configured fs ({fs} Hz) does not match the data ({next(iter(found))} Hz)"
            )
        return fs

    def process(
        self,
        data: Dict[str, Any],
        subject: Optional[Any] = None,
        **kwargs,
    ) -> ModuleResult:
        """
        Train a TRF model and save it.

        Args:
            data: Dict with 'stim' and 'resp'
            subject: Subject info (object with ``id`` or a string)

        Returns:
            ModuleResult with the fitted model
        """
        start_time = time.time()
        output_files = []

        try:
            self.validate_input(data)
            stim, stim_fs = _as_trials(data["stim"], "stim")
            resp, resp_fs = _as_trials(data["resp"], "resp")
            fs = self._resolve_fs(stim_fs, resp_fs)

            config = TrainConfig(**self.params.train_options())
            model = train(
                stim,
                resp,
                fs,
                self.params.direction,
                self.params.tmin,
                self.params.tmax,
                self.params.lam,
                config=config,
            )
            warnings = check_train_config(config, model.n_inputs).warnings

            subject_id = getattr(subject, "id", subject) or "unknown"
            model_path = model.save(self.output_dir / f"{subject_id}_trf.npz")
            output_files.append(model_path)
            logger.info(f"Saved {model!r} to {model_path}")

            return ModuleResult(
                success=True,
                module_name=self.name,
                execution_time_seconds=time.time() - start_time,
                outputs={
                    "data": model,
                    "model": model,
                },
                output_files=output_files,
                warnings=warnings,
                metadata={
                    "fs": fs,
                    "direction": int(model.dir),
                    "type": model.type.value,
                    "method": self.params.method.value,
                    "lambda": self.params.lam,
                    "n_lags": model.n_lags,
                    "times_ms": model.t.tolist(),
                },
            )

        except (TRFError, ValueError) as e:
            return ModuleResult(
                success=False,
                module_name=self.name,
                execution_time_seconds=time.time() - start_time,
                errors=[str(e)],
            )

    def get_output_spec(self) -> Dict[str, str]:
        return {
            "model": "Fitted TRFModel",
        }
