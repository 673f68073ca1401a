"""
Data models for fitted temporal response functions.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum
from pathlib import Path
from typing import Union

import numpy as np


class Direction(IntEnum):
    """Direction of causality of a model."""

    FORWARD = 1  # stimulus -> response (encoding)
    BACKWARD = -1  # response -> stimulus (decoding)


class RegularizationMethod(str, Enum):
    """Regularization topology."""

    RIDGE = "ridge"
    TIKHONOV = "Tikhonov"
    OLS = "ols"


class ModelType(str, Enum):
    """Joint multi-lag model or independent single-lag models."""

    MULTI = "multi"
    SINGLE = "single"


@dataclass(frozen=True)
class TRFModel:
    """
    Fitted linear model relating lagged predictors to a target.

    Attributes
    ----------
    w : np.ndarray
        Normalized model weights (xvar, nlag, yvar)
    b : np.ndarray
        Normalized bias term (1, nlag, yvar). Multi-lag models have a single
        intercept, repeated along the lag axis.
    t : np.ndarray
        Time lags (ms)
    fs : float
        Sample rate (Hz)
    dir : Direction
        Direction of causality
    type : ModelType
        Multi-lag or single-lag model
    """

    w: np.ndarray
    b: np.ndarray
    t: np.ndarray
    fs: float
    dir: Direction
    type: ModelType

    def __post_init__(self):
        for name in ("w", "b", "t"):
            array = np.array(getattr(self, name), dtype=float)
            array.setflags(write=False)
            object.__setattr__(self, name, array)
        object.__setattr__(self, "fs", float(self.fs))
        object.__setattr__(self, "dir", Direction(int(self.dir)))
        object.__setattr__(self, "type", ModelType(self.type))

    @property
    def n_lags(self) -> int:
        return self.w.shape[1]

    @property
    def n_inputs(self) -> int:
        return self.w.shape[0]

    @property
    def n_outputs(self) -> int:
        return self.w.shape[2]

    def save(self, path: Union[str, Path]) -> Path:
        """Save the model to a ``.npz`` file."""
        path = Path(path)
        if path.suffix != ".npz":
            path = path.with_name(path.name + ".npz")
        path.parent.mkdir(parents=True, exist_ok=True)
        np.savez(
            path,
            w=self.w,
            b=self.b,
            t=self.t,
            fs=self.fs,
            dir=int(self.dir),
            type=self.type.value,
        )
        return path

    @classmethod
    def load(cls, path: Union[str, Path]) -> "TRFModel":
        """Load a model saved with :meth:`save`."""
        with np.load(Path(path), allow_pickle=False) as data:
            return cls(
                w=data["w"],
                b=data["b"],
                t=data["t"],
                fs=float(data["fs"]),
                dir=int(data["dir"]),
                type=str(data["type"]),
            )

    def __repr__(self) -> str:
        return (
            f"TRFModel({self.type.value}, dir={int(self.dir)}, fs={self.fs:g}Hz, "
            f"w={self.w.shape}, t=[{self.t[0]:g}, {self.t[-1]:g}]ms)"
        )
