"""
Configuration for TRF training.

String-valued options accept unambiguous, case-sensitive prefixes of
their canonical values and are normalized before use.
"""

from pathlib import Path
from typing import Any, Dict, Optional

import numpy as np
from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from eegtrf.core.models import ModelType, RegularizationMethod
from eegtrf.core.validation import InvalidArgument, match_option


class TrainConfig(BaseModel):
    """Optional parameters of a training call."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    dim: int = Field(
        default=1,
        description="Axis of each table holding observations: 1=rows, 2=columns"
    )
    method: RegularizationMethod = Field(
        default=RegularizationMethod.RIDGE,
        description="Regularization method: ridge, Tikhonov, ols"
    )
    type: ModelType = Field(
        default=ModelType.MULTI,
        description="Model type: multi (joint lags) or single (one model per lag)"
    )
    split: int = Field(
        default=1,
        ge=1,
        description="Number of segments per trial when accumulating covariances"
    )
    zeropad: bool = Field(
        default=True,
        description="Zero-pad the outer rows of the design matrix (False deletes them)"
    )
    n_jobs: int = Field(
        default=1,
        ge=1,
        description="Worker threads for single-lag solves"
    )

    @field_validator("dim", mode="before")
    @classmethod
    def validate_dim(cls, v):
        if isinstance(v, (bool, np.bool_)) or v not in (1, 2):
            raise ValueError("It must be a positive integer scalar within indexing range.")
        return int(v)

    @field_validator("method", mode="before")
    @classmethod
    def validate_method(cls, v):
        if isinstance(v, RegularizationMethod):
            return v
        return match_option(v, [m.value for m in RegularizationMethod], "method")

    @field_validator("type", mode="before")
    @classmethod
    def validate_type(cls, v):
        if isinstance(v, ModelType):
            return v
        return match_option(v, [t.value for t in ModelType], "type")

    @field_validator("split", "n_jobs", mode="before")
    @classmethod
    def validate_positive_int(cls, v):
        if isinstance(v, (bool, np.bool_)):
            raise ValueError("It must be a positive integer scalar.")
        return v

    @field_validator("zeropad", mode="before")
    @classmethod
    def validate_zeropad(cls, v):
        if isinstance(v, (bool, np.bool_)):
            return bool(v)
        if isinstance(v, (int, float, np.integer, np.floating)) and v in (0, 1):
            return bool(v)
        raise ValueError("It must be a numeric scalar (0,1) or logical.")

    @classmethod
    def from_options(cls, **options: Any) -> "TrainConfig":
        """Build a config from keyword options, raising InvalidArgument."""
        try:
            return cls(**options)
        except ValidationError as e:
            raise InvalidArgument(_format_errors(e)) from e

    @classmethod
    def from_yaml(cls, config_path: Path) -> "TrainConfig":
        """Load TrainConfig from YAML file.

        Parameters
        ----------
        config_path : Path
            Path to YAML configuration file

        Returns
        -------
        TrainConfig
            Loaded and validated configuration
        """
        import yaml
        with open(config_path) as f:
            data = yaml.safe_load(f) or {}
        return cls.from_options(**data)

    def to_yaml(self, path: Path) -> None:
        """Save configuration to YAML file."""
        import yaml
        with open(path, "w") as f:
            yaml.dump(self.model_dump(mode="json", by_alias=True), f, default_flow_style=False)


class TRFModuleConfig(TrainConfig):
    """Training configuration including the positional fit arguments."""

    fs: Optional[float] = Field(
        default=None,
        description="Sample rate (Hz); taken from MNE objects when omitted"
    )
    direction: int = Field(default=1, description="1=forward (encoding), -1=backward (decoding)")
    tmin: float = Field(..., description="Minimum time lag (ms)")
    tmax: float = Field(..., description="Maximum time lag (ms)")
    lam: float = Field(default=1.0, ge=0, alias="lambda", description="Regularization strength")

    model_config = ConfigDict(extra="forbid", frozen=True, populate_by_name=True)

    def train_options(self) -> Dict[str, Any]:
        """Options accepted by :func:`eegtrf.trf.train.train`."""
        return self.model_dump(include=set(TrainConfig.model_fields))


def _format_errors(error: ValidationError) -> str:
    """Flatten a pydantic ValidationError into one message."""
    messages = []
    for item in error.errors():
        field = ".".join(str(part) for part in item["loc"]) or "options"
        messages.append(f"{field}: {item['msg']}")
    return "; ".join(messages)
