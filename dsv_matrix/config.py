"""
Configuration model and YAML I/O for dsv-matrix.

``LoaderConfig`` collects the per-load options that are not derived from
the file itself: orientation, element dtype, text encoding and which
mapping policy to build. The delimiter is deliberately absent: it always
comes from the file kind (see detect.py).

Key functions:
- load_config(path) -> LoaderConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Literal

import numpy as np
import yaml
from pydantic import BaseModel, Field, field_validator, model_validator

from dsv_matrix.convert import resolve_dtype
from dsv_matrix.exceptions import ConfigValidationError
from dsv_matrix.mapping import DatasetMapper, IncrementPolicy, MapPolicy, MissingPolicy, NumericPolicy

logger = logging.getLogger(__name__)


class LoaderConfig(BaseModel):
    """Options for one load."""

    transpose: bool = Field(
        True, description="If True, each line of the file becomes a matrix column"
    )
    dtype: str = Field("float64", description="numpy dtype of the loaded matrix")
    encoding: str = Field("utf-8-sig", description="Text encoding of the input file")
    policy: Literal["numeric", "increment", "missing"] = Field(
        "numeric", description="Mapping policy used to convert tokens"
    )
    force_all_mappings: bool = Field(
        False, description="increment policy: treat every dimension as categorical"
    )
    missing_values: list[str] = Field(
        default_factory=list, description="missing policy: tokens that become NaN"
    )

    @field_validator("dtype")
    @classmethod
    def _check_dtype(cls, value: str) -> str:
        try:
            return str(resolve_dtype(value))
        except ConfigValidationError as exc:
            raise ValueError(str(exc)) from exc

    @model_validator(mode="after")
    def _check_missing_dtype(self) -> LoaderConfig:
        """NaN only exists for float dtypes."""
        if self.policy == "missing" and np.dtype(self.dtype).kind != "f":
            raise ValueError(
                f"policy 'missing' requires a float dtype, got '{self.dtype}'"
            )
        return self

    def build_policy(self) -> MapPolicy:
        if self.policy == "increment":
            return IncrementPolicy(force_all_mappings=self.force_all_mappings)
        if self.policy == "missing":
            return MissingPolicy(self.missing_values)
        return NumericPolicy()

    def build_mapper(self) -> DatasetMapper:
        """Return a fresh mapper (dimensionality 0) for this config."""
        return DatasetMapper(self.build_policy())


def load_config(path: str | Path) -> LoaderConfig:
    """Load and validate a YAML file into a LoaderConfig.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty.
        pydantic.ValidationError: If the YAML content fails validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    logger.info("Loaded config from %s", path)
    return LoaderConfig.model_validate(raw)


def save_config(config: LoaderConfig, path: str | Path) -> None:
    """Serialize a LoaderConfig to YAML."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# dsv-matrix loader configuration\n\n")
        yaml.dump(data, f, allow_unicode=True, default_flow_style=False, sort_keys=False)
    logger.info("Saved config to %s", path)
