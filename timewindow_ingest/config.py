"""
Configuration models and YAML I/O for timewindow-ingest.

This module defines the Pydantic models that carry every policy decision the
parsing core needs, plus helpers for loading and saving them as YAML.

Key models:
- RangeBounds: Minimum/maximum span accepted by ``explicit_range()``.
- IngestConfig: Top-level batch config (uniform window, range bounds,
  detection sample size, error display limit).

Key functions:
- load_config(path) -> IngestConfig: Load and validate from YAML.
- save_config(config, path): Serialize to YAML.

Why explicit config values:
- The core reads no environment variables or globals. Two callers with
  different policies (general analysis vs. targeted search) pass two
  different ``IngestConfig`` objects and get reproducible results.
- Pydantic gives strict validation and clear error messages; YAML is
  human-editable.
"""

from __future__ import annotations

import logging
from pathlib import Path

import yaml
from pydantic import BaseModel, ConfigDict, Field, model_validator

from timewindow_ingest.exceptions import ConfigValidationError

logger = logging.getLogger(__name__)

# Longest window / duration a tabular row may request (1 hour)
MAX_ROW_WINDOW_SECONDS = 3600


class RangeBounds(BaseModel):
    """Inclusive span limits for ``explicit_range()``.

    ``max_seconds=None`` means unbounded.
    """

    model_config = ConfigDict(frozen=True)

    min_seconds: int = Field(1, ge=1, description="Shortest accepted span in seconds")
    max_seconds: int | None = Field(
        MAX_ROW_WINDOW_SECONDS, description="Longest accepted span; None for no ceiling"
    )

    @model_validator(mode="after")
    def _check_order(self) -> RangeBounds:
        if self.max_seconds is not None and self.max_seconds < self.min_seconds:
            raise ValueError(
                f"max_seconds ({self.max_seconds}) must be >= min_seconds ({self.min_seconds})"
            )
        return self


class IngestConfig(BaseModel):
    """Top-level configuration for parsing a tabular timestamp batch.

    Maps 1:1 to the YAML config file.
    """

    model_config = ConfigDict(frozen=True)

    window_seconds: int | None = Field(
        None,
        ge=1,
        le=MAX_ROW_WINDOW_SECONDS,
        description="Uniform window for single-column input; required for that layout only",
    )
    range_bounds: RangeBounds = Field(
        default_factory=RangeBounds,
        description="Bounds applied to start/end rows",
    )
    sample_size: int = Field(3, ge=1, description="Rows sampled for layout detection")
    max_errors_shown: int = Field(
        3, ge=0, description="Row errors shown verbatim before summarising by count"
    )

    def with_overrides(self, **changes: object) -> IngestConfig:
        """Return a copy with ``changes`` applied and re-validated.

        Unlike ``model_copy(update=...)`` the result goes through the same
        field constraints as a freshly loaded config.

        Raises:
            pydantic.ValidationError: If an overridden value is out of range.
        """
        return IngestConfig.model_validate({**self.model_dump(), **changes})


def load_config(path: str | Path) -> IngestConfig:
    """Load and validate a YAML config file into an IngestConfig model.

    Raises:
        FileNotFoundError: If the config file does not exist.
        ConfigValidationError: If the file is empty or not a YAML mapping.
        pydantic.ValidationError: If the YAML content fails schema validation.
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")
    with open(path, "r", encoding="utf-8") as f:
        raw = yaml.safe_load(f)
    if raw is None:
        raise ConfigValidationError(f"Config file is empty: {path}")
    if not isinstance(raw, dict):
        raise ConfigValidationError(
            f"Config file must contain a mapping, got {type(raw).__name__}: {path}"
        )
    logger.info("Loaded config from %s", path)
    return IngestConfig.model_validate(raw)


def save_config(config: IngestConfig, path: str | Path) -> None:
    """Serialize an IngestConfig to YAML with a header comment."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    data = config.model_dump(mode="json")
    with open(path, "w", encoding="utf-8") as f:
        f.write("# timewindow-ingest configuration\n")
        f.write("# window_seconds is only needed for single-column input.\n\n")
        yaml.dump(data, f, default_flow_style=False, sort_keys=False)
    logger.info("Saved config to %s", path)
