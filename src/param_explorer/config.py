"""Explorer settings loaded from YAML."""

from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Optional

import yaml

from .catalog import DEFAULT_METRIC


@dataclass(frozen=True)
class ExplorerConfig:
    """Explorer defaults; every field may be set from YAML."""

    # Metric selected before the user picks one
    default_metric: str = DEFAULT_METRIC

    # Parameter universe: "first" record's keys, or "union" across records
    schema: str = "first"

    # If True, NaN values are dropped per aggregate instead of propagating.
    skip_missing: bool = False

    # Display precision for parameter values and metric values
    param_decimals: int = 4
    metric_decimals: int = 2

    # Scatter grid layout
    figure_columns: int = 2

    # Optional metric catalog override (YAML); None uses config/metrics.yaml
    metrics_path: Optional[str] = None


def load_config(config_path: str | Path | None) -> ExplorerConfig:
    """Load explorer configuration from a YAML file.

    A missing path (or ``None``) yields the defaults. Unknown keys raise
    ``ValueError``.
    """
    if config_path is None:
        return ExplorerConfig()
    config_path = Path(config_path)
    if not config_path.exists():
        return ExplorerConfig()

    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    section = raw.get("explorer", raw)
    if not isinstance(section, dict):
        raise ValueError(f"{config_path}: expected a mapping")

    known = {f.name for f in fields(ExplorerConfig)}
    unknown = sorted(set(section) - known)
    if unknown:
        raise ValueError(f"{config_path}: unknown config key(s): {', '.join(unknown)}")
    if section.get("schema", "first") not in ("first", "union"):
        raise ValueError(f"{config_path}: schema must be 'first' or 'union'")
    return ExplorerConfig(**section)
