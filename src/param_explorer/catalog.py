"""Metric catalog: the fixed set of selectable backtest result metrics.

The catalog is static configuration, never derived from uploaded data. The
built-in mapping can be overridden from ``config/metrics.yaml``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Mapping, Optional

import yaml

from .errors import UnknownMetricError


# Metric id -> display label, in selector order.
AVAILABLE_METRICS: dict[str, str] = {
    "trades": "Trades",
    "avg_profit": "Avg Profit %",
    "total_profit_usdt": "Tot Profit USDT",
    "total_profit_percent": "Tot Profit %",
    "wins": "Wins",
    "draws": "Draws",
    "losses": "Losses",
    "win_rate": "Win %",
    "drawdown": "Drawdown %",
}

DEFAULT_METRIC = "total_profit_percent"

# Default path for the metric catalog config, relative to project root.
_DEFAULT_CATALOG_PATH = Path(__file__).resolve().parents[2] / "config" / "metrics.yaml"


def load_metric_catalog(config_path: Path | str | None = None) -> dict[str, str]:
    """Load the metric catalog from YAML, falling back to the built-in mapping.

    The YAML holds a single ``metrics`` mapping of id -> label. Order in the
    file is the order offered to the user.
    """
    if config_path is None:
        config_path = _DEFAULT_CATALOG_PATH
    config_path = Path(config_path)
    if not config_path.exists():
        return dict(AVAILABLE_METRICS)

    with open(config_path, encoding="utf-8") as f:
        raw = yaml.safe_load(f) or {}

    metrics = raw.get("metrics") or {}
    if not isinstance(metrics, dict) or not metrics:
        raise ValueError(f"{config_path}: 'metrics' must be a non-empty mapping")
    return {str(k): str(v) for k, v in metrics.items()}


def validate_metric(metric: str, catalog: Optional[Mapping[str, str]] = None) -> str:
    """Return ``metric`` unchanged if selectable, else raise UnknownMetricError."""
    catalog = AVAILABLE_METRICS if catalog is None else catalog
    if metric not in catalog:
        raise UnknownMetricError(metric, list(catalog))
    return metric


def metric_label(metric: str, catalog: Optional[Mapping[str, str]] = None) -> str:
    catalog = AVAILABLE_METRICS if catalog is None else catalog
    return catalog[validate_metric(metric, catalog)]
