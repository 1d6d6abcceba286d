"""Tests for YAML configuration and the metric catalog."""
from __future__ import annotations

from pathlib import Path

import pytest

from param_explorer.catalog import (
    AVAILABLE_METRICS,
    DEFAULT_METRIC,
    load_metric_catalog,
    metric_label,
    validate_metric,
)
from param_explorer.config import ExplorerConfig, load_config
from param_explorer.errors import UnknownMetricError


class TestMetricCatalog:
    def test_builtin_catalog(self) -> None:
        assert list(AVAILABLE_METRICS) == [
            "trades",
            "avg_profit",
            "total_profit_usdt",
            "total_profit_percent",
            "wins",
            "draws",
            "losses",
            "win_rate",
            "drawdown",
        ]
        assert DEFAULT_METRIC in AVAILABLE_METRICS

    def test_shipped_yaml_matches_builtin(self) -> None:
        assert load_metric_catalog() == AVAILABLE_METRICS

    def test_missing_file_falls_back(self, tmp_path: Path) -> None:
        assert load_metric_catalog(tmp_path / "missing.yaml") == AVAILABLE_METRICS

    def test_yaml_override_keeps_order(self, tmp_path: Path) -> None:
        path = tmp_path / "metrics.yaml"
        path.write_text("metrics:\n  sharpe: Sharpe\n  trades: Trades\n", encoding="utf-8")
        catalog = load_metric_catalog(path)
        assert list(catalog.items()) == [("sharpe", "Sharpe"), ("trades", "Trades")]

    def test_empty_yaml_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "metrics.yaml"
        path.write_text("metrics: {}\n", encoding="utf-8")
        with pytest.raises(ValueError):
            load_metric_catalog(path)

    def test_validate_metric(self) -> None:
        assert validate_metric("wins") == "wins"
        with pytest.raises(UnknownMetricError) as exc_info:
            validate_metric("avg_duration")
        assert exc_info.value.metric == "avg_duration"
        assert "drawdown" in exc_info.value.available

    def test_metric_label(self) -> None:
        assert metric_label("win_rate") == "Win %"
        assert metric_label("sharpe", {"sharpe": "Sharpe"}) == "Sharpe"


class TestLoadConfig:
    def test_none_is_default(self) -> None:
        assert load_config(None) == ExplorerConfig()

    def test_missing_file_is_default(self, tmp_path: Path) -> None:
        assert load_config(tmp_path / "nope.yaml") == ExplorerConfig()

    def test_explorer_section(self, tmp_path: Path) -> None:
        path = tmp_path / "cfg.yaml"
        path.write_text("explorer:\n  default_metric: wins\n  schema: union\n  figure_columns: 3\n", encoding="utf-8")
        cfg = load_config(path)
        assert cfg.default_metric == "wins"
        assert cfg.schema == "union"
        assert cfg.figure_columns == 3
        assert cfg.skip_missing is False

    def test_flat_mapping(self, tmp_path: Path) -> None:
        path = tmp_path / "cfg.yaml"
        path.write_text("skip_missing: true\n", encoding="utf-8")
        assert load_config(path).skip_missing is True

    def test_unknown_key_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "cfg.yaml"
        path.write_text("explorer:\n  colour: blue\n", encoding="utf-8")
        with pytest.raises(ValueError, match="colour"):
            load_config(path)

    def test_bad_schema_rejected(self, tmp_path: Path) -> None:
        path = tmp_path / "cfg.yaml"
        path.write_text("explorer:\n  schema: intersection\n", encoding="utf-8")
        with pytest.raises(ValueError, match="schema"):
            load_config(path)

    def test_shipped_default_yaml(self) -> None:
        path = Path(__file__).resolve().parents[1] / "config" / "default.yaml"
        assert load_config(path) == ExplorerConfig()
