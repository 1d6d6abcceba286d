"""Smoke tests for the parameter correlation figures."""
from __future__ import annotations

from pathlib import Path

import pytest

from param_explorer.correlation import analyze_period
from param_explorer.loader import StrategyRecord, TestPeriod
from param_explorer.visualization import CorrelationVisualizer, best_point_index


def _analysis(n_params: int = 3):
    period = TestPeriod("2024-01-01", "2024-01-31")
    records = [
        StrategyRecord(
            f"s{i}",
            period,
            {f"p{j}": float(i * (j + 1)) for j in range(n_params)},
            {"total_profit_percent": float((i * 7) % 5)},
        )
        for i in range(6)
    ]
    return analyze_period(records, "total_profit_percent")


class TestCorrelationVisualizer:
    def test_grid_written(self, tmp_path: Path) -> None:
        analysis = _analysis(3)
        viz = CorrelationVisualizer(tmp_path)
        path = viz.plot_parameter_grid(
            analysis.series,
            "Tot Profit %",
            period="2024-01-01 to 2024-01-31",
            statistics=analysis.statistics,
        )
        assert path == tmp_path / "parameter_correlation.png"
        assert path.stat().st_size > 0

    def test_pdf_output_path(self, tmp_path: Path) -> None:
        analysis = _analysis(1)
        out = tmp_path / "nested" / "grid.pdf"
        path = CorrelationVisualizer(tmp_path, columns=3).plot_parameter_grid(
            analysis.series, "Tot Profit %", output_path=out
        )
        assert path == out
        assert out.exists()

    def test_empty_series_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            CorrelationVisualizer(tmp_path).plot_parameter_grid([], "Tot Profit %")

    def test_columns_validated(self, tmp_path: Path) -> None:
        with pytest.raises(ValueError):
            CorrelationVisualizer(tmp_path, columns=0)


class TestBestPointIndex:
    def test_single_point_marked_when_values_tie(self) -> None:
        period = TestPeriod("2024-01-01", "2024-01-31")
        records = [
            StrategyRecord(f"s{i}", period, {"x": 0.1}, {"total_profit_percent": float(i)})
            for i in range(4)
        ]
        analysis = analyze_period(records, "total_profit_percent")
        (series,) = analysis.series
        (stats,) = analysis.statistics
        assert best_point_index(series, stats) == 3
        assert series.data[3].strategy_id == "s3"

    def test_first_maximum_marked(self) -> None:
        period = TestPeriod("2024-01-01", "2024-01-31")
        records = [
            StrategyRecord("a", period, {"x": 1.0}, {"total_profit_percent": 2.0}),
            StrategyRecord("b", period, {"x": 1.0}, {"total_profit_percent": 5.0}),
            StrategyRecord("c", period, {"x": 1.0}, {"total_profit_percent": 5.0}),
        ]
        analysis = analyze_period(records, "total_profit_percent")
        assert best_point_index(analysis.series[0], analysis.statistics[0]) == 1

    def test_nan_best_value_not_marked(self) -> None:
        period = TestPeriod("2024-01-01", "2024-01-31")
        records = [
            StrategyRecord("a", period, {"x": 1.0}, {"total_profit_percent": 1.0}),
            StrategyRecord("b", period, {}, {"total_profit_percent": 9.0}),
        ]
        analysis = analyze_period(records, "total_profit_percent")
        assert best_point_index(analysis.series[0], analysis.statistics[0]) is None

    def test_no_statistics(self) -> None:
        (series,) = _analysis(1).series
        assert best_point_index(series, None) is None
