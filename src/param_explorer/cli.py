"""Command-line interface for the strategy parameter explorer.

Usage:
    param-explorer metrics
    param-explorer periods results.json
    param-explorer stats results.json --metric win_rate
    param-explorer series results.json --format text
    param-explorer plot results.json --period "2024-01-01 to 2024-01-31" -o out.png
"""

import asyncio
import logging
from dataclasses import replace
from pathlib import Path
from typing import Optional

import typer

from .catalog import load_metric_catalog
from .config import ExplorerConfig, load_config
from .correlation import series_to_frame
from .errors import ExplorerError, UnknownMetricError
from .periods import period_counts
from .reporting import format_point_tooltip, format_statistics
from .state import ExplorerSession


LOGGER = logging.getLogger(__name__)

app = typer.Typer(
    name="param-explorer",
    help="Explore how strategy parameters correlate with backtest metrics",
    add_completion=False,
)


@app.callback()
def main_options(
    ctx: typer.Context,
    config: Optional[str] = typer.Option(
        None,
        "--config", "-c",
        help="Path to configuration file (YAML)",
    ),
    log_level: str = typer.Option(
        "WARNING",
        "--log-level",
        help="DEBUG, INFO, WARNING or ERROR",
    ),
):
    """Load configuration and set up logging."""
    level = log_level.upper()
    if level not in ("DEBUG", "INFO", "WARNING", "ERROR"):
        raise typer.BadParameter(f"Invalid log level: {log_level}", param_hint="--log-level")
    logging.basicConfig(level=getattr(logging, level), format="%(levelname)s %(message)s")

    try:
        cfg = load_config(config)
        catalog = load_metric_catalog(cfg.metrics_path)
    except (OSError, ValueError) as exc:
        raise typer.BadParameter(str(exc), param_hint="--config")
    if cfg.default_metric not in catalog:
        raise typer.BadParameter(
            f"default_metric '{cfg.default_metric}' is not in the metric catalog",
            param_hint="--config",
        )
    ctx.obj = {"config": cfg, "catalog": catalog}


def _open_session(ctx: typer.Context, file: Path, period: Optional[str], metric: Optional[str]) -> ExplorerSession:
    """Load ``file`` and apply period/metric selections, exiting on user errors."""
    cfg: ExplorerConfig = ctx.obj["config"]
    session = ExplorerSession(cfg, ctx.obj["catalog"])
    try:
        asyncio.run(session.load_file(file))
    except ExplorerError as exc:
        typer.echo(f"Error parsing JSON file: {exc}", err=True)
        raise typer.Exit(code=1)

    if period is not None:
        if period not in session.periods:
            raise typer.BadParameter(
                f"No strategies for period '{period}'. "
                f"Available periods: {'; '.join(session.periods) or '(none)'}",
                param_hint="--period",
            )
        session.select_period(period)

    if metric is not None:
        try:
            session.select_metric(metric)
        except UnknownMetricError as exc:
            raise typer.BadParameter(str(exc), param_hint="--metric")

    LOGGER.debug("Period=%s metric=%s", session.state.period, session.state.metric)
    return session


FILE_ARG = typer.Argument(..., exists=True, dir_okay=False, help="Strategies JSON file")
PERIOD_OPT = typer.Option(None, "--period", "-p", help="Test period key (default: first record's period)")
METRIC_OPT = typer.Option(None, "--metric", "-m", help="Metric id (see `metrics`)")


@app.command()
def metrics(ctx: typer.Context):
    """List selectable metrics."""
    for metric_id, label in ctx.obj["catalog"].items():
        typer.echo(f"{metric_id:<24} {label}")


@app.command()
def periods(ctx: typer.Context, file: Path = FILE_ARG):
    """List test periods found in FILE with strategy counts."""
    session = _open_session(ctx, file, None, None)
    counts = period_counts(session.state.records)
    if counts.empty:
        typer.echo("No strategies loaded.")
        return
    for key, n in counts.items():
        marker = "*" if key == session.state.period else " "
        typer.echo(f"{marker} {key}  ({n} strategies in this period)")


@app.command()
def stats(
    ctx: typer.Context,
    file: Path = FILE_ARG,
    period: Optional[str] = PERIOD_OPT,
    metric: Optional[str] = METRIC_OPT,
    fmt: str = typer.Option("text", "--format", "-f", help="text, csv or latex"),
):
    """Show parameter statistics for one period."""
    if fmt not in ("text", "csv", "latex"):
        raise typer.BadParameter(f"Unknown format: {fmt}", param_hint="--format")
    session = _open_session(ctx, file, period, metric)
    state = session.state
    analysis = session.analysis()
    label = session.catalog[state.metric]

    if fmt == "text":
        typer.echo(f"Parameter Statistics for {state.period} ({len(state.filtered)} strategies)")
    typer.echo(format_statistics(analysis.statistics, label, fmt, decimals=session.config.param_decimals))


@app.command()
def series(
    ctx: typer.Context,
    file: Path = FILE_ARG,
    period: Optional[str] = PERIOD_OPT,
    metric: Optional[str] = METRIC_OPT,
    fmt: str = typer.Option("csv", "--format", "-f", help="csv, or text for one line per point"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Write here instead of stdout"),
):
    """Dump correlation points (parameter, strategy, value, metric)."""
    if fmt not in ("csv", "text"):
        raise typer.BadParameter(f"Unknown format: {fmt}", param_hint="--format")
    session = _open_session(ctx, file, period, metric)
    analysis = session.analysis()

    if fmt == "text":
        cfg = session.config
        label = session.catalog[analysis.metric]
        lines = []
        for s in analysis.series:
            lines.append(f"{s.parameter} vs {label}")
            for point in s.data:
                tooltip = format_point_tooltip(
                    point,
                    s.parameter,
                    label,
                    param_decimals=cfg.param_decimals,
                    metric_decimals=cfg.metric_decimals,
                )
                lines.append("  " + " | ".join(tooltip))
        text = "\n".join(lines)
        if output is None:
            typer.echo(text)
            return
        output.parent.mkdir(parents=True, exist_ok=True)
        output.write_text(text + "\n", encoding="utf-8")
        typer.echo(f"Wrote {sum(len(s.data) for s in analysis.series)} points to {output}")
        return

    df = series_to_frame(analysis.series)
    if output is None:
        typer.echo(df.to_csv(index=False), nl=False)
        return
    output.parent.mkdir(parents=True, exist_ok=True)
    df.to_csv(output, index=False)
    typer.echo(f"Wrote {len(df)} points to {output}")


@app.command()
def plot(
    ctx: typer.Context,
    file: Path = FILE_ARG,
    period: Optional[str] = PERIOD_OPT,
    metric: Optional[str] = METRIC_OPT,
    output: Path = typer.Option(
        Path("parameter_correlation.png"),
        "--output", "-o",
        help="Figure path (.png or .pdf)",
    ),
    columns: Optional[int] = typer.Option(None, "--columns", min=1, help="Panels per row"),
):
    """Write the parameter-vs-metric scatter grid."""
    from .visualization import CorrelationVisualizer

    session = _open_session(ctx, file, period, metric)
    if columns is not None:
        session.config = replace(session.config, figure_columns=columns)
    analysis = session.analysis()
    if analysis.is_empty:
        typer.echo("No strategies in the selected period; nothing to plot.", err=True)
        raise typer.Exit(code=1)

    viz = CorrelationVisualizer(output.parent, columns=session.config.figure_columns)
    path = viz.plot_parameter_grid(
        analysis.series,
        session.catalog[session.state.metric],
        period=session.state.period,
        statistics=analysis.statistics,
        output_path=output,
    )
    typer.echo(f"Saved {len(analysis.series)} panels to {path}")


def main() -> None:
    """Entrypoint for the console script."""
    app()


if __name__ == "__main__":
    main()
