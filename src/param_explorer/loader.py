"""Loader: turn uploaded backtest JSON into immutable strategy records.

Expected input shape::

    {"strategies": [
        {"id": "...",
         "test_period": {"start_date": "...", "end_date": "..."},
         "params": {"<name>": <number>, ...},
         "results": {"<metric>": <number>, ...}},
        ...
    ]}

A missing ``strategies`` field is an empty upload, not an error. Numeric
fields are parsed best-effort: anything that is not a number becomes NaN.
"""

from __future__ import annotations

import asyncio
import json
import logging
import math
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Mapping

from .errors import ParseError


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class TestPeriod:
    """Backtest date range, kept as the raw strings from the upload."""

    __test__ = False  # not a pytest test class

    start_date: str
    end_date: str

    @property
    def key(self) -> str:
        return f"{self.start_date} to {self.end_date}"


@dataclass(frozen=True)
class StrategyRecord:
    """One backtested parameter set and its results."""

    id: str
    test_period: TestPeriod
    params: Mapping[str, float] = field(default_factory=dict)
    results: Mapping[str, float] = field(default_factory=dict)

    def __post_init__(self) -> None:
        # Freeze the mappings so records stay immutable once parsed.
        object.__setattr__(self, "params", MappingProxyType(dict(self.params)))
        object.__setattr__(self, "results", MappingProxyType(dict(self.results)))

    @property
    def period_key(self) -> str:
        return self.test_period.key


def _to_float(value: Any) -> float:
    if isinstance(value, bool) or value is None:
        return math.nan
    try:
        return float(value)
    except OverflowError:
        # Integer literal beyond float range
        return math.inf if value > 0 else -math.inf
    except (TypeError, ValueError):
        return math.nan


def _numeric_mapping(raw: Any) -> dict[str, float]:
    if not isinstance(raw, dict):
        return {}
    return {str(k): _to_float(v) for k, v in raw.items()}


def _parse_record(raw: Any, index: int, source: str | None) -> StrategyRecord:
    if not isinstance(raw, dict):
        raise ParseError(f"strategy #{index} is not an object", source)

    period = raw.get("test_period")
    if not isinstance(period, dict) or "start_date" not in period or "end_date" not in period:
        raise ParseError(f"strategy #{index} has no usable test_period", source)
    if "id" not in raw:
        raise ParseError(f"strategy #{index} has no id", source)

    return StrategyRecord(
        id=str(raw["id"]),
        test_period=TestPeriod(
            start_date=str(period["start_date"]),
            end_date=str(period["end_date"]),
        ),
        params=_numeric_mapping(raw.get("params")),
        results=_numeric_mapping(raw.get("results")),
    )


def parse_strategies(text: str | bytes, source: str | None = None) -> list[StrategyRecord]:
    """Parse uploaded text into strategy records.

    Args:
        text: File contents (UTF-8 text or bytes)
        source: Optional name used in error messages

    Returns:
        Records in upload order; empty if ``strategies`` is absent

    Raises:
        ParseError: malformed JSON or unexpected top-level shape
    """
    if isinstance(text, bytes):
        try:
            text = text.decode("utf-8")
        except UnicodeDecodeError as exc:
            raise ParseError(f"not valid UTF-8 ({exc})", source) from exc

    try:
        data = json.loads(text)
    except ValueError as exc:  # JSONDecodeError, or int literal over the digit limit
        LOGGER.warning("Error parsing JSON%s: %s", f" from {source}" if source else "", exc)
        raise ParseError(f"invalid JSON ({exc})", source) from exc

    if not isinstance(data, dict):
        raise ParseError("top-level JSON value must be an object", source)

    raw_strategies = data.get("strategies")
    if raw_strategies is None:
        LOGGER.info("No 'strategies' field%s; treating as empty", f" in {source}" if source else "")
        return []
    if not isinstance(raw_strategies, list):
        raise ParseError("'strategies' must be a list", source)

    records = [_parse_record(raw, i, source) for i, raw in enumerate(raw_strategies)]
    LOGGER.info("Loaded %d strategies%s", len(records), f" from {source}" if source else "")
    return records


def _read_text(path: Path) -> str:
    try:
        return path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as exc:
        raise ParseError(f"cannot read file ({exc})", str(path)) from exc


def load_strategies(path: str | Path) -> list[StrategyRecord]:
    """Read and parse a strategies JSON file."""
    path = Path(path)
    return parse_strategies(_read_text(path), source=str(path))


async def load_strategies_async(path: str | Path) -> list[StrategyRecord]:
    """Async variant of :func:`load_strategies`.

    The file read runs in a worker thread and is the only suspension point;
    cancelling the awaiting task abandons the load.
    """
    path = Path(path)
    text = await asyncio.to_thread(_read_text, path)
    return parse_strategies(text, source=str(path))
