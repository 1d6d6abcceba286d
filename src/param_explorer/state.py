"""Explorer session state.

The current dataset, period and metric live in one immutable
:class:`ExplorerState` value that is replaced as a unit, so no caller ever
sees a partially updated triple. Loads are tagged with a monotonically
increasing ticket; a completion whose ticket is not the latest issued is
discarded, so a slow earlier upload cannot overwrite a newer one.
"""

from __future__ import annotations

import itertools
import logging
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Iterable, Mapping, Optional

from .catalog import AVAILABLE_METRICS, DEFAULT_METRIC, validate_metric
from .config import ExplorerConfig
from .correlation import CorrelationAnalysis, analyze_period
from .errors import ExplorerError
from .loader import StrategyRecord, load_strategies_async, parse_strategies
from .periods import default_period, filter_by_period, list_periods


LOGGER = logging.getLogger(__name__)


@dataclass(frozen=True)
class ExplorerState:
    records: tuple[StrategyRecord, ...] = ()
    period: Optional[str] = None
    metric: str = DEFAULT_METRIC
    version: int = 0

    @property
    def periods(self) -> list[str]:
        return list_periods(self.records)

    @property
    def filtered(self) -> list[StrategyRecord]:
        return filter_by_period(self.records, self.period)


@dataclass(frozen=True)
class LoadTicket:
    sequence: int
    source: Optional[str] = None


class ExplorerSession:
    """Holds the active :class:`ExplorerState` and arbitrates uploads."""

    def __init__(
        self,
        config: Optional[ExplorerConfig] = None,
        catalog: Optional[Mapping[str, str]] = None,
    ):
        self.config = config or ExplorerConfig()
        self.catalog = dict(catalog) if catalog is not None else dict(AVAILABLE_METRICS)
        validate_metric(self.config.default_metric, self.catalog)

        self._state = ExplorerState(metric=self.config.default_metric)
        self._sequence = itertools.count(1)
        self._latest_ticket = 0

    @property
    def state(self) -> ExplorerState:
        return self._state

    def _replace(self, **changes) -> ExplorerState:
        self._state = replace(self._state, version=self._state.version + 1, **changes)
        return self._state

    # Loading

    def begin_load(self, source: Optional[str] = None) -> LoadTicket:
        ticket = LoadTicket(sequence=next(self._sequence), source=source)
        self._latest_ticket = ticket.sequence
        return ticket

    def is_current(self, ticket: LoadTicket) -> bool:
        return ticket.sequence == self._latest_ticket

    def complete_load(self, ticket: LoadTicket, records: Iterable[StrategyRecord]) -> bool:
        """Install loaded records if ``ticket`` is still the latest load.

        Returns False (state untouched) for a superseded load.
        """
        if not self.is_current(ticket):
            LOGGER.info(
                "Discarding stale load #%d (%s); latest is #%d",
                ticket.sequence, ticket.source or "<text>", self._latest_ticket,
            )
            return False

        records = tuple(records)
        # Period resets to the first record's; the chosen metric is kept.
        # An empty load clears the period instead of keeping the old
        # selection, which no longer names any loaded record.
        self._replace(records=records, period=default_period(records))
        LOGGER.info("Active dataset: %d strategies, period=%s", len(records), self._state.period)
        return True

    def fail_load(self, ticket: LoadTicket, error: Exception) -> None:
        LOGGER.warning("Load #%d (%s) failed: %s", ticket.sequence, ticket.source or "<text>", error)

    def load_text(self, text: str | bytes, source: Optional[str] = None) -> ExplorerState:
        """Parse and install ``text`` synchronously.

        Raises ParseError without touching the current state.
        """
        ticket = self.begin_load(source)
        try:
            records = parse_strategies(text, source=source)
        except ExplorerError as exc:
            self.fail_load(ticket, exc)
            raise
        self.complete_load(ticket, records)
        return self._state

    async def load_file(self, path: str | Path) -> bool:
        """Read and install a strategies file.

        Returns True if this load became the active dataset, False if a newer
        load was issued while it was pending. Raises ParseError on malformed
        input of the current load; state is left intact.
        """
        ticket = self.begin_load(str(path))
        try:
            records = await load_strategies_async(path)
        except ExplorerError as exc:
            self.fail_load(ticket, exc)
            if not self.is_current(ticket):
                return False
            raise
        return self.complete_load(ticket, records)

    # Selection

    def select_period(self, key: Optional[str]) -> ExplorerState:
        return self._replace(period=key)

    def select_metric(self, metric: str) -> ExplorerState:
        return self._replace(metric=validate_metric(metric, self.catalog))

    # Derived views

    @property
    def periods(self) -> list[str]:
        return self._state.periods

    def analysis(self) -> CorrelationAnalysis:
        """Engine output for the current state snapshot."""
        state = self._state
        return analyze_period(
            state.filtered,
            state.metric,
            schema=self.config.schema,
            skip_missing=self.config.skip_missing,
            catalog=self.catalog,
        )
